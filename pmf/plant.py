# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import datetime

from .traitlets import Float, Int, Instance, Enum, Unicode, Dict, Any
from .decorators import prepare_states
from .base import ParamTemplate, StatesTemplate, SimulationObject
from .organs import GenericOrgan
from . import signals
from . import exceptions as exc


class Plant(SimulationObject):
    """由若干通用器官组成的植株的顶层对象。

    Plant 负责接收农事管理发送的生命周期信号并转发给所有器官，
    统计播种后和出苗后的天数，并汇总器官的重量和氮量。每天的干物质和
    氮的分配不在这里完成：`do_potential_growth()` 返回各器官当天的事务，
    由外部的分配器处理后再交给 `do_actual_growth()`。

    参数通过 parameter provider 给出，形式为::

        {"CropType": "wheat",
         "Organs": {"Leaf": {...器官参数...},
                    "Stem": {...},
                    ...}}

    器官按参数中给出的顺序创建。

    **状态变量:**

    =======  =============================================  ====  =======
     名称     描述                                           Pbl   单位
    =======  =============================================  ====  =======
    DAS      播种后天数                                     Y     d
    DAE      出苗后天数                                     Y     d
    PlantWt  所有器官的总重量（活体和死亡）                   Y     g m-2
    PlantN   所有器官的总氮量（活体和死亡）                   Y     g m-2
    DOS      播种日期                                       N     -
    DOE      出苗日期                                       N     -
    DOF      结束日期（在 `finalize()` 时写入）               N     -
    =======  =============================================  ====  =======

    **处理的信号:**

        * COMMENCING: 清空所有器官
        * PLANT_SOWING: 播种，器官固定转化效率
        * PLANT_EMERGING: 出苗，器官初始化活体库
        * PLANT_ENDING: 所有生物量进入地表残体
        * REMOVE_BIOMASS: 从一个器官移除生物量

    :param day: 模拟开始日期
    :param kiosk: VariableKiosk
    :param parvalues: parameter provider 或具有 CropType 和 Organs 的字典
    :param residue_sink: 地表残体库，传递给所有器官
    """

    organs = Dict()
    crop_type = Unicode()
    residue_sink = Any()
    phase = Enum(["uninitialized", "sown", "emerged", "ended"])

    class Parameters(ParamTemplate):
        CropType = Unicode()
        Organs = Dict()

        _defaults = {"CropType": ""}

    class StateVariables(StatesTemplate):
        DAS = Int()
        DAE = Int()
        PlantWt = Float()
        PlantN = Float()
        DOS = Instance(datetime.date)
        DOE = Instance(datetime.date)
        DOF = Instance(datetime.date)

    def initialize(self, day, kiosk, parvalues, residue_sink=None):

        self.params = self.Parameters(parvalues)
        self.crop_type = self.params.CropType
        self.residue_sink = residue_sink
        if not self.params.Organs:
            msg = "No organs defined for plant '%s'." % self.crop_type
            raise exc.ParameterError(msg)

        organs = {}
        for organ_name, organ_parvalues in self.params.Organs.items():
            organs[organ_name] = GenericOrgan(day, kiosk, organ_name, organ_parvalues,
                                              residue_sink=residue_sink, crop_type=self.crop_type)
        self.organs = organs

        self.states = self.StateVariables(kiosk, publish=["DAS", "DAE", "PlantWt", "PlantN"],
                                          DAS=0, DAE=0, PlantWt=0., PlantN=0.,
                                          DOS=None, DOE=None, DOF=None)
        self.phase = "uninitialized"

        self._connect_signal(self._on_COMMENCING, signals.commencing)
        self._connect_signal(self._on_PLANT_SOWING, signals.plant_sowing)
        self._connect_signal(self._on_PLANT_EMERGING, signals.plant_emerging)
        self._connect_signal(self._on_PLANT_ENDING, signals.plant_ending)
        self._connect_signal(self._on_REMOVE_BIOMASS, signals.remove_biomass)

    @property
    def subSimObjects(self):
        return list(self.organs.values())

    @property
    def organ_names(self):
        return list(self.organs.keys())

    def get_variable(self, varname):
        """返回状态或速率变量的值，器官变量用 "<器官>.<变量>" 表示"""
        organ_name, _, organ_var = varname.partition(".")
        if organ_var and organ_name in self.organs:
            return self.organs[organ_name].get_variable(organ_var)
        return SimulationObject.get_variable(self, varname)

    # 每天的循环

    def do_potential_growth(self, day):
        """开始新的一天

        :returns: (器官, 当天事务) 的列表，植株未出苗时为空列表
        """
        self._update_day_counters(day)
        if self.phase != "emerged":
            return []
        return [(organ, organ.on_potential_growth(day)) for organ in self.organs.values()]

    def do_actual_growth(self, day, todays):
        """分配完成后推进所有器官并更新植株总量"""
        for organ, today in todays:
            organ.on_actual_growth(today)
        self._update_totals()

    # 信号处理

    def _on_COMMENCING(self, day):
        for organ in self.organs.values():
            organ.on_commencing(day)
        self.phase = "uninitialized"
        self._update_totals()

    def _on_PLANT_SOWING(self, day, crop_name=None, variety_name=None):
        if crop_name is not None and self.crop_type and crop_name != self.crop_type:
            msg = "Sowing '%s' but plant parameters are for '%s'." % (crop_name, self.crop_type)
            self.logger.warning(msg)
        for organ in self.organs.values():
            organ.on_sowing(day)
        self._set_states(DOS=day, DAS=0)
        self.phase = "sown"
        self._update_totals()

    def _on_PLANT_EMERGING(self, day):
        for organ in self.organs.values():
            organ.on_emerging(day)
        self._set_states(DOE=day, DAE=0)
        self.phase = "emerged"
        self._update_totals()

    def _on_PLANT_ENDING(self, day):
        for organ in self.organs.values():
            organ.on_ending(day)
        self._for_finalize["DOF"] = day
        self.phase = "ended"
        self._update_totals()

    def _on_REMOVE_BIOMASS(self, day, organ_name, FractionLiveToRemove=0., FractionDeadToRemove=0.,
                           FractionLiveToResidue=0., FractionDeadToResidue=0.):
        if organ_name not in self.organs:
            msg = "Cannot remove biomass from unknown organ '%s', organs are: %s" % \
                  (organ_name, ", ".join(self.organs))
            raise exc.BiomassRemovalError(msg)
        if self.phase != "emerged":
            msg = "Biomass removal from %s on %s ignored: plant is not emerged." % (organ_name, day)
            self.logger.warning(msg)
            return
        fractions = {"FractionLiveToRemove": FractionLiveToRemove,
                     "FractionDeadToRemove": FractionDeadToRemove,
                     "FractionLiveToResidue": FractionLiveToResidue,
                     "FractionDeadToResidue": FractionDeadToResidue}
        self.organs[organ_name].remove_biomass(fractions, day=day)
        self._update_totals()

    # 辅助方法

    @prepare_states
    def _set_states(self, **values):
        for name, value in values.items():
            setattr(self.states, name, value)

    @prepare_states
    def _update_day_counters(self, day):
        s = self.states
        if self.phase in ("sown", "emerged"):
            s.DAS = (day - s.DOS).days
        if self.phase == "emerged":
            s.DAE = (day - s.DOE).days

    @prepare_states
    def _update_totals(self):
        s = self.states
        s.PlantWt = sum(organ.states.Wt for organ in self.organs.values())
        s.PlantN = sum(organ.states.N for organ in self.organs.values())

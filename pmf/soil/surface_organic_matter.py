# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
from ..traitlets import Float, Dict
from ..decorators import prepare_states
from ..base import ParamTemplate, StatesTemplate, SimulationObject
from .. import exceptions as exc


class SurfaceOrganicMatter(SimulationObject):
    """地表有机物（残体）库

    只做记账：接收器官脱落、收获残留和植株结束时的生物量，不模拟分解。
    每次加入的残体同时按来源（作物类型，器官名称）累计，可以用
    `residues_by_source()` 查询。

    **模拟参数**

    ===================  ==============================  ========
     名称                 说明                            单位
    ===================  ==============================  ========
    SurfaceOMInitialWt   模拟开始时地表有机物重量，默认0    kg ha-1
    SurfaceOMInitialN    模拟开始时地表有机物氮量，默认0    kg ha-1
    ===================  ==============================  ========

    **状态变量**

    ================  ==============================  ====  ========
     名称              说明                            发布  单位
    ================  ==============================  ====  ========
    SurfaceOMWt       地表有机物重量                    Y     kg ha-1
    SurfaceOMN        地表有机物氮量                    Y     kg ha-1
    SurfaceOMOther    地表有机物中其他养分的量           Y     kg ha-1
    ================  ==============================  ====  ========
    """

    _pools = Dict()

    class Parameters(ParamTemplate):
        SurfaceOMInitialWt = Float()
        SurfaceOMInitialN = Float()
        _defaults = {"SurfaceOMInitialWt": 0., "SurfaceOMInitialN": 0.}

    class StateVariables(StatesTemplate):
        SurfaceOMWt = Float()
        SurfaceOMN = Float()
        SurfaceOMOther = Float()

    def initialize(self, day, kiosk, parvalues=None):
        """
        :param day: 模拟开始日期
        :param kiosk: 本模拟实例的VariableKiosk
        :param parvalues: 参数值字典，可以省略
        """
        self.params = self.Parameters(parvalues or {})
        p = self.params
        if p.SurfaceOMInitialWt < 0. or p.SurfaceOMInitialN < 0.:
            msg = "Initial surface organic matter cannot be negative."
            raise exc.ParameterError(msg)
        self.states = self.StateVariables(kiosk, publish=["SurfaceOMWt", "SurfaceOMN", "SurfaceOMOther"],
                                          SurfaceOMWt=p.SurfaceOMInitialWt,
                                          SurfaceOMN=p.SurfaceOMInitialN,
                                          SurfaceOMOther=0.)
        self._pools = {}

    @prepare_states
    def add_residue(self, weight, nitrogen, other_nutrient=0., crop_type="", organ_name=""):
        """把残体加入地表有机物库

        :param weight: 干物质 (kg/ha)
        :param nitrogen: 氮 (kg/ha)
        :param other_nutrient: 其他养分 (kg/ha)
        :param crop_type: 残体来源的作物类型
        :param organ_name: 残体来源的器官
        """
        if weight < 0. or nitrogen < 0. or other_nutrient < 0.:
            msg = "Negative residue input from %s/%s: weight %s, N %s, other %s" % \
                  (crop_type, organ_name, weight, nitrogen, other_nutrient)
            raise exc.PMFError(msg)

        s = self.states
        s.SurfaceOMWt += weight
        s.SurfaceOMN += nitrogen
        s.SurfaceOMOther += other_nutrient

        wt, n, other = self._pools.get((crop_type, organ_name), (0., 0., 0.))
        self._pools[(crop_type, organ_name)] = (wt + weight, n + nitrogen, other + other_nutrient)
        self.logger.debug("Added %.3f kg/ha residue (%.4f kg N/ha) from %s %s" %
                          (weight, nitrogen, crop_type, organ_name))

    def residues_by_source(self):
        """返回 {(作物类型, 器官名称): (重量, 氮, 其他养分)} 的副本"""
        return dict(self._pools)

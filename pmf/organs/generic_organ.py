# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""通用植物器官

通用器官（叶、茎、根、储藏器官等）每天与外部的分配器协商干物质（DM）和
氮（N）的分配。每天的顺序是固定的:

1. `on_potential_growth()` 记录当天开始时活体库的快照并对参数函数求值，
   返回当天的事务对象 `OrganDay`；
2. 分配器依次调用 `calc_dm_demand()`、`set_potential_dm_allocation()`、
   `calc_n_demand()`、`calc_dm_supply()`、`calc_n_supply()`、
   `set_dm_allocation()` 和 `set_n_allocation()`，每次都传入当天的事务对象；
3. `on_actual_growth()` 进行衰老、脱落和维持呼吸，并关闭事务。

生命周期: uninitialized → sown → emerged → ended，由 `on_commencing()`、
`on_sowing()`、`on_emerging()` 和 `on_ending()` 推进。

器官内部的重量单位为 g/m2，送往地表残体库时乘以10转换为 kg/ha。
"""
from ..traitlets import Float, Unicode, Instance, Enum, Any
from ..decorators import prepare_states
from ..base import ParamTemplate, StatesTemplate, RatesTemplate, SimulationObject
from ..biomass import Biomass, BiomassPoolType, BiomassSupplyType, OrganBiomassRemovalType
from ..functions import FunctionTrait
from ..settings import settings
from ..util import float_gt, float_lt, float_eq, limit
from .. import exceptions as exc

# g/m2 -> kg/ha
RESIDUE_CONVERSION = 10.
# 干物质需求的上限 (g/m2)
MAXIMUM_DM = 10000.

TOL_POTENTIAL = 1e-12
TOL_DM = 1e-10
TOL_N = 1e-9
TOL_BALANCE = 1e-6


class OrganDay(object):
    """一个器官一天的事务对象

    保存当天开始时活体库的独立副本、两个氮供给量和当天的参数值，
    并记录分配器已经完成的步骤。每种实际分配每天只能接受一次。
    事务在 `on_actual_growth()` 之后关闭。
    """

    def __init__(self, day, organ_name, start_live, n_reallocation_supply,
                 n_retranslocation_supply, values):
        self.day = day
        self.organ_name = organ_name
        self.start_live = start_live
        self.start_n_reallocation_supply = n_reallocation_supply
        self.start_n_retranslocation_supply = n_retranslocation_supply
        self.values = values
        self.maximum_dm = None
        self.dm_demand = None
        self.potential_structural_dm = None
        self.potential_metabolic_dm = None
        self.dm_allocated = False
        self.n_allocated = False
        self.closed = False

    def __repr__(self):
        state = "closed" if self.closed else "open"
        return "OrganDay(%s, %s, %s)" % (self.organ_name, self.day, state)


class GenericOrgan(SimulationObject):
    """通用植物器官的干物质和氮动态

    **模拟参数** （均为每天求值一次的参数函数）

    =======================  ================================================  ===========
     名称                     描述                                              单位
    =======================  ================================================  ===========
    SenescenceRate           每天衰老的活体比例                                 d-1
    DetachmentRate           每天脱落的死亡部分比例                             d-1
    NReallocationFactor      衰老部分非结构性氮可再分配的比例                    -
    NRetranslocationFactor   非结构性氮可转运的比例，默认0                       -
    DMRetranslocationFactor  非结构性干物质可转运的比例，默认0                   -
    StructuralFraction       干物质需求中结构性部分的比例                        -
    DMDemand                 干物质需求                                        g m-2 d-1
    DMConversionEfficiency   分配的干物质转化为器官干物质的效率，默认1，播种时固定   -
    MaintenanceRespiration   每天维持呼吸消耗的代谢性和非结构性干物质比例，默认无    d-1
    NitrogenDemandSwitch     氮需求的开关/系数，默认1                            -
    InitialWt                出苗时的结构性干物质                               g m-2
    MaximumNConc             最大氮浓度                                        g g-1
    MinimumNConc             最小（结构性）氮浓度                               g g-1
    =======================  ================================================  ===========

    **状态变量**

    =================  ===========================================  ====  =======
     名称               描述                                         发布  单位
    =================  ===========================================  ====  =======
    Live               活体生物量库                                  N     g m-2
    Dead               死亡生物量库                                  N     g m-2
    LiveWt, LiveN      活体重量和氮量                                Y     g m-2
    DeadWt, DeadN      死亡重量和氮量                                Y     g m-2
    Wt, N              活体和死亡的总重量和总氮量                     Y     g m-2
    DetachedWt         累计脱落的重量                                Y     g m-2
    DetachedN          累计脱落的氮量                                Y     g m-2
    RemovedWt          累计移除的重量                                Y     g m-2
    RemovedN           累计移除的氮量                                Y     g m-2
    DMConversionEfficiency  播种时固定的转化效率                     Y     -
    =================  ===========================================  ====  =======

    **速率变量**

    ======================  ======================================  =========
     名称                    描述                                    单位
    ======================  ======================================  =========
    GrowthRespiration       转化效率造成的生长呼吸                    g m-2 d-1
    MaintenanceRespiration  维持呼吸                                g m-2 d-1
    SenescingWt             衰老的重量                               g m-2 d-1
    SenescingN              衰老的氮量                               g m-2 d-1
    DetachingWt             脱落的重量                               g m-2 d-1
    DetachingN              脱落的氮量                               g m-2 d-1
    ======================  ======================================  =========

    所有状态和速率变量都登记在器官名称的命名空间下，例如 "Leaf.LiveWt"。

    :param day: 模拟开始日期
    :param kiosk: VariableKiosk
    :param name: 器官名称
    :param parvalues: 参数名到参数值（数值、AFGEN定义或可调用对象）的字典
    :param residue_sink: 具有 `add_residue()` 方法的地表残体库，可以为 None
    :param crop_type: 作物类型，传递给残体库
    """

    name = Unicode()
    crop_type = Unicode()
    residue_sink = Any()
    phase = Enum(["uninitialized", "sown", "emerged", "ended"])
    _today = Instance(OrganDay)

    class Parameters(ParamTemplate):
        SenescenceRate = FunctionTrait()
        DetachmentRate = FunctionTrait()
        NReallocationFactor = FunctionTrait()
        NRetranslocationFactor = FunctionTrait()
        DMRetranslocationFactor = FunctionTrait()
        StructuralFraction = FunctionTrait()
        DMDemand = FunctionTrait()
        DMConversionEfficiency = FunctionTrait()
        MaintenanceRespiration = FunctionTrait()
        NitrogenDemandSwitch = FunctionTrait()
        InitialWt = FunctionTrait()
        MaximumNConc = FunctionTrait()
        MinimumNConc = FunctionTrait()

        _defaults = {"NRetranslocationFactor": 0.,
                     "DMRetranslocationFactor": 0.,
                     "DMConversionEfficiency": 1.,
                     "MaintenanceRespiration": None,
                     "NitrogenDemandSwitch": 1.}

    class StateVariables(StatesTemplate):
        Live = Instance(Biomass)
        Dead = Instance(Biomass)
        LiveWt = Float()
        LiveN = Float()
        DeadWt = Float()
        DeadN = Float()
        Wt = Float()
        N = Float()
        DetachedWt = Float()
        DetachedN = Float()
        RemovedWt = Float()
        RemovedN = Float()
        DMConversionEfficiency = Float()

    class RateVariables(RatesTemplate):
        GrowthRespiration = Float()
        MaintenanceRespiration = Float()
        SenescingWt = Float()
        SenescingN = Float()
        DetachingWt = Float()
        DetachingN = Float()

    def initialize(self, day, kiosk, name, parvalues, residue_sink=None, crop_type=""):

        self.name = name
        self.crop_type = crop_type
        self.residue_sink = residue_sink
        self.params = self.Parameters(parvalues, kiosk)

        publish = ["LiveWt", "LiveN", "DeadWt", "DeadN", "Wt", "N", "DetachedWt",
                   "DetachedN", "RemovedWt", "RemovedN", "DMConversionEfficiency"]
        self.states = self.StateVariables(kiosk, publish=publish, namespace=name,
                                          Live=Biomass(), Dead=Biomass(),
                                          LiveWt=0., LiveN=0., DeadWt=0., DeadN=0.,
                                          Wt=0., N=0., DetachedWt=0., DetachedN=0.,
                                          RemovedWt=0., RemovedN=0.,
                                          DMConversionEfficiency=1.)
        self.rates = self.RateVariables(kiosk, namespace=name)
        self.phase = "uninitialized"
        self._reset_balance()

    @property
    def subSimObjects(self):
        # 残体库不是器官的子对象
        return []

    # 生命周期

    def on_commencing(self, day):
        """模拟开始：清空所有库"""
        self._clear()
        self.phase = "uninitialized"
        self.logger.debug("%s commencing on %s" % (self.name, day))

    def on_sowing(self, day):
        """播种：清空所有库并固定转化效率"""
        if self.phase not in ("uninitialized", "ended"):
            msg = "Organ %s cannot be sown on %s: current phase is '%s'." % (self.name, day, self.phase)
            raise exc.DailyCycleError(msg)

        self._clear()
        eff = self.params.DMConversionEfficiency()
        if eff <= 0.:
            msg = "DMConversionEfficiency of organ %s must be > 0, got %s." % (self.name, eff)
            raise exc.ParameterError(msg)
        self.states.DMConversionEfficiency = eff
        self.phase = "sown"
        self.logger.debug("%s sown on %s with conversion efficiency %s" % (self.name, day, eff))

    def on_emerging(self, day):
        """出苗：以初始重量和最小/最大氮浓度初始化活体库"""
        if self.phase != "sown":
            msg = "Organ %s cannot emerge on %s: current phase is '%s'." % (self.name, day, self.phase)
            raise exc.DailyCycleError(msg)

        p = self.params
        initial_wt = p.InitialWt()
        if initial_wt < 0.:
            msg = "InitialWt of organ %s must be >= 0, got %s." % (self.name, initial_wt)
            raise exc.ParameterError(msg)
        structural_n = initial_wt * p.MinimumNConc()
        non_structural_n = initial_wt * p.MaximumNConc() - structural_n
        if float_lt(non_structural_n, 0., TOL_N):
            msg = "MaximumNConc (%s) of organ %s is below its MinimumNConc (%s) at emergence." % \
                  (p.MaximumNConc(), self.name, p.MinimumNConc())
            raise exc.ParameterError(msg)
        non_structural_n = max(0., non_structural_n)
        initial = Biomass(StructuralWt=initial_wt, StructuralN=structural_n,
                          NonStructuralN=non_structural_n)

        s = self.states
        s.Live.clear()
        s.Live.add(initial)
        self._wt_in += initial.Wt
        self._n_in += initial.N
        self._update_totals()
        self.phase = "emerged"
        self.logger.debug("%s emerged on %s: %r" % (self.name, day, s.Live))

    def on_ending(self, day):
        """植株结束：活体和死亡生物量全部送往残体库，清空所有库"""
        if self.phase not in ("sown", "emerged"):
            msg = "Organ %s cannot end on %s: current phase is '%s'." % (self.name, day, self.phase)
            raise exc.DailyCycleError(msg)

        s = self.states
        total = s.Live + s.Dead
        if total.Wt > 0.:
            s.DetachedWt += total.Wt
            s.DetachedN += total.N
            self._send_residue(total.Wt, total.N)
        self._wt_out += total.Wt
        self._n_out += total.N
        s.Live.clear()
        s.Dead.clear()
        self._update_totals()
        self._check_balance(day)
        self._today = None
        self.phase = "ended"
        self.logger.debug("%s ended on %s, %.3f g/m2 flushed to residues" % (self.name, day, total.Wt))

    # 每天的循环

    def on_potential_growth(self, day):
        """开始新的一天：记录活体库快照并对参数函数求值

        :returns: 当天的 `OrganDay`
        """
        if self.phase != "emerged":
            msg = "Organ %s has no daily cycle on %s: current phase is '%s'." % (self.name, day, self.phase)
            raise exc.DailyCycleError(msg)
        if self._today is not None and not self._today.closed:
            msg = "Organ %s: day %s was not completed before starting %s." % \
                  (self.name, self._today.day, day)
            raise exc.DailyCycleError(msg)

        if settings.ZEROFY:
            self.zerofy()
        self.rates.GrowthRespiration = 0.
        self.rates.MaintenanceRespiration = 0.

        values = self._evaluate_parameters()
        start = self.states.Live.copy()
        realloc = values["SenescenceRate"] * start.NonStructuralN * values["NReallocationFactor"]
        retrans = max(0., start.NonStructuralN - start.NonStructuralWt * values["MinimumNConc"]
                      - realloc) * values["NRetranslocationFactor"]
        self._today = OrganDay(day, self.name, start, realloc, retrans, values)
        return self._today

    def calc_dm_demand(self, today):
        """计算当天的结构性和非结构性干物质需求

        :returns: BiomassPoolType，同时保存在 today.dm_demand
        """
        self._check_today(today)
        v = today.values
        start = today.start_live
        eff = self.states.DMConversionEfficiency

        fraction = v["StructuralFraction"]
        structural = max(0., v["DMDemand"] * fraction / eff)
        if fraction > 0.:
            maximum_dm = min((start.StructuralWt + structural) / fraction, MAXIMUM_DM)
        else:
            maximum_dm = MAXIMUM_DM
        non_structural = max(0., maximum_dm - structural - start.StructuralWt
                             - start.NonStructuralWt) / eff

        today.maximum_dm = maximum_dm
        today.dm_demand = BiomassPoolType(Structural=structural, NonStructural=non_structural)
        return today.dm_demand

    def set_potential_dm_allocation(self, today, allocation):
        """记录分配器第一轮（潜在）分配的结构性和代谢性干物质"""
        self._check_today(today)
        if today.dm_demand is None:
            msg = "Organ %s: potential DM allocation received before DM demand was computed on %s."
            raise exc.DailyCycleError(msg % (self.name, today.day))

        if abs(today.dm_demand.Structural) < TOL_POTENTIAL and \
                abs(allocation.Structural) >= TOL_POTENTIAL:
            msg = "Invalid allocation of potential DM in %s: structural demand is zero " \
                  "but %g was allocated." % (self.name, allocation.Structural)
            raise exc.InvalidAllocationError(msg)

        today.potential_structural_dm = allocation.Structural
        today.potential_metabolic_dm = allocation.Metabolic

    def calc_n_demand(self, today):
        """计算当天的结构性和非结构性氮需求，需要先收到潜在分配

        :returns: BiomassPoolType
        """
        self._check_today(today)
        if today.potential_structural_dm is None:
            msg = "Organ %s: N demand requested before the potential DM allocation on %s."
            raise exc.DailyCycleError(msg % (self.name, today.day))

        v = today.values
        live = self.states.Live
        potential_dm = today.potential_structural_dm + today.potential_metabolic_dm
        deficit = max(0., v["MaximumNConc"] * (live.Wt + potential_dm) - live.N)
        deficit *= v["NitrogenDemandSwitch"]
        structural = min(deficit, today.potential_structural_dm * v["MinimumNConc"])
        non_structural = max(0., deficit - structural)
        return BiomassPoolType(Structural=structural, NonStructural=non_structural)

    def calc_dm_supply(self, today):
        """可供其他器官使用的干物质（只有转运）"""
        self._check_today(today)
        retrans = today.start_live.NonStructuralWt * today.values["DMRetranslocationFactor"]
        return BiomassSupplyType(Fixation=0., Retranslocation=retrans, Reallocation=0.)

    def calc_n_supply(self, today):
        """可供其他器官使用的氮（再分配和转运），在快照时已经确定"""
        self._check_today(today)
        return BiomassSupplyType(Reallocation=today.start_n_reallocation_supply,
                                 Retranslocation=today.start_n_retranslocation_supply,
                                 Uptake=0.)

    def set_dm_allocation(self, today, allocation):
        """接受分配器的实际干物质分配

        所有检查都在修改库之前完成；不合法的分配抛出 InvalidAllocationError。
        """
        self._check_allocation_order(today, "DM", today.dm_allocated)

        demand = today.dm_demand
        start = today.start_live
        eff = self.states.DMConversionEfficiency

        if float_lt(allocation.Structural, 0., TOL_DM):
            msg = "-ve structural DM allocation to %s: %g" % (self.name, allocation.Structural)
            raise exc.InvalidAllocationError(msg)
        if float_lt(allocation.NonStructural, 0., TOL_DM):
            msg = "-ve non-structural DM allocation to %s: %g" % (self.name, allocation.NonStructural)
            raise exc.InvalidAllocationError(msg)
        if float_gt(allocation.NonStructural * eff, demand.NonStructural, TOL_DM):
            msg = "Non-structural DM allocation to %s (%g) is in excess of its capacity (%g)" % \
                  (self.name, allocation.NonStructural, demand.NonStructural)
            raise exc.InvalidAllocationError(msg)
        if float_lt(allocation.Retranslocation, 0., TOL_DM):
            msg = "-ve DM retranslocation from %s: %g" % (self.name, allocation.Retranslocation)
            raise exc.InvalidAllocationError(msg)
        if float_gt(allocation.Retranslocation, start.NonStructuralWt, TOL_DM):
            msg = "Retranslocation exceeds non-structural biomass in organ %s: %g > %g" % \
                  (self.name, allocation.Retranslocation, start.NonStructuralWt)
            raise exc.InvalidAllocationError(msg)

        structural = max(0., allocation.Structural)
        non_structural = max(0., allocation.NonStructural)
        retrans = max(0., allocation.Retranslocation)

        self.rates.GrowthRespiration = (structural + non_structural) * (1. - eff)
        growth = Biomass(StructuralWt=min(structural * eff, demand.Structural))
        if demand.NonStructural > 0.:
            growth.NonStructuralWt = non_structural * eff

        live = self.states.Live
        live.add(growth)
        retrans = min(retrans, live.NonStructuralWt)
        live.subtract(Biomass(NonStructuralWt=retrans))
        self._wt_in += growth.Wt
        self._wt_out += retrans
        today.dm_allocated = True

    def set_n_allocation(self, today, allocation):
        """接受分配器的实际氮分配

        所有检查都在修改库之前完成；不合法的分配抛出 InvalidAllocationError。
        """
        self._check_allocation_order(today, "N", today.n_allocated)
        start = today.start_live
        live = self.states.Live

        if float_lt(allocation.Structural, 0., TOL_N):
            msg = "-ve structural N allocation to %s: %g" % (self.name, allocation.Structural)
            raise exc.InvalidAllocationError(msg)
        if float_lt(allocation.NonStructural, 0., TOL_N):
            msg = "-ve non-structural N allocation to %s: %g" % (self.name, allocation.NonStructural)
            raise exc.InvalidAllocationError(msg)
        if float_lt(allocation.Retranslocation, 0., TOL_N):
            msg = "-ve N retranslocation from %s: %g" % (self.name, allocation.Retranslocation)
            raise exc.InvalidAllocationError(msg)
        available = start.NonStructuralN - today.start_n_retranslocation_supply
        if float_gt(allocation.Retranslocation, available, TOL_N):
            msg = "N retranslocation exceeds non-structural nitrogen in organ %s: %g > %g" % \
                  (self.name, allocation.Retranslocation, available)
            raise exc.InvalidAllocationError(msg)
        if float_lt(allocation.Reallocation, 0., TOL_N):
            msg = "-ve N reallocation from %s: %g" % (self.name, allocation.Reallocation)
            raise exc.InvalidAllocationError(msg)
        if float_gt(allocation.Reallocation, start.NonStructuralN, TOL_N):
            msg = "N reallocation exceeds non-structural nitrogen in organ %s: %g > %g" % \
                  (self.name, allocation.Reallocation, start.NonStructuralN)
            raise exc.InvalidAllocationError(msg)

        structural = max(0., allocation.Structural)
        non_structural = max(0., allocation.NonStructural)
        outflow = max(0., allocation.Retranslocation) + max(0., allocation.Reallocation)
        if float_lt(live.NonStructuralN + non_structural, outflow, TOL_N):
            msg = "N retranslocation and reallocation from %s (%g) exceed its non-structural " \
                  "nitrogen (%g)" % (self.name, outflow, live.NonStructuralN + non_structural)
            raise exc.InvalidAllocationError(msg)

        live.add(Biomass(StructuralN=structural, NonStructuralN=non_structural))
        outflow = min(outflow, live.NonStructuralN)
        live.subtract(Biomass(NonStructuralN=outflow))
        self._n_in += structural + non_structural
        self._n_out += outflow
        today.n_allocated = True

    @prepare_states
    def on_actual_growth(self, today):
        """分配之后推进一天：衰老、脱落和维持呼吸，然后关闭当天的事务"""
        self._check_today(today)
        v = today.values
        s = self.states
        r = self.rates

        # 衰老: 活体 -> 死亡
        loss = s.Live * v["SenescenceRate"]
        s.Live.subtract(loss)
        s.Dead.add(loss)
        r.SenescingWt = loss.Wt
        r.SenescingN = loss.N

        # 脱落: 死亡 -> 残体
        detachment_rate = v["DetachmentRate"]
        detaching = s.Dead * detachment_rate
        s.Dead.multiply(1. - detachment_rate)
        r.DetachingWt = detaching.Wt
        r.DetachingN = detaching.N
        if detaching.Wt > 0.:
            s.DetachedWt += detaching.Wt
            s.DetachedN += detaching.N
            self._send_residue(detaching.Wt, detaching.N)
        self._wt_out += detaching.Wt
        self._n_out += detaching.N

        # 维持呼吸: 先代谢性库，后非结构性库
        mr = v["MaintenanceRespiration"]
        if mr is not None:
            respired_metabolic = s.Live.MetabolicWt * mr
            s.Live.subtract(Biomass(MetabolicWt=respired_metabolic))
            respired_storage = s.Live.NonStructuralWt * mr
            s.Live.subtract(Biomass(NonStructuralWt=respired_storage))
            r.MaintenanceRespiration = respired_metabolic + respired_storage
            self._wt_out += r.MaintenanceRespiration

        self._update_totals()
        self._check_balance(today.day)
        today.closed = True

    # 生物量移除

    @prepare_states
    def remove_biomass(self, fractions, day=None):
        """按给定比例从活体和死亡库中移除生物量（收获、刈割、放牧）

        :param fractions: OrganBiomassRemovalType 或同名键的字典
        :param day: 当前日期，只用于日志
        """
        if isinstance(fractions, dict):
            fractions = OrganBiomassRemovalType(**fractions)
        self._check_removal_fractions(fractions)

        total = sum(fractions)
        if total <= 0.:
            return

        s = self.states
        live, dead = s.Live, s.Dead
        remaining_live = 1. - (fractions.FractionLiveToResidue + fractions.FractionLiveToRemove)
        remaining_dead = 1. - (fractions.FractionDeadToResidue + fractions.FractionDeadToRemove)

        detaching_wt = live.Wt * fractions.FractionLiveToResidue + dead.Wt * fractions.FractionDeadToResidue
        detaching_n = live.N * fractions.FractionLiveToResidue + dead.N * fractions.FractionDeadToResidue
        removed_wt = live.Wt * fractions.FractionLiveToRemove + dead.Wt * fractions.FractionDeadToRemove
        removed_n = live.N * fractions.FractionLiveToRemove + dead.N * fractions.FractionDeadToRemove

        s.RemovedWt += removed_wt
        s.RemovedN += removed_n
        s.DetachedWt += detaching_wt
        s.DetachedN += detaching_n
        live.multiply(limit(0., 1., remaining_live))
        dead.multiply(limit(0., 1., remaining_dead))
        self._send_residue(detaching_wt, detaching_n)
        self._wt_out += removed_wt + detaching_wt
        self._n_out += removed_n + detaching_n
        self._update_totals()

        to_residue = (fractions.FractionLiveToResidue + fractions.FractionDeadToResidue) / total * 100
        removed_off = (fractions.FractionLiveToRemove + fractions.FractionDeadToRemove) / total * 100
        msg = ("Removing %.1f%% of %s biomass from %s. Of this %.1f%% is removed from the system " +
               "and %.1f%% is returned to the surface organic matter")
        self.logger.info(msg % (total * 100, self.name, self.crop_type or "plant", removed_off, to_residue))
        if day is not None:
            self.logger.debug("%s biomass removed on %s: %.3f g/m2 removed, %.3f g/m2 to residues" %
                              (self.name, day, removed_wt, detaching_wt))

    def _check_removal_fractions(self, fractions):
        for name, value in zip(fractions._fields, fractions):
            if value < 0. or value > 1.:
                msg = "Removal fraction %s for organ %s must be in [0, 1], got %s" % (name, self.name, value)
                raise exc.BiomassRemovalError(msg)
        live_sum = fractions.FractionLiveToRemove + fractions.FractionLiveToResidue
        dead_sum = fractions.FractionDeadToRemove + fractions.FractionDeadToResidue
        if live_sum > 1. + TOL_N or dead_sum > 1. + TOL_N:
            msg = "Removal fractions for organ %s exceed 1 (live: %s, dead: %s)" % (self.name, live_sum, dead_sum)
            raise exc.BiomassRemovalError(msg)

    # 辅助方法

    def _check_today(self, today):
        if today is None or today is not self._today:
            msg = "Organ %s received a stale or foreign day transaction: %r" % (self.name, today)
            raise exc.DailyCycleError(msg)
        if today.closed:
            msg = "Organ %s: day transaction for %s is already closed." % (self.name, today.day)
            raise exc.DailyCycleError(msg)

    def _check_allocation_order(self, today, label, already_allocated):
        self._check_today(today)
        if today.potential_structural_dm is None:
            msg = "Organ %s: %s allocation received before the potential DM allocation on %s."
            raise exc.DailyCycleError(msg % (self.name, label, today.day))
        if already_allocated:
            msg = "Organ %s: %s allocation for %s was already applied."
            raise exc.DailyCycleError(msg % (self.name, label, today.day))

    def _evaluate_parameters(self):
        values = {}
        for parname in self.params.trait_names():
            if parname.startswith("_") or parname.startswith("trait"):
                continue
            func = getattr(self.params, parname)
            values[parname] = None if func is None else func()
        return values

    def _send_residue(self, weight, nitrogen):
        if self.residue_sink is None:
            self.logger.debug("No residue sink for %s, %.3f g/m2 not tracked" % (self.name, weight))
            return
        self.residue_sink.add_residue(weight * RESIDUE_CONVERSION, nitrogen * RESIDUE_CONVERSION,
                                      0., crop_type=self.crop_type, organ_name=self.name)

    def _clear(self):
        # 累计脱落和移除量不清零
        self.states.Live.clear()
        self.states.Dead.clear()
        self._today = None
        self._update_totals()
        self._reset_balance()

    def _update_totals(self):
        s = self.states
        s.LiveWt = s.Live.Wt
        s.LiveN = s.Live.N
        s.DeadWt = s.Dead.Wt
        s.DeadN = s.Dead.N
        s.Wt = s.LiveWt + s.DeadWt
        s.N = s.LiveN + s.DeadN

    def _reset_balance(self):
        self._wt_in = self._wt_out = 0.
        self._n_in = self._n_out = 0.

    def _check_balance(self, day):
        if not settings.CHECK_BALANCES:
            return
        s = self.states
        checks = [(s.Live.Wt + s.Dead.Wt, self._wt_in, self._wt_out, exc.DryMatterBalanceError, "Dry matter"),
                  (s.Live.N + s.Dead.N, self._n_in, self._n_out, exc.NutrientBalanceError, "Nitrogen")]
        for current, inflow, outflow, error, label in checks:
            if not float_eq(current, inflow - outflow, TOL_BALANCE * max(1., inflow)):
                msg = ("%s balance of organ %s not closing on %s: in %f, out %f, in organ %f" %
                       (label, self.name, day, inflow, outflow, current))
                raise error(msg)

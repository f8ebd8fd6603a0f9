# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""测试用的参数、文件和一个简单的分配器"""
import os

from ...biomass import BiomassPoolType, BiomassAllocationType

test_data_dir = os.path.dirname(os.path.abspath(__file__))
plant_parameter_file = os.path.join(test_data_dir, "generic_plant.yaml")
agromanagement_file = os.path.join(test_data_dir, "agromanagement.yaml")


def organ_parameters(**kwargs):
    """返回一个不衰老、不脱落的器官的参数，kwargs 覆盖默认值"""
    parvalues = {"SenescenceRate": 0.,
                 "DetachmentRate": 0.,
                 "NReallocationFactor": 0.,
                 "StructuralFraction": 1.,
                 "DMDemand": 1.,
                 "InitialWt": 2.,
                 "MaximumNConc": 0.05,
                 "MinimumNConc": 0.02}
    parvalues.update(kwargs)
    return parvalues


class FractionArbitrator(object):
    """按固定比例满足每个器官结构性干物质需求和氮需求的分配器

    不分配非结构性干物质，也不使用转运和再分配。每次调用的方法名
    记录在 `calls` 中。
    """

    def __init__(self, fraction=1.0):
        self.fraction = fraction
        self.calls = []

    def __call__(self, day, organs):
        f = self.fraction
        for organ, today in organs:
            dm_demand = organ.calc_dm_demand(today)
            self.calls.append((organ.name, "calc_dm_demand"))
            structural = dm_demand.Structural * f
            organ.set_potential_dm_allocation(today, BiomassPoolType(Structural=structural))
            self.calls.append((organ.name, "set_potential_dm_allocation"))
            n_demand = organ.calc_n_demand(today)
            self.calls.append((organ.name, "calc_n_demand"))
            organ.calc_dm_supply(today)
            self.calls.append((organ.name, "calc_dm_supply"))
            organ.calc_n_supply(today)
            self.calls.append((organ.name, "calc_n_supply"))
            organ.set_dm_allocation(today, BiomassAllocationType(Structural=structural))
            self.calls.append((organ.name, "set_dm_allocation"))
            organ.set_n_allocation(today, BiomassAllocationType(Structural=n_demand.Structural * f,
                                                                NonStructural=n_demand.NonStructural * f))
            self.calls.append((organ.name, "set_n_allocation"))

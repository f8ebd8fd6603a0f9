# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""用于创建PMF模拟单元的基类。

通常这些类不是直接使用的，而是在创建模拟单元时进行子类化。
"""
from .variablekiosk import VariableKiosk
from .engine import BaseEngine
from .simulationobject import SimulationObject, AncillaryObject
from .states_rates import StatesTemplate, RatesTemplate, ParamTemplate
from .dispatcher import DispatcherObject
from .config_loader import ConfigurationLoader

# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""PMF的异常层次结构
"""

class PMFError(Exception):
    """PMF的顶级异常"""

class ParameterError(PMFError):
    "Raised when problems with parameters are found."

class ConfigurationGapError(ParameterError):
    "Raised when a required parameter function is not configured."

class InvalidAllocationError(PMFError):
    "Raised when an organ is offered an allocation it cannot accept."

class BiomassPoolError(PMFError):
    "Raised when an operation would drive a biomass pool component negative."

class BiomassRemovalError(PMFError):
    "Raised when biomass removal fractions are invalid."

class DailyCycleError(PMFError):
    "Raised when lifecycle events or daily calls occur out of order."

class DryMatterBalanceError(PMFError):
    "Raised when dry matter flows are not balanced."

class NutrientBalanceError(PMFError):
    "Raised when nitrogen flows are not balanced."

class VariableKioskError(PMFError):
    "Raised when problems with kiosk registrations are found."

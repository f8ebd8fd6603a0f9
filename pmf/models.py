# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月

from .engine import Engine


class GenericPlantModel(Engine):
    """便捷类，用于运行由通用器官组成的植物模型。

    参见 `pmf.engine.Engine` 获取参数和关键字说明
    """
    config = "GenericPlant.conf"
    __plantmodel__ = "PMF"
    __plantmodelversion__ = "1.0"

# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""PMF：多器官作物模拟中通用植物器官的日生长模型

PMF 模拟单个植物器官（叶、茎、根等）每天的干物质和氮的需求、供给、
分配接受、衰老、脱落和维持呼吸。器官通过由外部提供的分配器（arbitrator）
相互竞争每日的干物质和氮。

快速上手::

    >>> from pmf.models import GenericPlantModel
    >>> from pmf.input import YAMLOrganDataProvider, YAMLAgroManagementReader
    >>> params = YAMLOrganDataProvider(fpath="plants.yaml")
    >>> agro = YAMLAgroManagementReader("agromanagement.yaml")
    >>> engine = GenericPlantModel(params, agro, arbitrator=my_arbitrator)
    >>> engine.run_till_terminate()
    >>> output = engine.get_output()
"""
__author__ = "Allard de Wit <allard.dewit@wur.nl>"
__version__ = "1.0.0"

import logging.config

from .settings import settings

logging.config.dictConfig(settings.LOG_CONFIG)

from . import util
from . import signals
from . import exceptions

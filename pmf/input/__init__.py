# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl)，2024年3月

"""用于读取参数和农事管理文件的工具。

包含以下数据提供者:
- YAMLAgroManagementReader 读取YAML格式的农事管理数据
- YAMLOrganDataProvider 读取YAML格式的植物和器官参数
"""

from .yaml_agro_loader import YAMLAgroManagementReader
from .yaml_organdataprovider import YAMLOrganDataProvider

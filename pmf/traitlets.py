# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""
所有PMF模块都从 .traitlets 导入traits，本模块从适配过的
'traitlets_pcse' 包中加载实际的实现。部分 traits 被修改为默认允许 `None`，
Float 会把赋值强制转换为 float()。
"""
from traitlets_pcse import *
import traitlets_pcse as tr


def _allow_none(kwargs):
    kwargs.setdefault('allow_none', True)
    return kwargs


class Instance(tr.Instance):

    def __init__(self, *args, **kwargs):
        tr.Instance.__init__(self, *args, **_allow_none(kwargs))


class Enum(tr.Enum):

    def __init__(self, *args, **kwargs):
        tr.Enum.__init__(self, *args, **_allow_none(kwargs))


class Unicode(tr.Unicode):

    def __init__(self, *args, **kwargs):
        tr.Unicode.__init__(self, *args, **_allow_none(kwargs))


class Bool(tr.Bool):

    def __init__(self, *args, **kwargs):
        tr.Bool.__init__(self, *args, **_allow_none(kwargs))


class Float(tr.Float):

    def __init__(self, *args, **kwargs):
        tr.Float.__init__(self, *args, **_allow_none(kwargs))

    def validate(self, obj, value):
        if value is None:
            return value
        try:
            value = float(value)
        except (TypeError, ValueError):
            self.error(obj, value)
        return value


class Int(tr.Int):

    def __init__(self, *args, **kwargs):
        tr.Int.__init__(self, *args, **_allow_none(kwargs))

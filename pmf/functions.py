# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""器官参数函数

器官的参数不是固定值，而是每天求值一次的无参函数。参数文件中可以给出:

* 一个数值，转换为 `Constant`；
* 一个AFGEN定义 ``{"XVariable": <kiosk变量名>, "Table": [x1, y1, x2, y2, ...]}``，
  转换为 `AfgenFunction`，以kiosk中已发布变量的当天值插值；
* 任意可调用对象，原样使用。
"""
from numbers import Number

from .traitlets import TraitType
from .util import Afgen
from . import exceptions as exc


class Constant(object):
    """总是返回同一个值的参数函数"""

    def __init__(self, value):
        self.value = float(value)

    def __call__(self):
        return self.value

    def __repr__(self):
        return "Constant(%s)" % self.value


class AfgenFunction(object):
    """以kiosk中已发布变量的当前值为自变量的AFGEN参数函数

    :param kiosk: VariableKiosk
    :param xvariable: 自变量的名称，例如 "DAE" 或 "Leaf.LiveWt"
    :param table: XY值对列表
    """

    def __init__(self, kiosk, xvariable, table):
        if kiosk is None:
            msg = "AFGEN parameter on '%s' requires a VariableKiosk." % xvariable
            raise exc.ParameterError(msg)
        self.kiosk = kiosk
        self.xvariable = xvariable
        try:
            self.afgen = Afgen(table)
        except ValueError as e:
            raise exc.ParameterError(str(e))

    def __call__(self):
        if self.xvariable not in self.kiosk:
            msg = "Variable '%s' needed by AFGEN parameter is not available in the kiosk."
            raise exc.ParameterError(msg % self.xvariable)
        return self.afgen(self.kiosk[self.xvariable])

    def __repr__(self):
        return "AfgenFunction(%s, %r)" % (self.xvariable, self.afgen)


class FunctionTrait(TraitType):
    """参数函数特征，把参数文件中的值转换为无参可调用对象"""
    default_value = None
    info_text = "a number, a callable or an AFGEN definition with XVariable and Table"

    def __init__(self, *args, **kwargs):
        kwargs.setdefault("allow_none", True)
        TraitType.__init__(self, *args, **kwargs)

    def validate(self, obj, value):
        if value is None:
            return value
        if isinstance(value, Number) and not isinstance(value, bool):
            return Constant(value)
        if isinstance(value, dict) and "XVariable" in value and "Table" in value:
            return AfgenFunction(getattr(obj, "_kiosk", None), value["XVariable"], value["Table"])
        if callable(value):
            return value
        self.error(obj, value)

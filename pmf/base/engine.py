# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""模拟引擎的基类，供继承使用。"""
import types
import logging

from ..traitlets import HasTraits
from .dispatcher import DispatcherObject
from .simulationobject import SimulationObject


class BaseEngine(HasTraits, DispatcherObject):
    """Engine的基类，供继承使用"""

    def __init__(self):
        HasTraits.__init__(self)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def __setattr__(self, attr, value):
        # 只允许对已定义的属性赋值，以 '_' 开头的属性和函数除外。
        if attr.startswith("_") or type(value) is types.FunctionType:
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)

    @property
    def subSimObjects(self):
        """查找嵌入在自身中的SimulationObjects。"""
        subSimObjects = []
        defined_traits = self.__dict__["_trait_values"]
        for attr in defined_traits.values():
            if isinstance(attr, SimulationObject):
                subSimObjects.append(attr)
        return subSimObjects

    def get_variable(self, varname):
        """返回指定状态或速率变量的值。

        :param varname: 变量名称，器官变量使用限定名，例如 "Leaf.LiveWt"。

        已发布的变量直接从kiosk读取，否则在模拟对象的层级中查找。
        未在kiosk中登记的变量返回 None。
        """
        if not self.kiosk.variable_exists(varname):
            return None

        if varname in self.kiosk:
            return self.kiosk[varname]

        value = None
        for simobj in self.subSimObjects:
            value = simobj.get_variable(varname)
            if value is not None:
                break
        return value

    def zerofy(self):
        """将所有子SimulationObjects的速率变量值归零。"""
        for simobj in self.subSimObjects:
            simobj.zerofy()

# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import types
import logging
from datetime import date

from .dispatcher import DispatcherObject
from ..traitlets import HasTraits, Instance, Dict
from .. import exceptions as exc
from .variablekiosk import VariableKiosk
from .states_rates import StatesTemplate, RatesTemplate, ParamTemplate


class SimulationObject(HasTraits, DispatcherObject):
    """PMF模拟对象的基类。

    :param day: 模拟的起始日期
    :param kiosk: 此模拟实例的VariableKiosk

    day 和 kiosk 是必需参数，其余参数原样传递给 `initialize()`。
    """

    states = Instance(StatesTemplate)
    rates = Instance(RatesTemplate)
    params = Instance(ParamTemplate)
    kiosk = Instance(VariableKiosk)

    # finalize 时写入 states 的值
    _for_finalize = Dict()

    def __init__(self, day, kiosk, *args, **kwargs):
        HasTraits.__init__(self)

        if not isinstance(day, date):
            this = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
            msg = ("%s should be instantiated with the simulation start " +
                   "day as first argument!")
            raise exc.PMFError(msg % this)

        if not isinstance(kiosk, VariableKiosk):
            this = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
            msg = ("%s should be instantiated with the VariableKiosk " +
                   "as second argument!")
            raise exc.PMFError(msg % this)
        self.kiosk = kiosk

        self.initialize(day, kiosk, *args, **kwargs)
        self.logger.debug("Component successfully initialized on %s!" % day)

    def initialize(self, *args, **kwargs):
        msg = "`initialize` method not yet implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def __setattr__(self, attr, value):
        # 只允许对已定义的属性赋值，以 '_' 开头的属性和由
        # prepare_states/prepare_rates 装饰器设置的函数除外。
        if attr.startswith("_") or type(value) is types.FunctionType:
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)

    def get_variable(self, varname):
        """ 返回指定状态变量或速率变量的值。

        先在本对象的 states 和 rates 中查找，然后依次查询子模拟对象。
        变量名区分大小写，找不到时返回 None。
        """
        value = None
        if self.states is not None and hasattr(self.states, varname):
            value = getattr(self.states, varname)
        elif self.rates is not None and hasattr(self.rates, varname):
            value = getattr(self.rates, varname)
        else:
            for simobj in self.subSimObjects:
                value = simobj.get_variable(varname)
                if value is not None:
                    break
        return value

    @property
    def subSimObjects(self):
        """ 返回嵌入在本对象内的 SimulationObject。"""
        subSimObjects = []
        defined_traits = self.__dict__["_trait_values"]
        for attr in defined_traits.values():
            if isinstance(attr, SimulationObject):
                subSimObjects.append(attr)
        return subSimObjects

    def finalize(self, day):
        """ 将 _for_finalize 中的值写入 states，并对所有子模拟对象调用 finalize """
        if self.states is not None:
            self.states.unlock()
            while len(self._for_finalize) > 0:
                k, v = self._for_finalize.popitem()
                setattr(self.states, k, v)
            self.states.lock()
        for simobj in self.subSimObjects:
            simobj.finalize(day)

    def zerofy(self):
        """将本对象及所有子模拟对象的所有速率变量置零。"""
        if self.rates is not None:
            self.rates.zerofy()
        for simobj in self.subSimObjects:
            simobj.zerofy()


class AncillaryObject(HasTraits, DispatcherObject):
    """PMF辅助对象的基类。

    辅助对象本身不进行模拟计算（例如定时器和农事管理），但具有
    与 SimulationObject 相同的 self.logger、self.kiosk、属性锁定
    以及发送/接收信号的功能。
    """

    kiosk = Instance(VariableKiosk)
    params = Instance(ParamTemplate)

    def __init__(self, kiosk, *args, **kwargs):
        HasTraits.__init__(self)

        if not isinstance(kiosk, VariableKiosk):
            this = "%s.%s" % (self.__class__.__module__, self.__class__.__name__)
            msg = "%s should be instantiated with the VariableKiosk " \
                  "as first argument!"
            raise exc.PMFError(msg % this)

        self.kiosk = kiosk
        self.initialize(kiosk, *args, **kwargs)
        self.logger.debug("Component successfully initialized!")

    def initialize(self, *args, **kwargs):
        msg = "`initialize` method not yet implemented on %s" % self.__class__.__name__
        raise NotImplementedError(msg)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)

    def __setattr__(self, attr, value):
        if attr.startswith("_"):
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)

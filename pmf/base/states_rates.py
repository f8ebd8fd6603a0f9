# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import logging

from ..traitlets import (HasTraits, Float, Int, Instance, Bool, All)
from .. import exceptions as exc
from .variablekiosk import VariableKiosk


class ParamTemplate(HasTraits):
    """用于存储参数值的模板。

    此类应该被实际定义参数的类继承。可选参数的默认值在类属性 `_defaults`
    中给出；其余参数都是必需的，缺失时一次性报告所有缺失的参数名。

    示例::

        >>> from pmf.base import ParamTemplate
        >>> from pmf.traitlets import Float
        >>>
        >>> class Parameters(ParamTemplate):
        ...     A = Float()
        ...     B = Float()
        ...     C = Float()
        ...     _defaults = {"C": 0.}
        ...
        >>> params = Parameters({"A": 1., "B": -99})
        >>> params.A, params.B, params.C
        (1.0, -99.0, 0.0)
        >>> params = Parameters({"A": 1.})
        Traceback (most recent call last):
        ...
        pmf.exceptions.ConfigurationGapError: Value for parameter(s) B missing.

    :param parvalues: 参数名到参数值的字典
    :param kiosk: 可选的VariableKiosk，参数trait可以用它来读取已发布的变量
    """

    _defaults = {}
    _kiosk = Instance(VariableKiosk)

    def __init__(self, parvalues, kiosk=None):

        HasTraits.__init__(self)
        self._kiosk = kiosk

        missing = []
        for parname in sorted(self.trait_names()):
            if parname.startswith("trait") or parname.startswith("_"):
                continue
            if parname in parvalues:
                value = parvalues[parname]
            elif parname in self._defaults:
                value = self._defaults[parname]
                self.logger.debug("Parameter %s not given, using default %s" % (parname, value))
            else:
                missing.append(parname)
                continue
            setattr(self, parname, value)

        if missing:
            msg = "Value for parameter(s) %s missing." % ", ".join(missing)
            raise exc.ConfigurationGapError(msg)

    def __setattr__(self, attr, value):
        if attr.startswith("_"):
            HasTraits.__setattr__(self, attr, value)
        elif hasattr(self, attr):
            HasTraits.__setattr__(self, attr, value)
        else:
            msg = "Assignment to non-existing attribute '%s' prevented." % attr
            raise AttributeError(msg)

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)


def check_publish(publish):
    """将要发布的变量列表转换为具有唯一元素的集合。"""

    if publish is None:
        publish = []
    elif isinstance(publish, str):
        publish = [publish]
    elif isinstance(publish, (list, tuple)):
        pass
    else:
        msg = "The publish keyword should specify a string or a list of strings"
        raise RuntimeError(msg)
    return set(publish)


class StatesRatesCommon(HasTraits):
    _kiosk = Instance(VariableKiosk)
    _valid_vars = Instance(set)
    _published_vars = Instance(set)
    _locked = Bool(False)
    _namespace = None

    def __init__(self, kiosk=None, publish=None, namespace=None):
        """
        设置states和rates模板的通用部分，包括必须在kiosk中发布的变量。

        如果给定 namespace，变量在kiosk中以 "<namespace>.<变量名>" 登记。
        """

        HasTraits.__init__(self)

        if not isinstance(kiosk, VariableKiosk):
            msg = ("Variable Kiosk must be provided when instantiating rate " +
                   "or state variables.")
            raise RuntimeError(msg)
        self._kiosk = kiosk
        self._namespace = namespace

        publish = check_publish(publish)
        self._valid_vars = self._find_valid_variables()
        self._published_vars = set(publish)
        self._register_with_kiosk(publish)

    def _find_valid_variables(self):
        """
        返回有效state/rate变量名的集合，变量名不能以'trait'或'_'开头。
        """

        valid = lambda s: not (s.startswith("_") or s.startswith("trait"))
        r = [name for name in self.trait_names() if valid(name)]
        return set(r)

    def _kiosk_name(self, attr):
        if self._namespace:
            return "%s.%s" % (self._namespace, attr)
        return attr

    def _register_with_kiosk(self, publish):
        """
        在kiosk中登记所有变量；对需要发布的变量设置观察者，使kiosk中的值
        随变量的赋值自动更新。self._vartype 指定登记为state("S")还是rate("R")。
        """

        for attr in self._valid_vars:
            if attr in publish:
                publish.remove(attr)
                self._kiosk.register_variable(id(self), self._kiosk_name(attr),
                                              type=self._vartype, publish=True)
                self.observe(handler=self._update_kiosk, names=attr, type=All)
            else:
                self._kiosk.register_variable(id(self), self._kiosk_name(attr),
                                              type=self._vartype, publish=False)
        if len(publish) > 0:
            msg = ("Unknown variable(s) specified with the publish " +
                   "keyword: %s") % publish
            raise exc.PMFError(msg)

    def _update_kiosk(self, change):
        """通过trait通知更新kiosk。"""
        self._kiosk.set_variable(id(self), self._kiosk_name(change["name"]), change["new"])

    def _publish_all(self):
        """把所有发布变量的当前值写入kiosk"""
        for attr in self._published_vars:
            self._kiosk.set_variable(id(self), self._kiosk_name(attr), getattr(self, attr))

    def unlock(self):
        "解锁此类的属性。"
        self._locked = False

    def lock(self):
        "锁定此类的属性。"
        self._locked = True

    @property
    def logger(self):
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        return logging.getLogger(loggername)


class StatesTemplate(StatesRatesCommon):
    """负责为state变量分配初始值、在kiosk中登记变量并发布指定的变量。

    :param kiosk: VariableKiosk的实例
    :param publish: 需要在VariableKiosk中发布的变量名列表
    :param namespace: 可选的命名空间，例如器官名称

    State变量的初始值以关键字参数给出。

    示例::

        >>> from pmf.base import VariableKiosk, StatesTemplate
        >>> from pmf.traitlets import Float
        >>>
        >>> k = VariableKiosk()
        >>> class StateVariables(StatesTemplate):
        ...     LiveWt = Float()
        ...     DeadWt = Float()
        ...
        >>> s = StateVariables(k, LiveWt=2., DeadWt=0., publish="LiveWt",
        ...                    namespace="Leaf")
        >>> k["Leaf.LiveWt"]
        2.0
        >>> s.LiveWt = 3.
        >>> k["Leaf.LiveWt"]
        3.0
    """

    _vartype = "S"

    def __init__(self, kiosk=None, publish=None, namespace=None, **kwargs):

        StatesRatesCommon.__init__(self, kiosk, publish, namespace)

        for attr in self._valid_vars:
            if attr in kwargs:
                value = kwargs.pop(attr)
                setattr(self, attr, value)
            else:
                msg = "Initial value for state %s missing." % attr
                raise exc.PMFError(msg)

        if len(kwargs) > 0:
            msg = ("Initial value given for unknown state variable(s): " +
                   "%s") % list(kwargs.keys())
            self.logger.warning(msg)
        self._publish_all()

        self._locked = True


class RatesTemplate(StatesRatesCommon):
    """负责在kiosk中登记速率变量并发布指定的变量。

    用法与 `StatesTemplate` 相同，只是不需要初始值：Int、Float
    类型初始化为零，Bool 类型初始化为False。
    """

    _rate_vars_zero = Instance(dict)
    _vartype = "R"

    def __init__(self, kiosk=None, publish=None, namespace=None):

        StatesRatesCommon.__init__(self, kiosk, publish, namespace)
        self._rate_vars_zero = self._find_rate_zero_values()
        self.zerofy()
        self._locked = True

    def _find_rate_zero_values(self):
        """返回有效速率变量名到其零值的字典，供 zerofy() 使用。"""

        zero_value = {Bool: False, Int: 0, Float: 0.}

        d = {}
        for name, value in self.traits().items():
            if name not in self._valid_vars:
                continue
            try:
                d[name] = zero_value[value.__class__]
            except KeyError:
                msg = ("Rate variable '%s' not of type Float, Bool or Int. " +
                       "Its zero value cannot be determined and it will " +
                       "not be treated by zerofy().") % name
                self.logger.info(msg)
        return d

    def zerofy(self):
        """将所有速率变量的值设为零（Int，Float）或 False（Boolean）。"""
        self._trait_values.update(self._rate_vars_zero)
        self._publish_all()

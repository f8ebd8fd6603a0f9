# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
from .. import exceptions as exc


class VariableKiosk(dict):
    """
    VariableKiosk 用于在PMF中登记和发布模型变量。

    每个模拟实例拥有一个kiosk，它同时作为信号的发送者，使得同一进程中的
    多个模拟实例互不干扰。所有状态变量和速率变量都会登记到kiosk中，
    但只有声明为发布的变量才会在kiosk中有值，可以通过方括号或属性方式读取。

    器官的变量登记在器官名称的命名空间下（如 "Stem.LiveWt"），这样多个
    通用器官实例可以共存于同一个kiosk中。

    示例::

        >>> from pmf.base import VariableKiosk
        >>> k = VariableKiosk()
        >>> k.register_variable(1, "Stem.LiveWt", type="S", publish=True)
        >>> k.register_variable(1, "Stem.SenescingWt", type="R", publish=False)
        >>> k.set_variable(1, "Stem.LiveWt", 12.5)
        >>> k["Stem.LiveWt"]
        12.5
        >>> k.set_variable(2, "Stem.LiveWt", 10.)
        Traceback (most recent call last):
        ...
        pmf.exceptions.VariableKioskError: Unregistered object tried to set the value of variable 'Stem.LiveWt': access denied.
        >>> k.published_in_namespace("Stem")
        ['Stem.LiveWt']
    """

    def __init__(self):
        dict.__init__(self)
        self.registered_states = {}
        self.registered_rates = {}
        self.published_states = {}
        self.published_rates = {}

    def __setitem__(self, item, value):
        msg = "See set_variable() for setting a variable."
        raise RuntimeError(msg)

    def __getattr__(self, item):
        """允许通过属性方式访问已发布的变量，例如 'kiosk.PlantWt'。"""
        try:
            return dict.__getitem__(self, item)
        except KeyError:
            raise AttributeError(item)

    def __str__(self):
        msg = "Contents of VariableKiosk:\n"
        for label, registered, published in \
                [("state", self.registered_states, self.published_states),
                 ("rate", self.registered_rates, self.published_rates)]:
            msg += " * Registered %s variables: %i\n" % (label, len(registered))
            msg += " * Published %s variables: %i with values:\n" % (label, len(published))
            for varname in sorted(published):
                value = self[varname] if varname in self else "undefined"
                msg += "  - variable %s, value: %s\n" % (varname, value)
        return msg

    def register_variable(self, oid, varname, type, publish=False):
        """
        登记由对象 oid 拥有的变量 varname

        :param oid: 状态/速率对象的 id()
        :param varname: 变量名，例如 "Leaf.LiveWt"
        :param type: "R"（速率）或 "S"（状态）
        :param publish: 是否在kiosk中发布该变量的值
        """
        self._check_duplicate_variable(varname)
        if type.upper() == "R":
            registered, published = self.registered_rates, self.published_rates
        elif type.upper() == "S":
            registered, published = self.registered_states, self.published_states
        else:
            msg = "Variable type should be 'S'|'R'"
            raise exc.VariableKioskError(msg)

        registered[varname] = oid
        if publish is True:
            published[varname] = oid

    def deregister_variable(self, oid, varname):
        """对象 oid 请求从kiosk中注销变量 varname"""
        for registered, published in [(self.registered_states, self.published_states),
                                      (self.registered_rates, self.published_rates)]:
            if varname in registered:
                if oid != registered[varname]:
                    msg = "Wrong object tried to deregister variable '%s'." % varname
                    raise exc.VariableKioskError(msg)
                registered.pop(varname)
                published.pop(varname, None)
                self.pop(varname, None)
                return

        msg = "Failed to deregister variable '%s'!" % varname
        raise exc.VariableKioskError(msg)

    def _check_duplicate_variable(self, varname):
        if varname in self.registered_rates or varname in self.registered_states:
            msg = "Duplicate state/rate variable '%s' encountered!"
            raise exc.VariableKioskError(msg % varname)

    def set_variable(self, oid, varname, value):
        """允许拥有者 oid 更新已发布变量 varname 的值"""
        if varname in self.published_rates:
            owner = self.published_rates[varname]
        elif varname in self.published_states:
            owner = self.published_states[varname]
        else:
            msg = "Variable '%s' not published in VariableKiosk."
            raise exc.VariableKioskError(msg % varname)

        if owner != oid:
            msg = "Unregistered object tried to set the value of variable '%s': access denied."
            raise exc.VariableKioskError(msg % varname)
        dict.__setitem__(self, varname, value)

    def variable_exists(self, varname):
        """如果变量已在kiosk中登记则返回True"""
        return varname in self.registered_rates or varname in self.registered_states

    def published_in_namespace(self, namespace):
        """返回命名空间 namespace 下所有已发布变量的名称（排序后）"""
        prefix = namespace + "."
        names = list(self.published_states) + list(self.published_rates)
        return sorted(n for n in names if n.startswith(prefix))

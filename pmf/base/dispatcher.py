# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl)，2024年3月
from pydispatch import dispatcher


class DispatcherObject(object):
    """提供 _send_signal() 和 _connect_signal() 方法，只用于继承。

    信号的发送者总是对象自身的VariableKiosk，所以同一进程中的不同模拟
    实例只会收到自己的信号。
    """

    def _send_signal(self, signal, *args, **kwargs):
        """用 dispatcher 发送 <signal>，其余参数传递给 dispatcher.send()。"""

        self.logger.debug("Sent signal: %s" % signal)
        return dispatcher.send(signal=signal, sender=self.kiosk, *args, **kwargs)

    def _connect_signal(self, handler, signal):
        """将 handler 连接到来自本对象kiosk的 signal。"""

        dispatcher.connect(handler, signal, sender=self.kiosk)
        self.logger.debug("Connected handler '%s' to signal '%s'." % (handler, signal))

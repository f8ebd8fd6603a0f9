# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import datetime

from .base import AncillaryObject
from .traitlets import Instance, Bool, Int, Enum
from . import signals
from .util import is_a_dekad, is_a_month, is_a_week


class Timer(AncillaryObject):
    """模拟的日时钟。

    每次调用时日期增加一天并返回当前日期。按照模型配置中的输出间隔
    （daily、weekly、dekadal 或 monthly）发送OUTPUT信号，到达结束日期时
    发送TERMINATE信号::

        timer = Timer(kiosk, start_date, end_date, mconf)
        current_date = timer()

    **发送的信号:**

        * "OUTPUT": 满足输出间隔时发送；没有 OUTPUT_VARS 时不发送。
        * "TERMINATE": 到达结束日期时发送。
    """

    start_date = Instance(datetime.date)
    end_date = Instance(datetime.date)
    current_date = Instance(datetime.date)
    time_step = Instance(datetime.timedelta)
    interval_type = Enum(["daily", "weekly", "dekadal", "monthly"])
    output_weekday = Int()
    interval_days = Int()
    generate_output = Bool(False)
    day_counter = Int(0)
    first_call = Bool(True)

    def initialize(self, kiosk, start_date, end_date, mconf):
        """
        :param kiosk: 模拟实例的VariableKiosk
        :param start_date: 模拟的起始日期
        :param end_date: 模拟的结束日期
        :param mconf: ConfigurationLoader，提供 OUTPUT_VARS、OUTPUT_INTERVAL、
            OUTPUT_INTERVAL_DAYS 和 OUTPUT_WEEKDAY
        """
        self.kiosk = kiosk
        self.start_date = start_date
        self.end_date = end_date
        self.current_date = start_date
        self.generate_output = bool(mconf.OUTPUT_VARS)
        self.interval_type = mconf.OUTPUT_INTERVAL.lower()
        self.output_weekday = getattr(mconf, "OUTPUT_WEEKDAY", 0)
        self.interval_days = mconf.OUTPUT_INTERVAL_DAYS
        self.time_step = datetime.timedelta(days=1)

    def __call__(self):

        # 首次调用时只返回起始日期
        if self.first_call is True:
            self.first_call = False
            self.logger.debug("Model time at first call: %s" % self.current_date)
        else:
            self.current_date += self.time_step
            self.day_counter += 1
            self.logger.debug("Model time updated to: %s" % self.current_date)

        if self.generate_output and self._is_output_day():
            self._send_signal(signal=signals.output)

        if self.current_date >= self.end_date:
            msg = "Reached end of simulation period on %s." % self.current_date
            self.logger.info(msg)
            self._send_signal(signal=signals.terminate)

        return self.current_date

    def _is_output_day(self):
        if self.interval_type == "daily":
            return (self.day_counter % self.interval_days) == 0
        elif self.interval_type == "weekly":
            return is_a_week(self.current_date, self.output_weekday)
        elif self.interval_type == "dekadal":
            return is_a_dekad(self.current_date)
        return is_a_month(self.current_date)

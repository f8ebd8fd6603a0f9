# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl)，2024年3月
"""PMF中的农事管理

可用的类：

  * CropCalendar: 作物历，在播种、出苗和结束日期发送生命周期信号
  * TimedEventsDispatcher: 处理与日期相关联的事件，例如生物量移除
  * AgroManager: 封装作物历和定时事件
"""
from datetime import date
import logging

from .base import DispatcherObject, VariableKiosk, AncillaryObject
from .traitlets import HasTraits, Instance, List, Unicode
from .util import check_date
from . import exceptions as exc
from . import signals


def check_date_range(day, start, end):
    """如果 start <= day <= end 则返回True"""
    return start <= day <= end


class CropCalendar(HasTraits, DispatcherObject):
    """一个作物周期的作物历。

    在 `sowing_date` 发送 `plant_sowing` 信号，在 `emergence_date` 发送
    `plant_emerging` 信号，在 `crop_end_date` 发送 `plant_ending` 信号。
    播种和出苗可以在同一天。

    :param kiosk: VariableKiosk实例
    :param crop_name: 作物名称，用于选择植物参数
    :param variety_name: 品种名称
    :param sowing_date: 播种日期
    :param emergence_date: 出苗日期
    :param crop_end_date: 作物周期的结束日期
    """

    crop_name = Unicode()
    variety_name = Unicode()
    sowing_date = Instance(date)
    emergence_date = Instance(date)
    crop_end_date = Instance(date)

    kiosk = Instance(VariableKiosk)
    logger = Instance(logging.Logger)

    def __init__(self, kiosk, crop_name=None, variety_name=None, sowing_date=None,
                 emergence_date=None, crop_end_date=None):

        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        self.logger = logging.getLogger(loggername)
        self.kiosk = kiosk
        self.crop_name = crop_name
        self.variety_name = variety_name
        try:
            self.sowing_date = check_date(sowing_date)
            self.emergence_date = check_date(emergence_date)
            self.crop_end_date = check_date(crop_end_date)
        except KeyError as e:
            msg = "Invalid date in crop calendar for crop '%s': %s" % (crop_name, e)
            raise exc.PMFError(msg)

    def validate(self):
        """检查 sowing_date <= emergence_date < crop_end_date"""
        if self.emergence_date < self.sowing_date:
            msg = "emergence_date (%s) before sowing_date (%s) for crop '%s'!"
            raise exc.PMFError(msg % (self.emergence_date, self.sowing_date, self.crop_name))
        if self.crop_end_date <= self.emergence_date:
            msg = "crop_end_date (%s) before or equal to emergence_date (%s) for crop '%s'!"
            raise exc.PMFError(msg % (self.crop_end_date, self.emergence_date, self.crop_name))

    def start_events(self, day):
        """在播种和出苗日期发送相应的信号"""
        if day == self.sowing_date:
            msg = "Sowing crop (%s) with variety (%s) on day %s" % (self.crop_name, self.variety_name, day)
            self.logger.info(msg)
            self._send_signal(signal=signals.plant_sowing, day=day, crop_name=self.crop_name,
                              variety_name=self.variety_name)
        if day == self.emergence_date:
            self.logger.info("Crop (%s) emerging on day %s" % (self.crop_name, day))
            self._send_signal(signal=signals.plant_emerging, day=day)

    def end_events(self, day):
        """在结束日期发送 plant_ending 信号"""
        if day == self.crop_end_date:
            self.logger.info("Ending crop (%s) on day %s" % (self.crop_name, day))
            self._send_signal(signal=signals.plant_ending, day=day)

    def get_start_date(self):
        return self.sowing_date

    def get_end_date(self):
        return self.crop_end_date


class TimedEventsDispatcher(HasTraits, DispatcherObject):
    """处理与日期相关联的事件。

    在事件的日期分发信号（取自 `signals` 模块），事件表中的参数作为
    关键字参数随信号一起发送。下面的（YAML）示例在同一天从两个器官
    移除生物量::

        TimedEvents:
        -   event_signal: remove_biomass
            name: 收获
            comment: 移除比例
            events_table:
            - 2000-08-01: {organ_name: Grain, FractionLiveToRemove: 1.0}
            - 2000-08-01: {organ_name: Stem, FractionLiveToRemove: 0.8, FractionLiveToResidue: 0.2}

    同一天的多个事件按照表中的顺序分发。
    """
    event_signal = None
    events_table = List()
    kiosk = Instance(VariableKiosk)
    logger = Instance(logging.Logger)
    name = Unicode()
    comment = Unicode()

    def __init__(self, kiosk, event_signal, name, comment, events_table):
        """
        :param kiosk: VariableKiosk 的实例
        :param event_signal: 事件发生时分发的信号名（来自 pmf.signals）
        :param name: 事件调度器的名称
        :param comment: 用于日志消息的注释
        :param events_table: 字典的列表，每个字典只有一个键值对：事件日期
            以及随信号分发的参数字典
        """
        loggername = "%s.%s" % (self.__class__.__module__,
                                self.__class__.__name__)
        self.logger = logging.getLogger(loggername)

        self.kiosk = kiosk
        self.name = name
        self.comment = comment or ""

        if not hasattr(signals, event_signal):
            msg = "Signal '%s' not defined in pmf.signals module."
            raise exc.PMFError(msg % event_signal)
        self.event_signal = getattr(signals, event_signal)

        table = []
        for event in events_table:
            if len(event) != 1:
                msg = "Each entry in events table '%s' should hold exactly one date: %s"
                raise exc.PMFError(msg % (name, event))
            for day, kwargs in event.items():
                table.append({check_date(day): dict(kwargs or {})})
        self.events_table = table

    def validate(self, start_date, end_date):
        """检查所有事件都在模拟期内"""
        for event in self.events_table:
            day = list(event.keys())[0]
            if not check_date_range(day, start_date, end_date):
                msg = "Timed event at day %s not in simulation period (%s - %s)" % \
                      (day, start_date, end_date)
                raise exc.PMFError(msg)

    def __call__(self, day):
        for event in self.events_table:
            if day in event:
                msg = "Timed event dispatched from '%s' at day %s" % (self.name, day)
                self.logger.info(msg)
                self._send_signal(signal=self.event_signal, day=day, **event[day])

    def get_end_date(self):
        """返回最后一个事件的日期"""
        return max(list(event.keys())[0] for event in self.events_table)


class AgroManager(AncillaryObject):
    """
    单个作物周期的农事管理。

    农事管理由一个作物历和零个或多个定时事件组成。模拟从播种日期
    开始（或从可选的 StartDate 开始），在作物结束日期和最后一个定时事件
    中较晚的那一天结束（或在可选的 EndDate 结束）。

    一个农事管理定义文件示例::

        AgroManagement:
            StartDate: 2000-02-25
            CropCalendar:
                crop_name: wheat
                variety_name: generic
                sowing_date: 2000-03-01
                emergence_date: 2000-03-10
                crop_end_date: 2000-08-15
            TimedEvents:
            -   event_signal: remove_biomass
                name: 收获
                comment: 籽粒全部移除
                events_table:
                - 2000-08-01: {organ_name: Grain, FractionLiveToRemove: 1.0}

    每天先处理播种和出苗，然后是定时事件，最后是作物结束。
    """

    crop_calendar = Instance(CropCalendar)
    timed_event_dispatchers = List()

    _start_date = Instance(date)
    _end_date = Instance(date)

    def initialize(self, kiosk, agromanagement):
        """
        :param kiosk: VariableKiosk
        :param agromanagement: 农事管理的定义，见上方的YAML示例。
        """
        self.kiosk = kiosk

        if "AgroManagement" in agromanagement:
            agromanagement = agromanagement["AgroManagement"]
        if not agromanagement or agromanagement.get("CropCalendar") is None:
            msg = "Agromanagement definition should contain a CropCalendar."
            raise exc.PMFError(msg)

        self.crop_calendar = CropCalendar(kiosk, **agromanagement["CropCalendar"])
        self.crop_calendar.validate()

        self.timed_event_dispatchers = [TimedEventsDispatcher(kiosk, **ev_def)
                                        for ev_def in (agromanagement.get("TimedEvents") or [])]

        start_date = agromanagement.get("StartDate")
        self._start_date = self.crop_calendar.get_start_date() if start_date is None \
            else check_date(start_date)
        end_date = agromanagement.get("EndDate")
        if end_date is None:
            end_dates = [self.crop_calendar.get_end_date()]
            end_dates.extend(t.get_end_date() for t in self.timed_event_dispatchers
                             if t.events_table)
            self._end_date = max(end_dates)
        else:
            self._end_date = check_date(end_date)

        if self._start_date > self.crop_calendar.sowing_date:
            msg = "StartDate (%s) after sowing_date (%s)." % (self._start_date, self.crop_calendar.sowing_date)
            raise exc.PMFError(msg)
        if self._end_date < self.crop_calendar.crop_end_date:
            msg = "EndDate (%s) before crop_end_date (%s)." % (self._end_date, self.crop_calendar.crop_end_date)
            raise exc.PMFError(msg)
        for te in self.timed_event_dispatchers:
            te.validate(self._start_date, self._end_date)

    @property
    def start_date(self):
        """模拟的第一天"""
        return self._start_date

    @property
    def end_date(self):
        """模拟的最后一天"""
        return self._end_date

    def __call__(self, day):
        """执行当天的作物历操作和定时事件"""
        self.crop_calendar.start_events(day)
        for ev_dsp in self.timed_event_dispatchers:
            ev_dsp(day)
        self.crop_calendar.end_events(day)

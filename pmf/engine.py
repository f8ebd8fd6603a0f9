# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""PMF 引擎提供了 SimulationObjects 存活的环境。

该引擎负责读取模型配置、初始化模型组件（植物、地表残体和农事管理），
通过每天调用这些组件驱动模拟向前推进，跟踪时间并收集输出。
干物质和氮在器官之间的分配由外部注入的分配器完成。
"""
import datetime

from .traitlets import Instance, Bool, List, Dict, Any
from .base import VariableKiosk, AncillaryObject, SimulationObject, BaseEngine
from .util import check_date
from .base import ConfigurationLoader
from .timer import Timer
from . import signals
from . import exceptions as exc


class Engine(BaseEngine):
    """多器官植物的模拟引擎。

    :param parameterprovider: 提供植物参数的对象，例如 `YAMLOrganDataProvider`。
        如果它有 `set_active_plant()` 方法，引擎会用作物历中的作物名称调用它。
    :param agromanagement: 农事管理数据，格式见 `pmf.agromanager.AgroManager`。
    :param arbitrator: 分配器，可调用对象 ``arbitrator(day, organs)``，其中 organs 是
        已出苗器官的 (器官, 当天事务) 列表。
    :param config: 模型配置文件。只提供文件名时，假定它位于 'pmf/conf/' 中。
        `pmf.models.GenericPlantModel` 预先配置了 GenericPlant.conf。
    :param output_vars: 需要添加/替换到 OUTPUT_VARS 配置变量中的变量名
    :param summary_vars: 需要添加/替换到 SUMMARY_OUTPUT_VARS 配置变量中的变量名
    :param terminal_vars: 需要添加/替换到 TERMINAL_OUTPUT_VARS 配置变量中的变量名

    每天的顺序为：定时器 → 农事管理（播种、出苗、生物量移除、结束）→
    潜在生长 → 分配器 → 实际生长 → 输出。

    **Engine 处理的信号如下：**

        * PLANT_ENDING：在当天结束时执行植物的 `finalize()` 并保存汇总输出。
        * TERMINATE：执行地表残体的 `finalize()`，保存终端输出并终止模拟。
        * OUTPUT：在当天结束时保存 OUTPUT_VARS 中变量的副本。
    """
    # 系统配置
    mconf = Instance(ConfigurationLoader)
    parameterprovider = Any()
    arbitrator = Any()

    # 模拟子组件
    plant = Instance(SimulationObject)
    residues = Instance(SimulationObject)
    agromanager = Instance(AncillaryObject)

    kiosk = Instance(VariableKiosk)
    timer = Instance(Timer)
    day = Instance(datetime.date)

    # 由信号设置的标志位
    flag_terminate = Bool(False)
    flag_plant_ending = Bool(False)
    flag_output = Bool(False)

    # 在模型执行过程中保存变量的占位符
    _saved_output = List()
    _saved_summary_output = List()
    _saved_terminal_output = Dict()

    def __init__(self, parameterprovider, agromanagement, arbitrator, config=None,
                 output_vars=None, summary_vars=None, terminal_vars=None):

        BaseEngine.__init__(self)

        if not callable(arbitrator):
            msg = "The arbitrator should be a callable accepting (day, organs), got: %r" % arbitrator
            raise exc.PMFError(msg)
        self.arbitrator = arbitrator

        # 加载模型配置文件
        if config is not None:
            self.mconf = ConfigurationLoader(config)
        elif hasattr(self, "config"):
            self.mconf = ConfigurationLoader(self.config)
        else:
            msg = "No model configuration file. Specify model configuration file with " \
                  "`config=<path_to_config_file>` in the call to Engine()."
            raise exc.PMFError(msg)
        self.mconf.update_output_variable_lists(output_vars, summary_vars, terminal_vars)

        self.parameterprovider = parameterprovider

        # 用于注册和发布变量的变量管理台
        self.kiosk = VariableKiosk()

        self._saved_output = list()
        self._saved_summary_output = list()
        self._saved_terminal_output = dict()

        self._connect_signal(self._on_PLANT_ENDING, signal=signals.plant_ending)
        self._connect_signal(self._on_OUTPUT, signal=signals.output)
        self._connect_signal(self._on_TERMINATE, signal=signals.terminate)

        # 农事管理组件
        self.agromanager = self.mconf.AGROMANAGEMENT(self.kiosk, agromanagement)
        start_date = self.agromanager.start_date
        end_date = self.agromanager.end_date

        # 激活作物历中的植物参数集
        calendar = self.agromanager.crop_calendar
        if hasattr(parameterprovider, "set_active_plant"):
            parameterprovider.set_active_plant(calendar.crop_name, calendar.variety_name)

        # 地表残体和植物
        self.residues = self.mconf.RESIDUES(start_date, self.kiosk)
        self.plant = self.mconf.PLANT(start_date, self.kiosk, parameterprovider,
                                      residue_sink=self.residues)

        # 定时器：模拟起始日、结束日及模型输出
        self.timer = Timer(self.kiosk, start_date, end_date, self.mconf)
        self.day = self.timer()

        self._send_signal(signal=signals.commencing, day=self.day)
        self._step(self.day)

    def _step(self, day):
        """执行一天的农事管理、生长和输出"""

        self.agromanager(day)
        self._grow(day)

        if self.flag_output:
            self._save_output(day)

        if self.flag_plant_ending:
            self._finish_plant(day)

        if self.flag_terminate:
            self._terminate_simulation(day)

    def _grow(self, day):
        todays = self.plant.do_potential_growth(day)
        if not todays:
            return
        self.arbitrator(day, todays)
        self.plant.do_actual_growth(day, todays)

    def _run(self):
        """执行一步模拟时间步。"""
        self.day = self.timer()
        self._step(self.day)

    def run(self, days=1):
        """将系统状态推进指定天数"""

        days_done = 0
        while (days_done < days) and (self.flag_terminate is False):
            days_done += 1
            self._run()

    def run_till_terminate(self):
        """运行系统直到收到终止信号为止。"""

        while self.flag_terminate is False:
            self._run()

    def run_till(self, rday):
        """运行系统直到到达指定日期 rday。"""

        try:
            rday = check_date(rday)
        except KeyError:
            msg = "run_till() function needs a date object as input"
            raise exc.PMFError(msg)

        if rday <= self.day:
            msg = "date argument for run_till() function before current model date."
            self.logger.warning(msg)
            return

        while self.flag_terminate is False and self.day < rday:
            self._run()

    def _on_PLANT_ENDING(self, day):
        """收到PLANT_ENDING信号时设置标志位，植物在当天结束时完成"""
        self.flag_plant_ending = True

    def _on_TERMINATE(self):
        """接收到TERMINATE信号时，将变量'flag_terminate'设为True。"""
        self.flag_terminate = True

    def _on_OUTPUT(self):
        """接收到OUTPUT信号时，将变量'flag_output'设为True。"""
        self.flag_output = True

    def _finish_plant(self, day):
        """执行植物的finalize阶段并保存汇总输出"""
        self.flag_plant_ending = False
        self.plant.finalize(day)
        self._save_summary_output()

    def _terminate_simulation(self, day):
        """终止整个模拟过程。

        先执行地表残体的finalize()，然后收集并保存TERMINAL_OUTPUT。
        """
        self.residues.finalize(day)
        self._save_terminal_output()

    def _save_output(self, day):
        """保存当天 OUTPUT_VARS 中变量的值"""
        self.flag_output = False

        states = {"day": day}
        for var in self.mconf.OUTPUT_VARS:
            states[var] = self.get_variable(var)
        self._saved_output.append(states)

    def _save_summary_output(self):
        states = {}
        for var in self.mconf.SUMMARY_OUTPUT_VARS:
            states[var] = self.get_variable(var)
        self._saved_summary_output.append(states)

    def _save_terminal_output(self):
        for var in getattr(self.mconf, "TERMINAL_OUTPUT_VARS", []):
            self._saved_terminal_output[var] = self.get_variable(var)

    def get_output(self):
        """返回模拟过程中存储的变量。

        输出按时间顺序以字典列表的形式返回，每个字典是某一天存储的模型变量，
        可以直接转换为 pandas.DataFrame。"""

        return self._saved_output

    def get_summary_output(self):
        """返回植物结束时存储的汇总变量。"""

        return self._saved_summary_output

    def get_terminal_output(self):
        """返回模拟结束时存储的终端输出变量。"""

        return self._saved_terminal_output

# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
"""本模块定义和描述 PMF 中使用的信号

PMF 使用信号通知各组件事件的发生，如模拟开始、播种、出苗、植株结束和
生物量移除。任意 SimulationObject 可以通过 `_send_signal()` 发送信号，
通过 `_connect_signal()` 注册处理器。信号的发送者总是模拟实例的
VariableKiosk。发送信号时请只使用关键字参数。更多信息见 PyDispatcher_ 的文档。

目前 PMF 使用如下信号及其关键字参数：

**COMMENCING**

 模拟开始，所有器官清空各自的库::

     self._send_signal(signal=signals.commencing, day=<date>)

**PLANT_SOWING**

 播种::

     self._send_signal(signal=signals.plant_sowing, day=<date>,
                       crop_name=<string>, variety_name=<string>)

**PLANT_EMERGING**

 出苗，器官用初始重量和氮浓度初始化活体库::

     self._send_signal(signal=signals.plant_emerging, day=<date>)

**PLANT_ENDING**

 植株结束，所有活体和死亡生物量进入地表残体::

     self._send_signal(signal=signals.plant_ending, day=<date>)

**REMOVE_BIOMASS**

 从一个器官移除生物量（收获、刈割、放牧等）::

     self._send_signal(signal=signals.remove_biomass, day=<date>,
                       organ_name=<string>, FractionLiveToRemove=<float>,
                       FractionDeadToRemove=<float>, FractionLiveToResidue=<float>,
                       FractionDeadToResidue=<float>)

 未给出的移除比例为零。

**OUTPUT**

 表示模型状态需要被保存以供以后使用，此信号无关键字参数::

    self._send_signal(signal=signals.output)

**TERMINATE**

 表示整个模拟应终止并收集终端输出，此信号无关键字参数::

    self._send_signal(signal=signals.terminate)

.. _PyDispatcher: http://pydispatcher.sourceforge.net/
"""

commencing = "COMMENCING"
plant_sowing = "PLANT_SOWING"
plant_emerging = "PLANT_EMERGING"
plant_ending = "PLANT_ENDING"
remove_biomass = "REMOVE_BIOMASS"
output = "OUTPUT"
terminate = "TERMINATE"

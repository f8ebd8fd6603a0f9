# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import unittest
from datetime import date, timedelta

import yaml
from pydispatch import dispatcher

from ..base import VariableKiosk
from ..agromanager import AgroManager
from ..input import YAMLAgroManagementReader
from .. import signals
from .. import exceptions as exc
from .test_data import agromanagement_file

agro_template = """
AgroManagement:
    CropCalendar:
        crop_name: wheat
        variety_name: generic
        sowing_date: 2000-03-01
        emergence_date: {emergence}
        crop_end_date: 2000-05-31
    TimedEvents:
    -   event_signal: remove_biomass
        name: 收获
        comment: 籽粒全部移除
        events_table:
        - {event}: {{organ_name: Grain, FractionLiveToRemove: 1.0}}
        - {event}: {{organ_name: Stem, FractionLiveToResidue: 0.5}}
"""


class SignalCollector(object):
    """记录从一个kiosk收到的所有信号"""

    def __init__(self, kiosk):
        self.received = []
        for signal in [signals.plant_sowing, signals.plant_emerging, signals.plant_ending,
                       signals.remove_biomass]:
            dispatcher.connect(self.handler, signal, sender=kiosk)

    def handler(self, signal, sender, **kwargs):
        self.received.append((kwargs["day"], signal, kwargs))


class Test_AgroManager(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()
        self.collector = SignalCollector(self.kiosk)

    def make_agromanager(self, emergence="2000-03-05", event="2000-05-20"):
        agro = yaml.safe_load(agro_template.format(emergence=emergence, event=event))
        return AgroManager(self.kiosk, agro)

    def run_agromanager(self, agromanager):
        day = agromanager.start_date
        while day <= agromanager.end_date:
            agromanager(day)
            day += timedelta(days=1)

    def test_dates(self):
        am = self.make_agromanager()
        self.assertEqual(am.start_date, date(2000, 3, 1))
        self.assertEqual(am.end_date, date(2000, 5, 31))

    def test_event_after_crop_end_extends_simulation(self):
        am = self.make_agromanager(event="2000-06-10")
        self.assertEqual(am.end_date, date(2000, 6, 10))

    def test_signal_order(self):
        am = self.make_agromanager()
        self.run_agromanager(am)
        names = [(day, sig) for day, sig, _ in self.collector.received]
        self.assertEqual(names, [(date(2000, 3, 1), signals.plant_sowing),
                                 (date(2000, 3, 5), signals.plant_emerging),
                                 (date(2000, 5, 20), signals.remove_biomass),
                                 (date(2000, 5, 20), signals.remove_biomass),
                                 (date(2000, 5, 31), signals.plant_ending)])
        sowing = self.collector.received[0][2]
        self.assertEqual(sowing["crop_name"], "wheat")
        removal = self.collector.received[3][2]
        self.assertEqual(removal["organ_name"], "Stem")
        self.assertEqual(removal["FractionLiveToResidue"], 0.5)

    def test_same_day_sowing_and_emergence(self):
        am = self.make_agromanager(emergence="2000-03-01")
        am(date(2000, 3, 1))
        names = [sig for _, sig, _ in self.collector.received]
        self.assertEqual(names, [signals.plant_sowing, signals.plant_emerging])

    def test_invalid_calendar(self):
        self.assertRaises(exc.PMFError, self.make_agromanager, emergence="2000-02-01")
        self.assertRaises(exc.PMFError, self.make_agromanager, emergence="2000-05-31")
        self.assertRaises(exc.PMFError, AgroManager, self.kiosk, {"AgroManagement": {}})

    def test_event_before_start(self):
        self.assertRaises(exc.PMFError, self.make_agromanager, event="2000-02-01")

    def test_unknown_signal(self):
        agro = yaml.safe_load(agro_template.format(emergence="2000-03-05", event="2000-05-20"))
        agro["AgroManagement"]["TimedEvents"][0]["event_signal"] = "irrigate"
        self.assertRaises(exc.PMFError, AgroManager, self.kiosk, agro)

    def test_reader(self):
        agro = YAMLAgroManagementReader(agromanagement_file)
        self.assertEqual(agro["CropCalendar"]["crop_name"], "wheat")
        am = AgroManager(self.kiosk, agro)
        self.assertEqual(am.end_date, date(2000, 5, 31))
        self.assertRaises(exc.PMFError, YAMLAgroManagementReader, "does_not_exist.yaml")


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_AgroManager))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

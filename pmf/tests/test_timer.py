# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import unittest
from datetime import date

from pydispatch import dispatcher

from ..base import VariableKiosk, ConfigurationLoader
from ..timer import Timer
from .. import signals
from .. import exceptions as exc


class Test_Timer(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()
        self.mconf = ConfigurationLoader("GenericPlant.conf")
        self.output_days = []
        self.terminated = []
        dispatcher.connect(self.on_output, signals.output, sender=self.kiosk)
        dispatcher.connect(self.on_terminate, signals.terminate, sender=self.kiosk)

    def on_output(self):
        self.output_days.append(self.timer.current_date)

    def on_terminate(self):
        self.terminated.append(self.timer.current_date)

    def run_timer(self, start, end):
        self.timer = Timer(self.kiosk, start, end, self.mconf)
        days = []
        while not self.terminated:
            days.append(self.timer())
        return days

    def test_daily(self):
        days = self.run_timer(date(2000, 1, 1), date(2000, 1, 10))
        self.assertEqual(len(days), 10)
        self.assertEqual(days[0], date(2000, 1, 1))
        self.assertEqual(self.output_days, days)
        self.assertEqual(self.terminated, [date(2000, 1, 10)])

    def test_every_third_day(self):
        self.mconf.OUTPUT_INTERVAL_DAYS = 3
        self.run_timer(date(2000, 1, 1), date(2000, 1, 10))
        self.assertEqual(self.output_days, [date(2000, 1, 1), date(2000, 1, 4), date(2000, 1, 7),
                                            date(2000, 1, 10)])

    def test_dekadal(self):
        self.mconf.OUTPUT_INTERVAL = "dekadal"
        self.run_timer(date(2000, 1, 1), date(2000, 2, 15))
        self.assertEqual(self.output_days, [date(2000, 1, 10), date(2000, 1, 20), date(2000, 1, 31),
                                            date(2000, 2, 10)])

    def test_weekly(self):
        self.mconf.OUTPUT_INTERVAL = "weekly"
        self.mconf.OUTPUT_WEEKDAY = 6
        self.run_timer(date(2000, 1, 1), date(2000, 1, 14))
        self.assertEqual(self.output_days, [date(2000, 1, 2), date(2000, 1, 9)])

    def test_no_output_vars(self):
        self.mconf.OUTPUT_VARS = []
        self.run_timer(date(2000, 1, 1), date(2000, 1, 5))
        self.assertEqual(self.output_days, [])


class Test_ConfigurationLoader(unittest.TestCase):

    def test_load(self):
        mconf = ConfigurationLoader("GenericPlant.conf")
        self.assertEqual(mconf.PLANT.__name__, "Plant")
        self.assertEqual(mconf.OUTPUT_INTERVAL, "daily")
        self.assertIn("PMF", mconf.description)
        self.assertIn("OUTPUT_VARS", str(mconf))

    def test_update_output_variables(self):
        mconf = ConfigurationLoader("GenericPlant.conf")
        n = len(mconf.OUTPUT_VARS)
        mconf.update_output_variable_lists(output_vars="Leaf.DetachedWt Leaf.RemovedWt")
        self.assertEqual(len(mconf.OUTPUT_VARS), n + 2)
        mconf.update_output_variable_lists(terminal_vars={"SurfaceOMOther"})
        self.assertEqual(mconf.TERMINAL_OUTPUT_VARS, ["SurfaceOMOther"])
        self.assertRaises(exc.PMFError, mconf.update_output_variable_lists, summary_vars=3)

    def test_invalid(self):
        self.assertRaises(exc.PMFError, ConfigurationLoader, 42)
        self.assertRaises(exc.PMFError, ConfigurationLoader, "Missing.conf")


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_Timer))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_ConfigurationLoader))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

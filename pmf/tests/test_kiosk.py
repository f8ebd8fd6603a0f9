# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import unittest

from ..base import VariableKiosk, StatesTemplate, RatesTemplate
from ..traitlets import Float, Int
from .. import exceptions as exc


class StateVariables(StatesTemplate):
    LiveWt = Float()
    DeadWt = Float()


class RateVariables(RatesTemplate):
    SenescingWt = Float()
    Counter = Int()


class Test_VariableKiosk(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()

    def test_register_and_set(self):
        k = self.kiosk
        k.register_variable(1, "Stem.LiveWt", type="S", publish=True)
        k.register_variable(1, "Stem.SenescingWt", type="R", publish=False)
        self.assertTrue(k.variable_exists("Stem.SenescingWt"))
        k.set_variable(1, "Stem.LiveWt", 12.5)
        self.assertEqual(k["Stem.LiveWt"], 12.5)
        self.assertRaises(exc.VariableKioskError, k.set_variable, 1, "Stem.SenescingWt", 1.)
        self.assertRaises(exc.VariableKioskError, k.set_variable, 2, "Stem.LiveWt", 1.)
        self.assertRaises(RuntimeError, k.__setitem__, "Stem.LiveWt", 1.)

    def test_duplicate_and_type(self):
        k = self.kiosk
        k.register_variable(1, "DAS", type="S", publish=True)
        self.assertRaises(exc.VariableKioskError, k.register_variable, 2, "DAS", type="R")
        self.assertRaises(exc.VariableKioskError, k.register_variable, 2, "DAE", type="X")

    def test_attribute_access(self):
        k = self.kiosk
        k.register_variable(1, "PlantWt", type="S", publish=True)
        k.set_variable(1, "PlantWt", 3.)
        self.assertEqual(k.PlantWt, 3.)
        self.assertRaises(AttributeError, getattr, k, "PlantN")

    def test_deregister(self):
        k = self.kiosk
        k.register_variable(1, "Leaf.LiveWt", type="S", publish=True)
        k.set_variable(1, "Leaf.LiveWt", 1.)
        self.assertRaises(exc.VariableKioskError, k.deregister_variable, 2, "Leaf.LiveWt")
        k.deregister_variable(1, "Leaf.LiveWt")
        self.assertFalse(k.variable_exists("Leaf.LiveWt"))
        self.assertNotIn("Leaf.LiveWt", k)
        self.assertRaises(exc.VariableKioskError, k.deregister_variable, 1, "Leaf.LiveWt")

    def test_namespace(self):
        k = self.kiosk
        k.register_variable(1, "Leaf.LiveWt", type="S", publish=True)
        k.register_variable(1, "Leaf.DeadWt", type="S", publish=True)
        k.register_variable(2, "Stem.LiveWt", type="S", publish=True)
        k.register_variable(1, "Leaf.SenescingWt", type="R", publish=False)
        self.assertEqual(k.published_in_namespace("Leaf"), ["Leaf.DeadWt", "Leaf.LiveWt"])


class Test_StatesRates(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()

    def test_states_published_with_namespace(self):
        s = StateVariables(self.kiosk, publish=["LiveWt"], namespace="Leaf", LiveWt=0., DeadWt=0.)
        # 初始值即使等于默认值也会发布
        self.assertEqual(self.kiosk["Leaf.LiveWt"], 0.)
        s.LiveWt = 3.
        self.assertEqual(self.kiosk["Leaf.LiveWt"], 3.)
        self.assertTrue(self.kiosk.variable_exists("Leaf.DeadWt"))
        self.assertNotIn("Leaf.DeadWt", self.kiosk)

    def test_two_namespaces(self):
        StateVariables(self.kiosk, publish=["LiveWt"], namespace="Leaf", LiveWt=1., DeadWt=0.)
        StateVariables(self.kiosk, publish=["LiveWt"], namespace="Stem", LiveWt=2., DeadWt=0.)
        self.assertEqual(self.kiosk["Leaf.LiveWt"], 1.)
        self.assertEqual(self.kiosk["Stem.LiveWt"], 2.)
        self.assertRaises(exc.VariableKioskError, StateVariables, self.kiosk, namespace="Stem",
                          LiveWt=2., DeadWt=0.)

    def test_missing_initial_value(self):
        self.assertRaises(exc.PMFError, StateVariables, self.kiosk, LiveWt=1.)

    def test_unknown_publish(self):
        self.assertRaises(exc.PMFError, StateVariables, self.kiosk, publish=["TotalWt"],
                          LiveWt=1., DeadWt=0.)

    def test_rates_zerofy(self):
        r = RateVariables(self.kiosk, publish=["SenescingWt"], namespace="Leaf")
        self.assertEqual(self.kiosk["Leaf.SenescingWt"], 0.)
        r.SenescingWt = 0.4
        r.Counter = 3
        self.assertEqual(self.kiosk["Leaf.SenescingWt"], 0.4)
        r.zerofy()
        self.assertEqual(r.SenescingWt, 0.)
        self.assertEqual(r.Counter, 0)
        self.assertEqual(self.kiosk["Leaf.SenescingWt"], 0.)

    def test_kiosk_required(self):
        self.assertRaises(RuntimeError, RateVariables, None)


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_VariableKiosk))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_StatesRates))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import unittest

from ..base import VariableKiosk, ParamTemplate
from ..functions import Constant, AfgenFunction, FunctionTrait
from ..util import Afgen
from .. import exceptions as exc


class Parameters(ParamTemplate):
    Rate = FunctionTrait()
    Demand = FunctionTrait()
    Optional = FunctionTrait()
    _defaults = {"Optional": None}


class Test_Afgen(unittest.TestCase):

    def test_interpolation(self):
        f = Afgen([0, 0, 1, 1, 5, 10])
        self.assertAlmostEqual(f(0.5), 0.5)
        self.assertAlmostEqual(f(1.5), 2.125)
        self.assertEqual(f(6), 10.)
        self.assertEqual(f(-1), 0.)

    def test_invalid_table(self):
        self.assertRaises(ValueError, Afgen, [0, 1, 2])
        self.assertRaises(ValueError, Afgen, [0, 1, 0, 2])
        self.assertRaises(ValueError, Afgen, [])


class Test_ParameterFunctions(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()
        self.kiosk.register_variable(1, "DAE", type="S", publish=True)
        self.kiosk.set_variable(1, "DAE", 5)

    def test_constant(self):
        c = Constant(3)
        self.assertEqual(c(), 3.)

    def test_afgen_function(self):
        f = AfgenFunction(self.kiosk, "DAE", [0, 1., 10, 2.])
        self.assertAlmostEqual(f(), 1.5)
        self.kiosk.set_variable(1, "DAE", 20)
        self.assertAlmostEqual(f(), 2.)

    def test_afgen_unavailable_variable(self):
        f = AfgenFunction(self.kiosk, "Leaf.LiveWt", [0, 1., 10, 2.])
        self.assertRaises(exc.ParameterError, f)

    def test_afgen_needs_kiosk(self):
        self.assertRaises(exc.ParameterError, AfgenFunction, None, "DAE", [0, 1.])

    def test_trait_conversion(self):
        p = Parameters({"Rate": 0.1,
                        "Demand": {"XVariable": "DAE", "Table": [0, 0., 10, 1.]}}, self.kiosk)
        self.assertIsInstance(p.Rate, Constant)
        self.assertAlmostEqual(p.Rate(), 0.1)
        self.assertIsInstance(p.Demand, AfgenFunction)
        self.assertAlmostEqual(p.Demand(), 0.5)
        self.assertIsNone(p.Optional)

    def test_trait_callable(self):
        p = Parameters({"Rate": lambda: 0.25, "Demand": 1, "Optional": 2.}, self.kiosk)
        self.assertEqual(p.Rate(), 0.25)
        self.assertEqual(p.Optional(), 2.)

    def test_trait_invalid_value(self):
        self.assertRaises(Exception, Parameters, {"Rate": "fast", "Demand": 1.}, self.kiosk)
        self.assertRaises(exc.ParameterError, Parameters,
                          {"Rate": 1., "Demand": {"XVariable": "DAE", "Table": [1, 0., 0, 1.]}},
                          self.kiosk)

    def test_missing_parameter(self):
        with self.assertRaises(exc.ConfigurationGapError) as cm:
            Parameters({"Rate": 1.}, self.kiosk)
        self.assertEqual(str(cm.exception), "Value for parameter(s) Demand missing.")


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_Afgen))
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_ParameterFunctions))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

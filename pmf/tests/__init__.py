# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
""" PMF的测试集合。
"""
import unittest
import warnings

from . import test_kiosk
from . import test_functions
from . import test_biomass
from . import test_generic_organ
from . import test_surface_organic_matter
from . import test_plant
from . import test_timer
from . import test_agromanager
from . import test_engine
from . import test_yaml_organdataprovider


def make_test_suite():
    """组装测试套件并返回
    """
    allsuites = unittest.TestSuite([
                                    test_kiosk.suite(),
                                    test_functions.suite(),
                                    test_biomass.suite(),
                                    test_generic_organ.suite(),
                                    test_surface_organic_matter.suite(),
                                    test_plant.suite(),
                                    test_timer.suite(),
                                    test_agromanager.suite(),
                                    test_engine.suite(),
                                    test_yaml_organdataprovider.suite(),
                                    ])
    return allsuites


def test_all():
    """组装测试套件并通过TextTestRunner运行测试
    """
    allsuites = make_test_suite()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        unittest.TextTestRunner(verbosity=2).run(allsuites)

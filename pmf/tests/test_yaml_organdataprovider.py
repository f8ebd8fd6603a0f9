# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import os
import tempfile
import unittest
from unittest import mock

import requests

from ..input import YAMLOrganDataProvider
from .. import exceptions as exc
from .test_data import plant_parameter_file


class Test_YAMLOrganDataProvider(unittest.TestCase):

    def test_set_active_plant(self):
        p = YAMLOrganDataProvider(fpath=plant_parameter_file)
        self.assertEqual(len(p), 0)
        self.assertEqual(p.get_plants(), ["wheat"])
        p.set_active_plant("wheat", "generic")
        self.assertEqual(p["CropType"], "wheat")
        self.assertEqual(list(p["Organs"]), ["Leaf", "Stem", "Root", "Grain"])
        leaf = p["Organs"]["Leaf"]
        self.assertEqual(leaf["InitialWt"], 2.0)
        self.assertEqual(leaf["SenescenceRate"]["XVariable"], "DAE")
        self.assertIn("current active plant 'wheat'", str(p))

    def test_unknown_plant(self):
        p = YAMLOrganDataProvider(fpath=plant_parameter_file)
        self.assertRaises(exc.PMFError, p.set_active_plant, "maize")

    def test_source_required(self):
        self.assertRaises(exc.PMFError, YAMLOrganDataProvider)
        self.assertRaises(exc.PMFError, YAMLOrganDataProvider, fpath="does_not_exist.yaml")

    def test_version_check(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            fname = os.path.join(tmpdir, "plants.yaml")
            with open(fname, "w", encoding="utf-8") as fp:
                fp.write("Version: 0.9.0\nPlantParameters:\n    Plants: {}\n")
            self.assertRaises(exc.PMFError, YAMLOrganDataProvider, fpath=fname)

    def test_remote_file(self):
        with open(plant_parameter_file, encoding="utf-8") as fp:
            text = fp.read()
        response = mock.Mock(text=text)
        with mock.patch("requests.get", return_value=response) as get:
            p = YAMLOrganDataProvider(repository="https://example.org/generic_plant.yaml")
        get.assert_called_once_with("https://example.org/generic_plant.yaml")
        p.set_active_plant("wheat")
        self.assertEqual(sorted(p["Organs"]), ["Grain", "Leaf", "Root", "Stem"])

    def test_remote_failure(self):
        with mock.patch("requests.get", side_effect=requests.ConnectionError("offline")):
            self.assertRaises(exc.PMFError, YAMLOrganDataProvider,
                              repository="https://example.org/generic_plant.yaml")


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_YAMLOrganDataProvider))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

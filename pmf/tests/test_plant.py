# -*- coding: utf-8 -*-
# 版权所有 (c) 2004-2024 Wageningen Environmental Research, Wageningen-UR
# Allard de Wit (allard.dewit@wur.nl), 2024年3月
import unittest
from datetime import date, timedelta

from pydispatch import dispatcher

from ..base import VariableKiosk
from ..plant import Plant
from ..soil import SurfaceOrganicMatter
from .. import signals
from .. import exceptions as exc
from .test_data import organ_parameters, FractionArbitrator

start = date(2000, 3, 1)


class Test_Plant(unittest.TestCase):

    def setUp(self):
        self.kiosk = VariableKiosk()
        parvalues = {"CropType": "wheat",
                     "Organs": {"Leaf": organ_parameters(SenescenceRate=0.1, DetachmentRate=0.5),
                                "Root": organ_parameters(InitialWt=1.)}}
        self.residues = SurfaceOrganicMatter(start, self.kiosk)
        self.plant = Plant(start, self.kiosk, parvalues, residue_sink=self.residues)
        self.arbitrator = FractionArbitrator()

    def send(self, signal, **kwargs):
        dispatcher.send(signal=signal, sender=self.kiosk, **kwargs)

    def grow(self, day):
        todays = self.plant.do_potential_growth(day)
        if todays:
            self.arbitrator(day, todays)
        self.plant.do_actual_growth(day, todays)

    def start_plant(self):
        self.send(signals.commencing, day=start)
        self.send(signals.plant_sowing, day=start, crop_name="wheat", variety_name="generic")
        self.send(signals.plant_emerging, day=start + timedelta(days=2))

    def test_organs_created_in_order(self):
        self.assertEqual(self.plant.organ_names, ["Leaf", "Root"])
        self.assertEqual(self.plant.organs["Leaf"].crop_type, "wheat")

    def test_lifecycle_signals(self):
        self.start_plant()
        self.assertEqual(self.plant.phase, "emerged")
        self.assertAlmostEqual(self.kiosk["PlantWt"], 3.)
        self.assertEqual(self.plant.get_variable("DOE"), start + timedelta(days=2))

        day = start + timedelta(days=5)
        self.grow(day)
        self.assertEqual(self.kiosk["DAS"], 5)
        self.assertEqual(self.kiosk["DAE"], 3)
        self.assertGreater(self.kiosk["PlantWt"], 3.)
        self.assertGreater(self.kiosk["Leaf.DetachedWt"], 0.)

        self.send(signals.plant_ending, day=day)
        self.plant.finalize(day)
        self.assertEqual(self.kiosk["PlantWt"], 0.)
        self.assertEqual(self.plant.get_variable("DOF"), day)
        detached = self.kiosk["Leaf.DetachedWt"] + self.kiosk["Root.DetachedWt"]
        self.assertAlmostEqual(self.kiosk["SurfaceOMWt"], detached * 10.)

    def test_no_growth_before_emergence(self):
        self.send(signals.commencing, day=start)
        self.send(signals.plant_sowing, day=start)
        self.assertEqual(self.plant.do_potential_growth(start + timedelta(days=1)), [])
        self.assertEqual(self.kiosk["DAS"], 1)

    def test_remove_biomass_signal(self):
        self.start_plant()
        self.send(signals.remove_biomass, day=start + timedelta(days=2), organ_name="Root",
                  FractionLiveToRemove=0.5)
        self.assertAlmostEqual(self.kiosk["Root.RemovedWt"], 0.5)
        self.assertAlmostEqual(self.kiosk["PlantWt"], 2.5)

    def test_remove_biomass_unknown_organ(self):
        self.start_plant()
        self.assertRaises(exc.BiomassRemovalError, self.send, signals.remove_biomass,
                          day=start, organ_name="Flower", FractionLiveToRemove=0.5)

    def test_organ_variables(self):
        self.start_plant()
        self.grow(start + timedelta(days=2))
        self.assertAlmostEqual(self.plant.get_variable("Leaf.SenescingWt"), 0.3)
        self.assertIsNone(self.plant.get_variable("Leaf.Unknown"))

    def test_no_organs(self):
        kiosk = VariableKiosk()
        self.assertRaises(exc.ParameterError, Plant, start, kiosk, {"CropType": "wheat", "Organs": {}})


def suite():
    """ 该函数定义了本模块中所有测试 """
    suite = unittest.TestSuite()
    suite.addTest(unittest.defaultTestLoader.loadTestsFromTestCase(Test_Plant))
    return suite


if __name__ == '__main__':
    unittest.TextTestRunner(verbosity=2).run(suite())

import unittest
from src.calculators.well_engine.models import SimulationSample, StitchedPoint, PickupWeight
from src.calculators.well_engine.run_stitcher import (
    stitch_run_data, preview_run_data, chart_domain, generate_ticks, pickup_deviations
)


def samples(depths, rih, pooh):
    return [SimulationSample(md=float(md), rih=rih(md), pooh=pooh(md)) for md in depths]


def by_md(points):
    return {p.md: p for p in points}


class StitchDegenerateTests(unittest.TestCase):

    def setUp(self):
        self.rih = samples(range(0, 1001, 100), lambda md: md / 10, lambda md: -md / 10)

    def test_no_tractor_maps_rih_to_standard_1(self):
        points = stitch_run_data(self.rih, None, None, 0, 0)

        self.assertEqual(len(points), len(self.rih))
        for sample, point in zip(self.rih, points):
            self.assertEqual(point.md, sample.md)
            self.assertEqual(point.rih_standard_1, sample.rih)
            self.assertIsNone(point.rih_tractor)
            self.assertIsNone(point.rih_standard_2)
            self.assertEqual(point.pooh, sample.pooh)

    def test_no_tractor_with_pooh_override(self):
        pooh = samples([0, 100.3, 200], lambda md: None, lambda md: 999.0)
        points = by_md(stitch_run_data(self.rih, None, pooh))

        self.assertEqual(points[0.0].pooh, 999.0)
        self.assertEqual(points[100.0].pooh, 999.0)   # within 0.5
        self.assertIsNone(points[300.0].pooh)         # no override sample

    def test_empty_rih(self):
        self.assertEqual(stitch_run_data([], self.rih), [])

    def test_preview_matches_degenerate_stitch(self):
        self.assertEqual(preview_run_data(self.rih), stitch_run_data(self.rih))


class StitchPhaseTests(unittest.TestCase):

    def setUp(self):
        # tractor off 0-1000 (ends early), tractor on 500-1500
        self.rih = samples(range(0, 1001, 100), lambda md: md / 10, lambda md: -md / 10)
        self.tractor = samples(range(500, 1501, 100), lambda md: 500 + md / 100, lambda md: 2000 + md / 100)

    def test_phase_boundaries_with_fallback(self):
        points = stitch_run_data(self.rih, self.tractor, None, 500, 1200)
        mds = [p.md for p in points]
        self.assertEqual(mds, sorted(mds))
        self.assertEqual(mds, [float(md) for md in range(0, 1501, 100)])

        for p in points:
            if p.md < 400:
                self.assertEqual(p.rih_standard_1, p.md / 10)
                self.assertIsNone(p.rih_tractor)
                self.assertIsNone(p.rih_standard_2)
            elif 500 <= p.md < 1100:
                self.assertIsNone(p.rih_standard_1)
                self.assertEqual(p.rih_tractor, 500 + p.md / 100)
                self.assertIsNone(p.rih_standard_2)
            elif p.md >= 1200:
                self.assertIsNone(p.rih_standard_1)
                self.assertIsNone(p.rih_tractor)
                # tractor-off file stops at 1000: last phase 1 value carried
                self.assertEqual(p.rih_standard_2, 40.0)

    def test_connector_points(self):
        points = by_md(stitch_run_data(self.rih, self.tractor, None, 500, 1200))

        # last phase 1 point also starts the tractor line
        self.assertEqual(points[400.0].rih_standard_1, 40.0)
        self.assertEqual(points[400.0].rih_tractor, 40.0)
        # last tractor point also starts the phase 3 line
        self.assertEqual(points[1100.0].rih_tractor, 511.0)
        self.assertEqual(points[1100.0].rih_standard_2, 511.0)

    def test_phase_3_reads_tractor_off_file(self):
        rih = samples(range(0, 1501, 100), lambda md: md / 10, lambda md: None)
        points = by_md(stitch_run_data(rih, self.tractor, None, 500, 1000))

        self.assertEqual(points[1000.0].rih_standard_2, 100.0)
        self.assertEqual(points[1500.0].rih_standard_2, 150.0)
        self.assertEqual(points[900.0].rih_standard_2, 509.0)

    def test_stop_depth_unset_means_no_phase_3(self):
        points = stitch_run_data(self.rih, self.tractor, None, 500, 0)

        self.assertTrue(all(p.rih_standard_2 is None for p in points))
        self.assertEqual(by_md(points)[1500.0].rih_tractor, 515.0)

    def test_stop_depth_above_force_depth_ignored(self):
        self.assertEqual(stitch_run_data(self.rih, self.tractor, None, 500, 300),
                         stitch_run_data(self.rih, self.tractor, None, 500, 0))

    def test_force_depth_defaults_to_deepest_rih(self):
        points = by_md(stitch_run_data(self.rih, self.tractor, None, 0, 0))

        self.assertEqual(points[800.0].rih_standard_1, 80.0)
        self.assertIsNone(points[800.0].rih_tractor)
        # 900 is the last phase 1 point and carries the connector
        self.assertEqual(points[900.0].rih_standard_1, 90.0)
        self.assertEqual(points[900.0].rih_tractor, 90.0)
        self.assertEqual(points[1000.0].rih_tractor, 510.0)

    def test_pooh_from_tractor_file(self):
        points = by_md(stitch_run_data(self.rih, self.tractor, None, 500, 1200))

        self.assertIsNone(points[100.0].pooh)
        self.assertEqual(points[600.0].pooh, 2006.0)

    def test_pooh_override_file_wins(self):
        pooh = samples([100, 600], lambda md: None, lambda md: 7.0)
        points = by_md(stitch_run_data(self.rih, self.tractor, pooh, 500, 1200))

        self.assertEqual(points[100.0].pooh, 7.0)
        self.assertEqual(points[600.0].pooh, 7.0)
        self.assertIsNone(points[700.0].pooh)

    def test_proximity_matching(self):
        tractor = samples([500.3, 600.2], lambda md: 1.0, lambda md: None)
        points = by_md(stitch_run_data(self.rih, tractor, None, 500, 0))

        # union keeps exact depths, lookups match within 0.5
        self.assertIn(600.0, points)
        self.assertIn(600.2, points)
        self.assertEqual(points[600.0].rih_tractor, 1.0)
        self.assertEqual(points[600.2].rih_tractor, 1.0)
        self.assertIsNone(points[700.0].rih_tractor)

    def test_phase_1_gap_not_interpolated(self):
        rih = [s for s in self.rih if s.md != 300.0]
        tractor = self.tractor + [SimulationSample(md=300.0, rih=1.0, pooh=None)]
        points = by_md(stitch_run_data(rih, tractor, None, 500, 1200))

        self.assertIsNone(points[300.0].rih_standard_1)
        self.assertIsNone(points[300.0].rih_tractor)

    def test_no_phase_3_connector_without_phase_3_data(self):
        rih = samples([900], lambda md: 9.0, lambda md: None)
        tractor = samples([500, 600, 700, 800], lambda md: md, lambda md: None)
        points = by_md(stitch_run_data(rih, tractor, None, 500, 700))

        self.assertIsNone(points[600.0].rih_standard_2)
        self.assertIsNone(points[700.0].rih_standard_2)
        self.assertEqual(points[900.0].rih_standard_2, 9.0)

    def test_inputs_not_mutated(self):
        before = list(self.rih)
        stitch_run_data(self.rih, self.tractor, None, 500, 1200)
        self.assertEqual(self.rih, before)


class ChartHelperTests(unittest.TestCase):

    def test_generate_ticks(self):
        self.assertEqual(generate_ticks(0, 1200, 500), [0, 500, 1000, 1500])
        self.assertEqual(generate_ticks(-150, 120, 100), [-200, -100, 0, 100, 200])

    def test_empty_domain_defaults(self):
        domain = chart_domain([])

        self.assertEqual(domain['md_max'], 8000.0)
        self.assertEqual(domain['weight_max'], 3000.0)
        self.assertEqual(domain['weight_min'], -200.0)

    def test_weight_floor(self):
        points = [StitchedPoint(md=0.0, rih_standard_1=-500.0), StitchedPoint(md=1000.0, pooh=1200.0)]
        domain = chart_domain(points)

        self.assertEqual(domain['weight_min'], -200.0)
        self.assertEqual(domain['weight_max'], 1200.0)
        self.assertEqual(domain['md_ticks'], [0, 500, 1000])


class PickupDeviationTests(unittest.TestCase):

    def setUp(self):
        self.points = [
            StitchedPoint(md=100.0, rih_standard_1=None, rih_tractor=800.0, pooh=1500.0),
            StitchedPoint(md=500.0, rih_standard_1=900.0, pooh=1600.0)
        ]

    def test_rih_and_pooh_deviation(self):
        rows = pickup_deviations([PickupWeight(120.0, 850.0, 'RIH'),
                                  PickupWeight(480.0, 1550.0, 'POOH')], self.points)

        self.assertEqual(rows[0]['simulated'], 800.0)
        self.assertEqual(rows[0]['deviation'], 50.0)
        self.assertEqual(rows[1]['simulated'], 1600.0)
        self.assertEqual(rows[1]['deviation'], -50.0)

    def test_no_match(self):
        rows = pickup_deviations([PickupWeight(300.0, 850.0, 'RIH')], self.points)
        self.assertIsNone(rows[0]['simulated'])
        self.assertIsNone(rows[0]['deviation'])

    def test_invalid_type(self):
        with self.assertRaises(ValueError):
            PickupWeight.from_dict({'md': 10, 'weight': 1, 'type': 'SIDEWAYS'})


if __name__ == '__main__':
    unittest.main()

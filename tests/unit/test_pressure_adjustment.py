import math
import unittest
from src.calculators.well_engine.models import StitchedPoint, PressureAdjustmentState
from src.calculators.well_engine.pressure_adjustment import (
    compute_weight_offset, apply_offset, adjusted_chart_data
)


class WeightOffsetTests(unittest.TestCase):

    def test_whp_increase_adds_weight(self):
        offset = compute_weight_offset(2.0, 10.0, 15.0)

        # 5 bar on a 2 cm rod: 5e5 Pa * pi * 0.01² m² / 9.81
        self.assertGreater(offset, 0)
        self.assertAlmostEqual(offset, 5e5 * math.pi * 0.01 ** 2 / 9.81, places=9)
        self.assertAlmostEqual(offset, 16.012, delta=0.001)

    def test_reversed_change_negates(self):
        self.assertAlmostEqual(compute_weight_offset(2.0, 15.0, 10.0),
                               -compute_weight_offset(2.0, 10.0, 15.0), places=12)

    def test_no_change_no_offset(self):
        self.assertEqual(compute_weight_offset(2.0, 10.0, 10.0), 0.0)


class ApplyOffsetTests(unittest.TestCase):

    def setUp(self):
        self.points = [
            StitchedPoint(md=0.0, rih_standard_1=100.0, pooh=200.0),
            StitchedPoint(md=100.0, rih_tractor=50.0, rih_standard_2=60.0, pooh=None)
        ]

    def test_offset_applied_to_non_null_fields(self):
        shifted = apply_offset(self.points, 10.0)

        self.assertEqual(shifted[0], StitchedPoint(md=0.0, rih_standard_1=110.0, pooh=210.0))
        self.assertEqual(shifted[1], StitchedPoint(md=100.0, rih_tractor=60.0, rih_standard_2=70.0))

    def test_input_not_modified(self):
        apply_offset(self.points, 10.0)
        self.assertEqual(self.points[0].rih_standard_1, 100.0)

    def test_disabled_adjustment_returns_original_values(self):
        state = PressureAdjustmentState(enabled=False, adjusted_whp=50.0)
        self.assertEqual(adjusted_chart_data(self.points, state, 10.0, 2.0), self.points)

    def test_enabled_adjustment(self):
        state = PressureAdjustmentState(enabled=True, adjusted_whp=15.0)
        adjusted = adjusted_chart_data(self.points, state, 10.0, 2.0)
        self.assertAlmostEqual(adjusted[0].rih_standard_1, 116.012, delta=0.001)

    def test_state_defaults(self):
        state = PressureAdjustmentState.from_dict(None, default_whp=12.0)
        self.assertFalse(state.enabled)
        self.assertEqual(state.adjusted_whp, 12.0)


if __name__ == '__main__':
    unittest.main()

import unittest

from ukulele_tuner.detection.cents_smoother import (
    MAX_SENSITIVITY,
    CentsSmoother,
    round_half_up,
    sensitivity_for,
)
from ukulele_tuner.note_utils import get_note, note_to_frequency, parse_note

G4 = parse_note("G4")
G4_HZ = note_to_frequency(G4)


def detuned(frequency, cents):
    return frequency * 2 ** (cents / 1200)


class TestRounding(unittest.TestCase):
    def test_halves_round_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-2.5), -2)
        self.assertEqual(round_half_up(2.4), 2)

    def test_precision(self):
        self.assertAlmostEqual(round_half_up(3.14159, 10), 3.1)
        self.assertAlmostEqual(round_half_up(20.2, 3), 20.333333, places=5)
        self.assertEqual(round_half_up(0.04, 10), 0.0)

    def test_sensitivity(self):
        self.assertEqual(sensitivity_for(0.0), MAX_SENSITIVITY)
        self.assertEqual(sensitivity_for(1.0), MAX_SENSITIVITY)
        self.assertEqual(sensitivity_for(20.0), 3)
        self.assertEqual(sensitivity_for(-25.0), 2)
        self.assertEqual(sensitivity_for(50.0), 1)


class TestCentsSmoother(unittest.TestCase):
    def setUp(self):
        self.smoother = CentsSmoother()

    def smooth(self, frequency, target=G4):
        return self.smoother.smooth(
            get_note(frequency), target, note_to_frequency(target)
        )

    def test_exact_target_is_a_hit(self):
        result = self.smooth(G4_HZ)
        self.assertEqual(result.cents_rounded, 0.0)
        self.assertTrue(result.is_hit)
        self.assertFalse(result.is_too_low)

    def test_hit_window(self):
        self.assertTrue(self.smooth(detuned(G4_HZ, 0.04)).is_hit)
        self.assertFalse(self.smooth(detuned(G4_HZ, 0.06)).is_hit)
        self.assertFalse(self.smooth(detuned(G4_HZ, -0.06)).is_hit)

    def test_slightly_sharp(self):
        result = self.smooth(detuned(G4_HZ, 3))
        self.assertAlmostEqual(result.cents_rounded, 3.0)
        self.assertFalse(result.is_hit)
        self.assertFalse(result.is_too_low)

    def test_coarse_rounding_far_from_pitch(self):
        result = self.smooth(detuned(G4_HZ, -20))
        self.assertAlmostEqual(result.cents_rounded, -20.0)
        self.assertTrue(result.is_too_low)

    def test_wrong_note_clamps_to_fifty(self):
        below = self.smooth(note_to_frequency(parse_note("C4")))
        self.assertEqual(below.cents_rounded, -50.0)
        self.assertTrue(below.is_too_low)
        self.assertFalse(below.is_hit)

        above = self.smooth(note_to_frequency(parse_note("A4")))
        self.assertEqual(above.cents_rounded, 50.0)
        self.assertFalse(above.is_too_low)

    def test_same_name_other_octave_is_wrong(self):
        result = self.smooth(note_to_frequency(parse_note("G3")))
        self.assertEqual(result.cents_rounded, -50.0)
        self.assertFalse(result.is_hit)

    def test_ui_cents_shrinks_with_progress(self):
        self.assertEqual(CentsSmoother.ui_cents(-50.0, 0.0), -50.0)
        self.assertAlmostEqual(CentsSmoother.ui_cents(-50.0, 0.4), -30.0)
        self.assertEqual(CentsSmoother.ui_cents(3.0, 1.0), 0.0)


if __name__ == "__main__":
    unittest.main()

import math
import unittest

from ukulele_tuner.exceptions import ConfigurationError
from ukulele_tuner.note_types import Note, Tuning
from ukulele_tuner.note_utils import (
    CHROMATIC_NOTES,
    chromatic_index,
    describe_sample,
    get_note,
    note_to_frequency,
    parse_note,
)
from ukulele_tuner.tunings import TUNINGS, get_tuning


class TestScientificPitchNotation(unittest.TestCase):
    def test_a4(self):
        reading = get_note(440.0)
        self.assertEqual(reading.note, Note("A", 4))
        self.assertEqual(reading.cents, 0.0)

    def test_middle_c(self):
        # Middle C (C4) should be ~261.63 Hz
        reading = get_note(261.63)
        self.assertEqual(reading.note, Note("C", 4))
        self.assertLess(abs(reading.cents), 1.0)

    def test_octave_transitions(self):
        self.assertEqual(get_note(246.94).note, Note("B", 3))
        self.assertEqual(get_note(261.63).note, Note("C", 4))

    def test_sharps(self):
        self.assertEqual(get_note(277.18).note, Note("C#", 4))
        self.assertEqual(get_note(311.13).note, Note("D#", 4))

    def test_cents_are_signed(self):
        self.assertAlmostEqual(get_note(445.0).cents, 19.56, places=1)
        self.assertAlmostEqual(get_note(435.0).cents, -19.79, places=1)

    def test_reference_frequency_has_zero_cents(self):
        for note in TUNINGS["gCEA"].notes:
            reading = get_note(note_to_frequency(note))
            self.assertEqual(reading.note, note)
            self.assertEqual(reading.cents, 0.0)


class TestSilence(unittest.TestCase):
    def test_unusable_frequencies_are_silence(self):
        for frequency in (math.nan, 0.0, -12.0, math.inf):
            reading = get_note(frequency)
            self.assertTrue(reading.is_silence)
            self.assertIsNone(reading.note)
            self.assertFalse(reading.has_cents)


class TestNoteFrequencies(unittest.TestCase):
    def test_note_to_frequency(self):
        self.assertEqual(note_to_frequency(Note("A", 4)), 440.0)
        self.assertAlmostEqual(note_to_frequency(Note("C", 4)), 261.6256, places=3)
        self.assertAlmostEqual(note_to_frequency(Note("G", 3)), 195.9977, places=3)


class TestChromaticIndex(unittest.TestCase):
    def test_index_covers_eight_octaves(self):
        self.assertEqual(len(CHROMATIC_NOTES), 96)
        self.assertEqual(chromatic_index(Note("C", 1)), 0)
        self.assertEqual(chromatic_index(Note("A", 4)), 45)
        self.assertEqual(chromatic_index(Note("B", 8)), 95)

    def test_notes_outside_the_index(self):
        self.assertEqual(chromatic_index(Note("B", 0)), -1)
        self.assertEqual(chromatic_index(Note("C", 9)), -1)


class TestParseNote(unittest.TestCase):
    def test_plain_and_separated(self):
        self.assertEqual(parse_note("G4"), Note("G", 4))
        self.assertEqual(parse_note("G_4"), Note("G", 4))
        self.assertEqual(parse_note("c#4"), Note("C#", 4))

    def test_flats_become_sharps(self):
        self.assertEqual(parse_note("Bb3"), Note("A#", 3))
        self.assertEqual(parse_note("Eb4"), Note("D#", 4))

    def test_invalid_notes(self):
        for text in ("H4", "G", "", "4G", "E#4"):
            with self.assertRaises(ConfigurationError):
                parse_note(text)

    def test_describe_sample(self):
        self.assertEqual(describe_sample(None), "-")
        self.assertEqual(describe_sample(Note("G", 4)), "G")
        self.assertEqual(describe_sample(Note("C#", 4)), "c")


class TestTunings(unittest.TestCase):
    def test_named_tunings(self):
        self.assertEqual(
            [str(n) for n in get_tuning("gCEA").notes], ["G4", "C4", "E4", "A4"]
        )
        self.assertEqual(
            [str(n) for n in get_tuning("GCEA").notes], ["G3", "C4", "E4", "A4"]
        )
        self.assertEqual(
            [str(n) for n in get_tuning("DGBE").notes], ["D3", "G3", "B3", "E4"]
        )

    def test_tuning_instances_pass_through(self):
        tuning = TUNINGS["DGBE"]
        self.assertIs(get_tuning(tuning), tuning)

    def test_unknown_or_empty_tuning(self):
        for name in ("EADG", "", None):
            with self.assertRaises(ConfigurationError):
                get_tuning(name)

    def test_string_count_is_checked(self):
        g4, c4 = Note("G", 4), Note("C", 4)
        with self.assertRaises(ConfigurationError):
            Tuning("two", (g4, c4))
        with self.assertRaises(ConfigurationError):
            Tuning("seven", (g4,) * 7)
        self.assertEqual(len(Tuning("three", (g4, c4, g4))), 3)


if __name__ == "__main__":
    unittest.main()

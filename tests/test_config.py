import json
import tempfile
import unittest
from pathlib import Path

from ukulele_tuner.core.config import ConfigManager, TunerSettings
from ukulele_tuner.exceptions import ConfigurationError


class TestTunerSettings(unittest.TestCase):
    def test_defaults(self):
        settings = TunerSettings().validate()
        self.assertEqual(settings.interval_ms, 185)
        self.assertEqual(settings.note_buffer_size, 15)
        self.assertEqual(settings.tune_buffer_size, 5)
        self.assertEqual(settings.debounce_threshold, 3)
        self.assertEqual(settings.victory_duration_ms, 3500)
        self.assertEqual(settings.tuning, "gCEA")

    def test_invalid_values(self):
        for bad in (
            {"interval_ms": 0},
            {"tune_buffer_size": -1},
            {"buffer_size": 1.5},
            {"victory_duration_ms": -10},
            {"tuning": "EADG"},
        ):
            with self.assertRaises(ConfigurationError):
                TunerSettings(**bad).validate()

    def test_from_dict_ignores_unknown_keys(self):
        settings = TunerSettings.from_dict({"interval_ms": 100, "colour": "blue"})
        self.assertEqual(settings.interval_ms, 100)
        self.assertEqual(TunerSettings.from_dict(settings.to_dict()), settings)


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.config_dir = Path(self._tmp.name) / "config"

    def test_default_files_are_written(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertTrue((self.config_dir / "tuner.json").exists())
        self.assertTrue((self.config_dir / "audio_input.json").exists())
        self.assertEqual(manager.get_settings(), TunerSettings())
        self.assertEqual(manager.get_config("audio_input")["channels"], 1)

    def test_missing_keys_are_back_filled(self):
        self.config_dir.mkdir(parents=True)
        with open(self.config_dir / "tuner.json", "w") as f:
            json.dump({"tuning": "DGBE"}, f)

        settings = ConfigManager(str(self.config_dir)).get_settings()
        self.assertEqual(settings.tuning, "DGBE")
        self.assertEqual(settings.interval_ms, 185)

    def test_corrupt_file_falls_back_to_defaults(self):
        self.config_dir.mkdir(parents=True)
        (self.config_dir / "tuner.json").write_text("{not json")

        settings = ConfigManager(str(self.config_dir)).get_settings()
        self.assertEqual(settings, TunerSettings())

    def test_overrides(self):
        manager = ConfigManager(str(self.config_dir))
        settings = manager.get_settings(tuning="GCEA", interval_ms=None)
        self.assertEqual(settings.tuning, "GCEA")
        self.assertEqual(settings.interval_ms, 185)

    def test_updates_persist(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertTrue(manager.update_config("tuner", {"tuning": "DGBE"}))

        reloaded = ConfigManager(str(self.config_dir))
        self.assertEqual(reloaded.get_settings().tuning, "DGBE")

        self.assertTrue(reloaded.reset_config("tuner"))
        self.assertEqual(reloaded.get_settings().tuning, "gCEA")

    def test_invalid_update_is_refused(self):
        manager = ConfigManager(str(self.config_dir))
        with self.assertRaises(ConfigurationError):
            manager.update_config("tuner", {"interval_ms": -5})
        self.assertEqual(manager.get_settings().interval_ms, 185)

    def test_unknown_config_name(self):
        manager = ConfigManager(str(self.config_dir))
        self.assertFalse(manager.update_config("display", {"x": 1}))
        self.assertFalse(manager.reset_config("display"))
        self.assertEqual(manager.get_config("display"), {})


if __name__ == "__main__":
    unittest.main()

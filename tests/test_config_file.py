"""Tests for config file loading and priority."""

import os
import tempfile
from pathlib import Path
import unittest
from unittest import mock

from b3ids import config
from b3ids.errors import ConfigError
from b3ids.tracer import IdWidth


class TestConfigFileLoading(unittest.TestCase):
    """Test TOML config file loading."""

    def test_load_toml_config_basic(self):
        """Test loading a basic TOML config file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
            f.write("""
[propagation]
use_combined_header = true
id_width = 128
initiate_trace_path_prefixes = ["/api/v1", "/api/v3"]
""")
            f.flush()

        try:
            loaded = config.load_toml_config(f.name)
            self.assertTrue(loaded["propagation"]["use_combined_header"])
            self.assertEqual(loaded["propagation"]["id_width"], 128)
        finally:
            os.unlink(f.name)

    def test_load_toml_config_missing_file(self):
        """Test that loading missing file returns empty dict."""
        self.assertEqual(config.load_toml_config("/nonexistent/file.toml"), {})

    def test_load_toml_config_invalid_toml(self):
        """Test that invalid TOML raises ConfigError."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.toml', delete=False) as f:
            f.write("invalid [toml content")
            f.flush()

        try:
            with self.assertRaises(ConfigError):
                config.load_toml_config(f.name)
        finally:
            os.unlink(f.name)

    def test_find_config_file_current_directory(self):
        """Test finding config file in current directory."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "b3ids.toml"
            config_path.write_text("[propagation]\nuse_combined_header = true")

            original_cwd = os.getcwd()
            try:
                os.chdir(tmpdir)
                found = config.find_config_file()
                self.assertIsNotNone(found)
                self.assertEqual(Path(found).name, "b3ids.toml")
            finally:
                os.chdir(original_cwd)

    def test_load_config_from_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "b3ids.toml"
            config_path.write_text('[propagation]\nid_width = 128\ninitiate_trace_path_prefixes = ["/api"]\n')
            with mock.patch.dict(os.environ, {}, clear=True):
                loaded = config.load_config(str(config_path))

        self.assertEqual(loaded.id_width, IdWidth.BITS_128)
        self.assertEqual(loaded.initiate_trace_path_prefixes, ["/api"])
        self.assertFalse(loaded.use_combined_header)


class TestConfigPriority(unittest.TestCase):
    """Test configuration loading priority."""

    def test_defaults(self):
        defaults = config.PropagationConfig()
        self.assertFalse(defaults.use_combined_header)
        self.assertEqual(defaults.id_width, IdWidth.BITS_64)
        self.assertEqual(defaults.initiate_trace_path_prefixes, [""])

    def test_env_overrides_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "b3ids.toml"
            config_path.write_text("[propagation]\nuse_combined_header = false\nid_width = 64\n")
            env = {
                "B3IDS_USE_COMBINED_HEADER": "true",
                "B3IDS_ID_WIDTH": "128",
                "B3IDS_INITIATE_TRACE_PATH_PREFIXES": "/api, /rpc",
            }
            with mock.patch.dict(os.environ, env, clear=True):
                loaded = config.load_config(str(config_path))

        self.assertTrue(loaded.use_combined_header)
        self.assertEqual(loaded.id_width, IdWidth.BITS_128)
        self.assertEqual(loaded.initiate_trace_path_prefixes, ["/api", "/rpc"])

    def test_explicit_params_override_env(self):
        """Test that explicit parameters override environment variables."""
        with mock.patch.dict(os.environ, {"B3IDS_USE_COMBINED_HEADER": "false"}, clear=True):
            merged = config.load_config_with_priority(
                config_file="/nonexistent/file.toml",
                overrides={"use_combined_header": True},
            )
        self.assertTrue(merged["use_combined_header"])

    def test_invalid_width_raises_config_error(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                config.load_config("/nonexistent/file.toml", overrides={"id_width": 96})

    def test_invalid_env_width_raises_config_error(self):
        with mock.patch.dict(os.environ, {"B3IDS_ID_WIDTH": "wide"}, clear=True):
            with self.assertRaises(ConfigError):
                config.load_config("/nonexistent/file.toml")

    def test_unknown_field_raises_config_error(self):
        with mock.patch.dict(os.environ, {}, clear=True):
            with self.assertRaises(ConfigError):
                config.load_config("/nonexistent/file.toml", overrides={"sample_rate": 0.5})


if __name__ == "__main__":
    unittest.main()

"""Tests for configuration system."""

import tempfile
from pathlib import Path

from codestream.config import BufferLimits, ConfigManager, RenderSettings


def test_config_creation():
    """Test config file creation."""
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "nested" / "config.yaml"
        manager = ConfigManager(str(config_path))

        assert config_path.exists()
        assert "stream" in manager.data


def test_default_limits():
    with tempfile.TemporaryDirectory() as tmpdir:
        manager = ConfigManager(str(Path(tmpdir) / "config.yaml"))
        assert manager.get_buffer_limits() == BufferLimits(high_water=2000, window=1000)
        assert manager.get_render_settings() == RenderSettings()


def test_partial_section_merges_over_defaults():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream:\n  window: 400\nrender:\n  line_numbers: false\n")
        manager = ConfigManager(str(config_path))

        limits = manager.get_buffer_limits()
        assert limits.window == 400
        assert limits.high_water == 2000
        settings = manager.get_render_settings()
        assert settings.line_numbers is False
        assert settings.theme == "monokai"


def test_malformed_yaml_falls_back_to_defaults(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream: [unclosed\n")
        with caplog.at_level("WARNING", logger="codestream.config"):
            manager = ConfigManager(str(config_path))

        assert manager.data == {}
        assert manager.get_buffer_limits() == BufferLimits()
        assert "Error reading config" in caplog.text


def test_non_mapping_yaml_ignored():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("- just\n- a list\n")
        manager = ConfigManager(str(config_path))
        assert manager.data == {}


def test_env_var_path(monkeypatch):
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "from_env.yaml"
        monkeypatch.setenv("CODESTREAM_CONFIG", str(config_path))
        manager = ConfigManager()
        assert manager.config_path == config_path
        assert config_path.exists()


def test_save_round_trip():
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        manager = ConfigManager(str(config_path))
        manager.data["stream"]["high_water"] = 5000
        manager.save()

        reloaded = ConfigManager(str(config_path))
        assert reloaded.get_buffer_limits().high_water == 5000


def test_empty_limit_value_falls_back(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream:\n  high_water:\n  window: 400\n")
        manager = ConfigManager(str(config_path))
        with caplog.at_level("WARNING", logger="codestream.config"):
            limits = manager.get_buffer_limits()

        assert limits == BufferLimits(high_water=2000, window=400)
        assert "high_water" in caplog.text


def test_non_integer_limit_value_falls_back(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream:\n  high_water: big\n  window: small\n")
        manager = ConfigManager(str(config_path))
        with caplog.at_level("WARNING", logger="codestream.config"):
            limits = manager.get_buffer_limits()

        assert limits == BufferLimits()
        assert "big" in caplog.text


def test_inconsistent_limits_fall_back(caplog):
    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream:\n  window: 5000\n")
        manager = ConfigManager(str(config_path))
        with caplog.at_level("WARNING", logger="codestream.config"):
            limits = manager.get_buffer_limits()

        assert limits == BufferLimits()
        assert "Invalid stream limits" in caplog.text


def test_bad_limits_still_build_accumulator():
    from codestream.stream import ChunkAccumulator

    with tempfile.TemporaryDirectory() as tmpdir:
        config_path = Path(tmpdir) / "config.yaml"
        config_path.write_text("stream:\n  high_water:\n  window: 5000\n")
        acc = ChunkAccumulator.from_config(ConfigManager(str(config_path)))
        assert acc.high_water == 2000
        assert acc.window == 1000

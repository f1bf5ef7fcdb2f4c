"""Tests for advisor settings."""

from obn_advisor.settings import DEFAULT_CATALOG_URL, DEFAULT_CONFIG_PATH, load_settings


class TestLoadSettings:
    """Test suite for load_settings()."""

    def test_defaults(self, monkeypatch, temp_dir):
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = load_settings()

        assert settings.config_path == DEFAULT_CONFIG_PATH
        assert settings.catalog_url == DEFAULT_CATALOG_URL
        assert settings.catalog_path is None
        assert settings.log_level == "INFO"

    def test_yaml_file(self, monkeypatch, temp_dir):
        config = temp_dir / "advisor.yaml"
        config.write_text(
            "openclaw_version: '2026.2.12'\n"
            "catalog_path: patterns.json\n"
            "unknown_key: ignored\n"
        )

        settings = load_settings(str(config))

        assert settings.openclaw_version == "2026.2.12"
        assert settings.catalog_path == "patterns.json"
        assert not hasattr(settings, "unknown_key")

    def test_env_overrides_yaml(self, monkeypatch, temp_dir):
        config = temp_dir / "advisor.yaml"
        config.write_text("openclaw_version: '2026.1.0'\n")
        monkeypatch.setenv("OBN_OPENCLAW_VERSION", "2026.3.0")

        assert load_settings(str(config)).openclaw_version == "2026.3.0"

    def test_log_level_from_env(self, monkeypatch, temp_dir):
        monkeypatch.setenv("LOG_LEVEL", "warning")
        assert load_settings().log_level == "WARNING"

        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        assert load_settings().log_level == "INFO"

    def test_unreadable_yaml_is_skipped(self, monkeypatch, temp_dir):
        config = temp_dir / "broken.yaml"
        config.write_text("openclaw_version: [unclosed\n")

        settings = load_settings(str(config))

        assert settings.openclaw_version == "0.0.0"

    def test_non_utf8_yaml_is_skipped(self, temp_dir):
        config = temp_dir / "latin1.yaml"
        config.write_bytes(b'log_level: "\xff\xfe"\n')

        settings = load_settings(str(config))

        assert settings.openclaw_version == "0.0.0"

    def test_missing_yaml_is_skipped(self, monkeypatch, temp_dir):
        assert load_settings(str(temp_dir / "nope.yaml")).openclaw_version == "0.0.0"

"""
Settings tests: environment overrides and the set of knobs exposed.
"""

from upload_validator.config import Settings


def test_settings_fields():
    assert set(Settings.model_fields) == {
        "log_level",
        "log_format",
        "strict_patterns",
        "default_delimiter",
        "preview_rows",
    }


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("STRICT_PATTERNS", "true")
    monkeypatch.setenv("DEFAULT_DELIMITER", ";")
    monkeypatch.setenv("PREVIEW_ROWS", "3")

    settings = Settings(_env_file=None)

    assert settings.strict_patterns is True
    assert settings.default_delimiter == ";"
    assert settings.preview_rows == 3
    assert settings.log_level == "INFO"

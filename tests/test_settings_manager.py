import json

from config.settings import DEFAULT_LANGUAGE, DEFAULT_THEME_ID
from core.settings_manager import SettingsManager


def _write(path, payload):
    with open(path, "w", encoding="utf-8") as f:
        f.write(payload)


def test_defaults_when_file_missing(settings_manager):
    settings_manager.load_config()
    assert settings_manager.get_theme_id() == DEFAULT_THEME_ID
    assert settings_manager.get_language() == DEFAULT_LANGUAGE
    assert settings_manager.window_geometry is None


def test_theme_change_is_saved_and_reloaded(settings_manager, path_manager):
    changes = []
    settings_manager.theme_changed.connect(changes.append)
    settings_manager.set_theme_id("VICTORIAN")
    assert changes == ["VICTORIAN"]

    with open(path_manager.config_file, encoding="utf-8") as f:
        assert json.load(f)["theme_id"] == "VICTORIAN"

    reloaded = SettingsManager(path_manager)
    reloaded.load_config()
    assert reloaded.theme_id == "VICTORIAN"


def test_setting_same_value_does_not_emit(settings_manager):
    changes = []
    settings_manager.theme_changed.connect(changes.append)
    settings_manager.set_theme_id(DEFAULT_THEME_ID)
    assert changes == []


def test_unknown_theme_falls_back_to_default(settings_manager):
    settings_manager.set_theme_id("CORPORATE")
    settings_manager.set_theme_id("does-not-exist")
    assert settings_manager.get_theme_id() == DEFAULT_THEME_ID


def test_corrupt_file_uses_defaults(settings_manager, path_manager, capsys):
    _write(path_manager.config_file, "{not json")
    settings_manager.load_config()
    assert settings_manager.to_dict() == {
        "language": DEFAULT_LANGUAGE, "theme_id": DEFAULT_THEME_ID, "window_geometry": None,
    }
    assert "ignoring unreadable config" in capsys.readouterr().err


def test_non_object_json_uses_defaults(settings_manager, path_manager):
    _write(path_manager.config_file, "[1, 2, 3]")
    settings_manager.load_config()
    assert settings_manager.get_theme_id() == DEFAULT_THEME_ID


def test_invalid_fields_are_replaced_individually(settings_manager, path_manager):
    _write(path_manager.config_file, json.dumps({
        "theme_id": "CHALKBOARD", "language": "klingon", "window_geometry": 12,
    }))
    settings_manager.load_config()
    assert settings_manager.get_theme_id() == "CHALKBOARD"
    assert settings_manager.get_language() == DEFAULT_LANGUAGE
    assert settings_manager.window_geometry is None


def test_load_emits_changes(settings_manager, path_manager):
    _write(path_manager.config_file, json.dumps({"theme_id": "CORPORATE", "language": "zh"}))
    themes, languages = [], []
    settings_manager.theme_changed.connect(themes.append)
    settings_manager.language_changed.connect(languages.append)
    settings_manager.load_config()
    assert themes == ["CORPORATE"]
    assert languages == ["zh"]


def test_window_geometry_round_trip(settings_manager, path_manager):
    settings_manager.set_window_geometry("01d9d0cb")
    reloaded = SettingsManager(path_manager)
    reloaded.load_config()
    assert reloaded.window_geometry == "01d9d0cb"

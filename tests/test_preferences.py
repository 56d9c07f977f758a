"""Tests for the preference store."""

from __future__ import annotations

import json

import pytest

from bucharest_weather.exceptions import UnknownOptionError
from bucharest_weather.preferences import BUILTIN_PRESETS, DisplaySettings, Preferences, PreferenceStore


@pytest.fixture
def store(tmp_path) -> PreferenceStore:
    return PreferenceStore(tmp_path / "state" / "template-config.json")


class TestLoad:
    def test_defaults_when_missing(self, store) -> None:
        prefs = store.load()
        assert prefs.current_template == "classic"
        assert prefs.current_theme == "default"
        assert prefs.custom_settings == DisplaySettings()
        assert set(prefs.presets) == set(BUILTIN_PRESETS)

    def test_corrupt_file_falls_back(self, store) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text("{not json", encoding="utf-8")
        assert store.load() == Preferences()

    def test_invalid_shape_falls_back(self, store) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"customSettings": {"showCache": "maybe"}}), encoding="utf-8")
        assert store.load() == Preferences()

    def test_reads_camel_case_file(self, store) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({
            "currentTemplate": "retro",
            "currentTheme": "ocean",
            "customSettings": {"showTimestamp": False, "language": "en"},
            "presets": {"mine": {"template": "gauge", "theme": "dark", "settings": {}}},
            "somethingElse": 1,
        }), encoding="utf-8")
        prefs = store.load()
        assert prefs.current_template == "retro"
        assert prefs.current_theme == "ocean"
        assert prefs.custom_settings.show_timestamp is False
        assert prefs.custom_settings.language == "en"
        assert "mine" in prefs.presets
        assert "developer" in prefs.presets


class TestSave:
    def test_writes_camel_case(self, store) -> None:
        store.set_template("gauge")
        data = json.loads(store.path.read_text(encoding="utf-8"))
        assert data["currentTemplate"] == "gauge"
        assert data["currentTheme"] == "default"
        assert data["customSettings"]["showTimestamp"] is True
        assert "developer" in data["presets"]

    def test_no_temp_file_left(self, store) -> None:
        store.set_theme("forest")
        assert [p.name for p in store.path.parent.iterdir()] == ["template-config.json"]

    def test_round_trip(self, store) -> None:
        saved = store.set_theme("sunset")
        assert PreferenceStore(store.path).load() == saved


class TestMutations:
    def test_set_template(self, store) -> None:
        assert store.set_template("matrix").current_template == "matrix"
        assert store.load().current_template == "matrix"

    def test_set_theme(self, store) -> None:
        store.set_template("map")
        store.set_theme("cyberpunk")
        prefs = store.load()
        assert (prefs.current_template, prefs.current_theme) == ("map", "cyberpunk")

    @pytest.mark.parametrize("method", ["set_template", "set_theme"])
    def test_unknown_name(self, store, method) -> None:
        with pytest.raises(UnknownOptionError, match="hologram"):
            getattr(store, method)("hologram")
        assert not store.path.exists()

    def test_update_settings(self, store) -> None:
        store.update_settings(compact_mode=True)
        store.update_settings(units="imperial")
        settings = store.load().custom_settings
        assert settings.compact_mode is True
        assert settings.units == "imperial"
        assert settings.show_timestamp is True


class TestPresets:
    def test_apply_builtin(self, store) -> None:
        prefs = store.apply_preset("developer")
        assert prefs.current_template == "dashboard"
        assert prefs.current_theme == "cyberpunk"
        assert prefs.custom_settings.show_cache is True
        assert prefs.custom_settings.compact_mode is True

    def test_apply_merges_settings(self, store) -> None:
        store.update_settings(language="en")
        prefs = store.apply_preset("casual")
        assert prefs.custom_settings.show_timestamp is False
        assert prefs.custom_settings.language == "en"

    def test_apply_unknown(self, store) -> None:
        with pytest.raises(UnknownOptionError, match="nobody"):
            store.apply_preset("nobody")

    def test_create_and_apply(self, store) -> None:
        store.create_preset("night", "retro", "dark", {"show_timestamp": False})
        prefs = store.apply_preset("night")
        assert (prefs.current_template, prefs.current_theme) == ("retro", "dark")
        assert prefs.custom_settings.show_timestamp is False
        assert "developer" in prefs.presets

    def test_create_validates_names(self, store) -> None:
        with pytest.raises(UnknownOptionError):
            store.create_preset("bad", "classic", "neon")
        assert "bad" not in store.load().presets

    def test_builtins_cannot_be_lost(self, store) -> None:
        store.path.parent.mkdir(parents=True)
        store.path.write_text(json.dumps({"presets": {}}), encoding="utf-8")
        assert set(store.load().presets) == set(BUILTIN_PRESETS)

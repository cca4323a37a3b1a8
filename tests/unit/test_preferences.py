"""Unit tests for the theme preference store."""

from dnsprop.models.app_state import Theme
from dnsprop.services.preferences import DEFAULT_THEME, ThemePreferenceStore


def test_missing_file_defaults_to_light(tmp_path):
    store = ThemePreferenceStore(tmp_path / "prefs.yaml")

    assert store.load() == DEFAULT_THEME == Theme.LIGHT


def test_save_then_load(tmp_path):
    """Test a saved theme is read back."""
    store = ThemePreferenceStore(tmp_path / "nested" / "prefs.yaml")

    store.save(Theme.DARK)

    assert store.load() == Theme.DARK
    assert (tmp_path / "nested" / "prefs.yaml").read_text() == "theme: dark\n"


def test_invalid_value_defaults(tmp_path):
    path = tmp_path / "prefs.yaml"
    path.write_text("theme: purple\n")

    assert ThemePreferenceStore(path).load() == Theme.LIGHT


def test_invalid_yaml_defaults(tmp_path):
    path = tmp_path / "prefs.yaml"
    path.write_text("theme: [unclosed\n")

    assert ThemePreferenceStore(path).load() == Theme.LIGHT


def test_non_mapping_defaults(tmp_path):
    path = tmp_path / "prefs.yaml"
    path.write_text("- dark\n")

    assert ThemePreferenceStore(path).load() == Theme.LIGHT

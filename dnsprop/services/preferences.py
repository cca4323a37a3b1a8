"""Persisted theme preference.

Stores a single key, theme, in a small YAML file. The preference is
independent of query state.
"""

import logging
from pathlib import Path

import yaml

from dnsprop.models.app_state import Theme


logger = logging.getLogger(__name__)

DEFAULT_THEME = Theme.LIGHT


class ThemePreferenceStore:
    """Reads the theme at startup and writes it on toggle."""

    def __init__(self, path: Path):
        self.path = Path(path).expanduser()

    def load(self) -> Theme:
        """Load the stored theme.

        Returns:
            Theme: Stored theme, or DEFAULT_THEME if the file is missing or
            does not hold a valid value.
        """
        if not self.path.exists():
            return DEFAULT_THEME

        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Could not read theme preference {self.path}: {e}")
            return DEFAULT_THEME

        value = data.get("theme") if isinstance(data, dict) else None
        try:
            return Theme(value)
        except ValueError:
            logger.warning(f"Ignoring invalid theme preference: {value!r}")
            return DEFAULT_THEME

    def save(self, theme: Theme) -> None:
        """Write the theme, creating parent directories as needed."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump({"theme": theme.value}, f, default_flow_style=False)

import os
import yaml

from settings_schema import AnalyticsSettings, validate_settings


class YamlConfig:
    """Load and save analytics settings to a YAML file."""

    def __init__(self, path: str = "settings.yaml") -> None:
        self.path = path

    def load(self) -> dict:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} must contain a mapping")
        return data

    def save(self, data: dict) -> None:
        out = validate_settings(data).model_dump()
        with open(self.path, "w", encoding="utf-8") as f:
            yaml.safe_dump(out, f)

    def load_settings(self) -> AnalyticsSettings:
        """Return validated settings, defaults for anything not in the file."""
        return validate_settings(self.load())

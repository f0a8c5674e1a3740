"""Configuration for the wardrobe stylist service."""

from dataclasses import dataclass, fields
from pathlib import Path
import os
from typing import Callable, Dict, Optional

DEFAULT_DATABASE_PATH = "data/wardrobe.db"
DEFAULT_PROFILE_DIR = "data/profiles"
DEFAULT_CONFIG_DIR = "config/environments"


@dataclass
class AppConfig:
    """Settings for storage locations, weather lookups and recommender caps.

    The caps default to the recommender's own limits, so an unconfigured
    service ranks outfits exactly like calling the recommender directly.
    """

    database_path: str = DEFAULT_DATABASE_PATH
    profile_dir: str = DEFAULT_PROFILE_DIR
    default_location: Optional[str] = None
    weather_timeout_seconds: float = 5.0
    max_candidates: int = 20
    max_suggestions: int = 10
    log_level: str = "INFO"
    environment: str | None = None

    def __post_init__(self) -> None:
        for name in ("max_candidates", "max_suggestions"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.weather_timeout_seconds <= 0:
            raise ValueError(f"weather_timeout_seconds must be positive, got {self.weather_timeout_seconds}")

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Read settings from the environment, falling back to a config file.

        The file is ``APP_CONFIG_PATH`` if set, otherwise
        ``<APP_CONFIG_DIR>/<APP_ENV>.yaml``. Each setting is looked up as an
        upper-cased environment variable first (``MAX_SUGGESTIONS``), then as a
        key in the file, then the dataclass default.
        """

        env_name = os.getenv("APP_ENV")
        file_values = cls._load_yaml_config(cls._config_file(env_name))

        overrides: Dict[str, object] = {"environment": env_name}
        for field in fields(cls):
            if field.name == "environment":
                continue
            raw = os.getenv(field.name.upper()) or file_values.get(field.name)
            if raw:
                overrides[field.name] = _PARSERS.get(field.name, str)(raw)
        return cls(**overrides)

    @staticmethod
    def _config_file(env_name: Optional[str]) -> Optional[Path]:
        explicit = os.getenv("APP_CONFIG_PATH")
        if explicit:
            return Path(explicit)
        if env_name:
            return Path(os.getenv("APP_CONFIG_DIR", DEFAULT_CONFIG_DIR)) / f"{env_name}.yaml"
        return None

    @staticmethod
    def _load_yaml_config(path: Optional[Path]) -> Dict[str, str]:
        """Parse flat ``key: value`` lines; comments, blanks and quotes are tolerated."""

        if path is None or not path.exists():
            return {}
        values: Dict[str, str] = {}
        for line in path.read_text().splitlines():
            key, sep, raw_value = line.strip().partition(":")
            if not sep or key.startswith("#"):
                continue
            value = raw_value.strip()
            if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
                value = value[1:-1]
            values[key.strip()] = value
        return values


_PARSERS: Dict[str, Callable[[str], object]] = {
    "weather_timeout_seconds": float,
    "max_candidates": int,
    "max_suggestions": int,
}

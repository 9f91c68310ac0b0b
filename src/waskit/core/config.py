"""User configuration for waskit.

Configuration is optional and lives in a JSON file:
- $WASKIT_CONFIG, when set
- ~/.config/waskit/config.json otherwise

Missing keys fall back to the defaults below, unknown keys are ignored.
"""

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "WASKIT_CONFIG"
DEFAULT_CONFIG_FILE = Path.home() / ".config" / "waskit" / "config.json"

DEFAULT_CSS_DEPENDENCIES = [
    "tailwindcss",
    "@tailwindcss/vite",
    "postcss",
    "autoprefixer",
]


@dataclass
class WaskitConfig:
    """Settings that shape a scaffold run."""

    # Package managers
    primary_manager: str = "bun"     # Probed with --version first
    fallback_manager: str = "npm"    # Used when the primary is missing or fails

    # Keys removed from the manifest when the CSS framework is declined
    css_dependencies: List[str] = field(
        default_factory=lambda: list(DEFAULT_CSS_DEPENDENCIES)
    )
    manifest_name: str = "package.json"

    # Git
    commit_message: str = "Initial commit"

    # Alternative catalog directory (defaults to the bundled templates)
    templates_dir: Optional[str] = None

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "WaskitConfig":
        """Build a config from parsed JSON.

        Unknown keys are dropped. A value of the wrong type is logged and
        the field keeps its default.
        """
        values = {}
        for key, value in data.items():
            if key not in cls.__dataclass_fields__:
                continue
            if not _valid_value(key, value):
                logger.warning("Ignoring invalid config value %s=%r", key, value)
                continue
            values[key] = value
        return cls(**values)


def _valid_value(key: str, value) -> bool:
    if key == "css_dependencies":
        return isinstance(value, list) and all(isinstance(item, str) for item in value)
    if key == "templates_dir":
        return value is None or isinstance(value, str)
    return isinstance(value, str) and bool(value)


def get_config_path() -> Path:
    """Return the configuration file location."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_FILE


def load_config(path: Optional[Path] = None) -> WaskitConfig:
    """Load configuration, falling back to defaults.

    A missing file is normal. An unreadable or malformed file is logged
    and ignored so a broken user config never blocks scaffolding.
    """
    config_file = path or get_config_path()
    if not config_file.exists():
        return WaskitConfig()

    try:
        data = json.loads(config_file.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise TypeError("top level must be a JSON object")
        config = WaskitConfig.from_dict(data)
        logger.debug("Loaded config from %s", config_file)
        return config
    except (OSError, json.JSONDecodeError, TypeError) as e:
        logger.warning("Ignoring config file %s: %s", config_file, e)
        return WaskitConfig()

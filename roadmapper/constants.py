"""
Constants for the Roadmapper application.

Note: These constants serve as default fallback values.
Actual values are loaded from .roadmapper/config.json at runtime via ConfigManager.
"""
from pathlib import Path
from typing import Any, Optional
import json

# =============================================================================
# Default Fallback Values
# These are used if config.json doesn't exist or doesn't specify a value.
# =============================================================================

DEFAULT_DATA_DIR_NAME = ".roadmapper"

# Percentage calculation defaults
DEFAULT_PERCENTAGE_ROUND_PRECISION = 1

# Timeline estimation defaults
DEFAULT_DURATION_MONTHS = 1
DEFAULT_TIMELINE_HORIZON_MONTHS = 12
WEEKS_PER_MONTH = 4
MONTHS_PATTERN = r"(\d+)\s*months?"
WEEKS_PATTERN = r"(\d+)\s*weeks?"

# Analytics defaults
DEFAULT_TRENDING_LIMIT = 5
DEFAULT_USER_NAME = "local"
ENGAGEMENT_WINDOW_DAYS = 7

# Priority constants (not configurable)
DEFAULT_PRIORITY = "medium"
PRIORITY_LEVELS = {"high": 3, "medium": 2, "low": 1}

# Record status constants (not configurable)
ACTIVE_STATUS = "active"

# Export defaults
EXPORT_FORMATS = ["json", "markdown"]
EXPORT_EXTENSIONS = {"json": "json", "markdown": "md"}
EXPORT_FILENAME_PREFIX = "roadmap-comparison"
NO_ANALYTICS_DATA = "No data available"


# =============================================================================
# Config Loader
# Load values from .roadmapper/config.json at runtime.
# =============================================================================

_config_manager_instance: Optional['ConfigManager'] = None


class ConfigManager:
    """
    Manages loading configuration from a config.json file with fallback to defaults.

    This class is independent of StorageManager to avoid cyclic dependencies.
    StorageManager handles persistence; ConfigManager handles runtime access.

    Usage:
        # With default path (.roadmapper/config.json)
        config = ConfigManager()
        precision = config.get_int('percentage_round_precision', DEFAULT_PERCENTAGE_ROUND_PRECISION)

        # With a custom data directory
        config = ConfigManager(data_dir=Path("/custom/.roadmapper"))
    """

    def __init__(self, config_path: Optional[Path] = None, data_dir: Optional[Path] = None) -> None:
        """
        Initialize ConfigManager.

        Args:
            config_path: Direct path to config.json file. Takes precedence over data_dir.
            data_dir: Path to .roadmapper/ directory. Config path will be data_dir/config.json.
        """
        self._config: Optional[dict] = None

        if config_path is not None:
            self._config_path = config_path
        elif data_dir is not None:
            self._config_path = data_dir / "config.json"
        else:
            self._config_path = Path(DEFAULT_DATA_DIR_NAME) / "config.json"

    def _load_config(self) -> dict:
        """Load config from config.json file."""
        if self._config is not None:
            return self._config

        if self._config_path.exists():
            try:
                with open(self._config_path, "r") as f:
                    self._config = json.load(f)
            except (json.JSONDecodeError, IOError):
                self._config = {}
        else:
            self._config = {}

        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value with fallback to default.

        Args:
            key: Configuration key name.
            default: Default value if key not found.

        Returns:
            Config value or default.
        """
        config = self._load_config()
        return config.get(key, default)

    def get_int(self, key: str, default: int) -> int:
        """Get an integer config value with fallback."""
        value = self.get(key, default)
        try:
            return int(value) if value is not None else default
        except (TypeError, ValueError):
            return default

    @property
    def config_path(self) -> Path:
        """Get the config file path."""
        return self._config_path


def get_config_manager(reset: bool = False) -> ConfigManager:
    """
    Get the singleton ConfigManager instance with default path.

    Args:
        reset: If True, reset the singleton and create a new instance.

    Returns:
        ConfigManager singleton instance.
    """
    global _config_manager_instance
    if _config_manager_instance is None or reset:
        _config_manager_instance = ConfigManager()
    return _config_manager_instance


def reset_config_manager() -> None:
    """Reset the singleton ConfigManager instance (useful for testing)."""
    global _config_manager_instance
    _config_manager_instance = None


# Convenience functions for common config access
# These use the singleton with default path (.roadmapper/config.json)
def get_percentage_round_precision() -> int:
    """Get percentage round precision from config or default."""
    return get_config_manager().get_int('percentage_round_precision', DEFAULT_PERCENTAGE_ROUND_PRECISION)


def get_default_duration_months() -> int:
    """Get the fallback phase duration (months) from config or default."""
    return get_config_manager().get_int('default_duration_months', DEFAULT_DURATION_MONTHS)


def get_timeline_horizon_months() -> int:
    """Get timeline horizon from config or default."""
    return get_config_manager().get_int('timeline_horizon_months', DEFAULT_TIMELINE_HORIZON_MONTHS)


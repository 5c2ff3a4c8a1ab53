"""
Storage manager for Roadmapper.

Handles loading and saving of all JSON files in the .roadmapper/ directory.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from roadmapper.constants import DEFAULT_DATA_DIR_NAME
from roadmapper.exceptions import StorageError
from roadmapper.models.files import AnalyticsFile, ConfigFile, HistoryFile

FileModel = TypeVar("FileModel", bound=BaseModel)

HISTORY_FILE = "history.json"
ANALYTICS_FILE = "analytics.json"
CONFIG_FILE = "config.json"


class StorageManager:
    """
    Manages persistence of roadmap data to JSON files in the .roadmapper/ directory.

    Handles atomic writes to prevent data corruption.
    """

    def __init__(self, data_dir: Optional[Path] = None) -> None:
        """
        Initialize the StorageManager with a .roadmapper/ directory path.

        Args:
            data_dir: Path to the data directory. Defaults to .roadmapper/ in current directory.
        """
        self.data_dir = Path(data_dir) if data_dir else Path(DEFAULT_DATA_DIR_NAME)
        self._ensure_data_dir()

    def _ensure_data_dir(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _atomic_write(self, file_path: Path, data: Dict[str, Any]) -> None:
        """Write data to a JSON file atomically to prevent corruption.

        Args:
            file_path: Path to the file to write.
            data: Dictionary data to write as JSON.

        Raises:
            StorageError: If writing to file fails.
        """
        temp_fd, temp_path = tempfile.mkstemp(
            dir=self.data_dir, prefix=".tmp_roadmapper_", suffix=".json"
        )

        try:
            with os.fdopen(temp_fd, "w") as temp_file:
                json.dump(data, temp_file, indent=2)
            os.replace(temp_path, file_path)
        except Exception as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            raise StorageError(f"Failed to write to {file_path}: {e}")

    def _load(self, file_name: str, model: Type[FileModel]) -> FileModel:
        """Load a JSON file into a file model, or an empty model if it's missing.

        Raises:
            StorageError: If the file is not valid JSON or fails validation.
        """
        file_path = self.data_dir / file_name
        if not file_path.exists():
            return model()

        try:
            with open(file_path, "r") as f:
                data = json.load(f)
            return model.model_validate(data)
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError) as e:
            raise StorageError(f"Failed to load {file_name}: {e}")

    def _save(self, file_name: str, data: BaseModel) -> None:
        self._atomic_write(self.data_dir / file_name, data.model_dump(mode="json"))

    # =========================================================================
    # History File
    # =========================================================================

    def load_history(self) -> HistoryFile:
        """Load history.json and return as HistoryFile model."""
        return self._load(HISTORY_FILE, HistoryFile)

    def save_history(self, data: HistoryFile) -> None:
        """Save HistoryFile model to history.json."""
        self._save(HISTORY_FILE, data)

    # =========================================================================
    # Analytics File
    # =========================================================================

    def load_analytics(self) -> AnalyticsFile:
        """Load analytics.json and return as AnalyticsFile model."""
        return self._load(ANALYTICS_FILE, AnalyticsFile)

    def save_analytics(self, data: AnalyticsFile) -> None:
        """Save AnalyticsFile model to analytics.json."""
        self._save(ANALYTICS_FILE, data)

    # =========================================================================
    # Config File
    # =========================================================================

    def load_config(self) -> ConfigFile:
        """Load config.json and return as ConfigFile model."""
        return self._load(CONFIG_FILE, ConfigFile)

    def save_config(self, data: ConfigFile) -> None:
        """Save ConfigFile model to config.json."""
        self._save(CONFIG_FILE, data)

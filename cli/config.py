"""Configuration management for the tbf shell."""

import json
import shutil
from pathlib import Path

from common.logging_config import get_logger
from storage import config as store_config

logger = get_logger(__name__)


class Config:
    """Manages shell configuration stored in JSON file."""

    DEFAULT_CONFIG = {
        "store_path": str(store_config.STORE_PATH),
        "backend": store_config.STORE_BACKEND,
    }

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.tbf/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        A corrupted file is copied to ``config.json.bak`` and replaced by
        the defaults in memory.

        Returns:
            Configuration dictionary
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            try:
                with open(self.config_path, 'r') as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")
                config = self.DEFAULT_CONFIG.copy()
                config.update(data)
                return config
            except (ValueError, OSError) as e:
                backup_path = self.config_path.with_suffix('.json.bak')
                logger.warning(f"Invalid config file {self.config_path}: {e}, backing up to {backup_path}")
                try:
                    shutil.copy(self.config_path, backup_path)
                except OSError as copy_error:
                    logger.warning(f"Failed to back up config file: {copy_error}")
                return self.DEFAULT_CONFIG.copy()

        config = self.DEFAULT_CONFIG.copy()
        self._write(config)
        return config

    def _write(self, data: dict) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning(f"Failed to save config file {self.config_path}: {e}")

    def save(self) -> None:
        """Save current configuration to file."""
        self._write(self.data)

    def get_store_path(self) -> Path:
        """
        Get the backing directory of the directory store.

        Returns:
            Store directory path
        """
        return Path(self.data.get('store_path', self.DEFAULT_CONFIG['store_path'])).expanduser()

    def set_store_path(self, path: Path) -> None:
        """
        Set the store directory and save to file.

        Args:
            path: Backing directory for the directory store
        """
        self.data['store_path'] = str(path)
        self.save()

    def get_backend(self) -> str:
        """
        Get the backend name.

        Returns:
            'directory' or 'memory'
        """
        return self.data.get('backend', self.DEFAULT_CONFIG['backend'])

"""Persistent JSON configuration"""

import json
from pathlib import Path
from typing import Optional, Dict, Any

from ..core.errors import ConfigurationError

# Template written on first run so the user knows which fields to fill in
DEFAULT_SETTINGS = {
    'api_key': '',
    'username': '',
    'password': '',
    'language': 'en',
    'user_agent': 'Opensubtitles downloader',
}


class ConfigManager:
    """Manages settings stored in ~/.config/osd/config.json"""

    def __init__(self, config_dir: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else Path.home() / '.config' / 'osd'
        self.config_file = self.config_dir / 'config.json'

    def _ensure_config_dir(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def ensure_exists(self) -> bool:
        """
        Write the default template if there is no config file yet.

        Returns:
            True if a new file was created
        """
        if self.config_file.exists():
            return False
        self.save(dict(DEFAULT_SETTINGS))
        return True

    def load(self) -> Dict[str, Any]:
        """
        Load settings from the JSON file.

        Returns:
            Dictionary with settings, or an empty dict if the file does not exist

        Raises:
            ConfigurationError: if the file exists but is not a JSON object
        """
        if not self.config_file.exists():
            return {}

        try:
            with open(self.config_file, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Error reading config file {self.config_file}: {e}") from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read config file {self.config_file}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {self.config_file} must contain a JSON object")
        return data

    def save(self, config: Dict[str, Any]):
        """
        Save settings to the JSON file.

        Args:
            config: Dictionary with settings
        """
        try:
            self._ensure_config_dir()
            with open(self.config_file, 'w', encoding='utf-8') as f:
                json.dump(config, f, indent=4, ensure_ascii=False)
        except OSError as e:
            raise ConfigurationError(f"Error saving config file: {e}") from e

    def get_config_path(self) -> str:
        """Return config file path"""
        return str(self.config_file)

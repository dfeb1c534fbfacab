"""osd configuration"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os

from ..core.errors import ConfigurationError
from .i18n import _

APP_VERSION = "0.4.0"
__version__ = APP_VERSION

# Settings that can come from the config file or the environment
PERSISTED_KEYS = ('api_key', 'username', 'password', 'language', 'user_agent')

ENV_VARS = {
    'api_key': 'OSD_API_KEY',
    'username': 'OSD_USERNAME',
    'password': 'OSD_PASSWORD',
    'language': 'OSD_LANGUAGE',
    'user_agent': 'OSD_USER_AGENT',
}

DEFAULT_LANGUAGE = "en"
DEFAULT_USER_AGENT = "Opensubtitles downloader"


@dataclass
class Config:
    """osd settings, handed explicitly to the pipeline"""

    # OpenSubtitles account
    api_key: str = ""
    username: str = ""
    password: str = ""
    language: str = ""
    user_agent: str = ""

    # Network
    timeout: float = 30.0

    # Search and selection
    custom_title: Optional[str] = None
    use_hash: bool = True
    use_gui: bool = False
    gui_mode: Optional[str] = None  # "gtk", "qt" or "terminal"; detected when None

    # Output
    verbose: bool = False
    quiet: bool = False
    log_file: Optional[Path] = None

    # Persistence
    config_dir: Optional[Path] = None
    load_saved: bool = True
    desktop: Optional[str] = field(default=None, repr=False)

    def __post_init__(self):
        if self.timeout is None or self.timeout <= 0:
            raise ConfigurationError(_("Timeout must be a positive number of seconds, got %s") % self.timeout)

        if self.log_file and isinstance(self.log_file, str):
            self.log_file = Path(self.log_file)
        if self.config_dir and isinstance(self.config_dir, str):
            self.config_dir = Path(self.config_dir)

        # Priority:
        # 1. Value already given
        # 2. JSON config file
        # 3. Environment variable
        saved = {}
        if self.load_saved:
            from .config_manager import ConfigManager
            config_mgr = ConfigManager(self.config_dir)
            config_mgr.ensure_exists()
            saved = config_mgr.load()

        for key in PERSISTED_KEYS:
            if not getattr(self, key):
                value = saved.get(key) or os.getenv(ENV_VARS[key], "")
                setattr(self, key, value)

        if not self.language:
            self.language = DEFAULT_LANGUAGE
        if not self.user_agent:
            self.user_agent = DEFAULT_USER_AGENT

        if self.use_gui and self.gui_mode is None:
            from ..ui.choosers import detect_gui_mode
            if self.desktop is None:
                self.desktop = os.getenv("XDG_CURRENT_DESKTOP")
            self.gui_mode = detect_gui_mode(self.desktop)


_config: Optional[Config] = None


def get_config() -> Config:
    """Return the global configuration"""
    global _config
    if _config is None:
        _config = Config()
    return _config


def set_config(config: Config):
    """Set the global configuration"""
    global _config
    _config = config

import os
import logging
from pathlib import Path
from typing import Optional
from platformdirs import user_config_dir
from .core.config import Config, ConfigManager


logger = logging.getLogger(__name__)


CONFIG_DIR = Path(
    os.environ.get("BASISKIT_CONFIG_DIR") or user_config_dir("basiskit")
)
CONFIG_FILE = CONFIG_DIR / "config.yaml"


def getflag(name, default=False):
    default = "true" if default else "false"
    return os.environ.get(name, default).lower() in ("true", "1")


# Initialized to None so importing the package does no I/O.
# Applications call initialize_config() to populate them.
config_mgr: Optional[ConfigManager] = None
config: Optional[Config] = None


def initialize_config() -> Config:
    """
    Loads the user configuration. Safe to call multiple times; only the
    first call reads the file.
    """
    global config_mgr, config

    if config is not None:
        return config

    if getflag("BASISKIT_NO_USER_CONFIG"):
        logger.info("User configuration disabled, using defaults")
        config = Config()
        return config

    logger.info(f"Loading configuration from {CONFIG_FILE}")
    config_mgr = ConfigManager(CONFIG_FILE)
    config = config_mgr.config
    assert config is not None
    return config

"""Configuration file loading and logging setup."""

import logging
import os

import yaml

from .server import Credentials

CONFIG_ENV_VAR = 'CPANEL_API_CONFIG'
DEFAULT_CONFIG_FILE = 'servers.yml'


def default_config_path():
    """Return the config file named by CPANEL_API_CONFIG, or servers.yml."""
    return os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_FILE)


def load_config(path=None):
    """Load the YAML configuration file.

    Args:
        path: Path to the config file (defaults to default_config_path())

    Returns:
        dict: Parsed configuration, empty if the file is empty

    Raises:
        FileNotFoundError: If the file does not exist
    """
    if path is None:
        path = default_config_path()

    with open(path, 'r') as f:
        config = yaml.safe_load(f)

    return config or {}


def configure_logging(config=None):
    """Set up logging from the 'config' section of the configuration."""
    if config is None:
        config = {}

    logfile = config.get('logfile')
    level = logging.getLevelName(str(config.get('log_level', 'INFO')).upper())
    if not isinstance(level, int):
        level = logging.INFO

    log_format = '%(asctime)s %(message)s'
    if logfile:
        logging.basicConfig(
            filename=logfile,
            level=level,
            format=log_format,
            datefmt='%Y-%m-%d %H:%M:%S'
        )
    else:
        logging.basicConfig(
            level=level,
            format=log_format,
            datefmt='%Y-%m-%d %H:%M:%S'
        )


def server_credentials(config):
    """Return Credentials for every entry in the 'servers' section."""
    return [Credentials.from_mapping(server) for server in config.get('servers') or []]

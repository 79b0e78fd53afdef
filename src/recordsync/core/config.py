"""Configuration management for the record sync client."""

import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)

REMOTE_URL_ENV = "RECORDSYNC_REMOTE_URL"
TIMEOUT_ENV = "RECORDSYNC_TIMEOUT"
DEFAULT_TIMEOUT = 30.0


def setup_logging(level: str = "INFO") -> None:
    """Set up logging configuration.
    
    The library never calls this itself; it is meant for applications and
    scripts that embed the client and want its log output.
    
    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def load_environment(env_file: Optional[str] = None) -> bool:
    """Load environment variables from a .env file.
    
    Args:
        env_file: Path to .env file. If None, looks for .env in current directory.
        
    Returns:
        True if a file was found and loaded
    """
    env_path = Path(env_file) if env_file else Path('.env')
    
    if env_path.exists():
        load_dotenv(env_path)
        logger.info(f"Loaded environment from {env_path}")
        return True
    logger.warning(f"No .env file found at {env_path}")
    return False


def get_required_env(key: str) -> str:
    """Get a required environment variable.
    
    Args:
        key: Environment variable name
        
    Returns:
        Environment variable value
        
    Raises:
        ConfigurationError: If the environment variable is not set
    """
    value = os.getenv(key)
    if not value:
        raise ConfigurationError(f"Required environment variable {key} is not set")
    return value


def get_optional_env(key: str, default: str = "") -> str:
    """Get an optional environment variable."""
    return os.getenv(key, default)


def get_timeout_env(key: str = TIMEOUT_ENV, default: float = DEFAULT_TIMEOUT) -> float:
    """Read a timeout in seconds from the environment."""
    raw = get_optional_env(key)
    if not raw:
        return default
    try:
        timeout = float(raw)
    except ValueError:
        raise ConfigurationError(f"{key} must be a number of seconds, got {raw!r}")
    if timeout <= 0:
        raise ConfigurationError(f"{key} must be positive, got {raw!r}")
    return timeout

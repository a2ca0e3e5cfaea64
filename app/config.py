"""Runtime settings, read from the environment (and a .env file when present)."""
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# The listener port is fixed; it is not part of the configuration surface.
PORT = 5000
HOST = "0.0.0.0"


class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""
    pass


@dataclass(frozen=True)
class Settings:
    mongo_uri: str
    db_name: str = "productdb"
    collection_name: str = "products"
    log_level: str = "INFO"


def _get_required_env(key: str) -> str:
    value = os.environ.get(key)
    if not value:
        raise ConfigurationError(
            f"Required environment variable '{key}' is not set. "
            f"Please add it to your environment or .env file."
        )
    return value


def _get_optional_env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key) or default


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from the process environment.

    A .env file is loaded first (without overriding variables that are
    already set). MONGO_URI is the only required value.

    Raises:
        ConfigurationError: If MONGO_URI is missing.
    """
    load_dotenv(dotenv_path=env_file)

    return Settings(
        mongo_uri=_get_required_env("MONGO_URI"),
        db_name=_get_optional_env("MONGO_DB_NAME", "productdb"),
        collection_name=_get_optional_env("MONGO_COLLECTION", "products"),
        log_level=_get_optional_env("LOG_LEVEL", "INFO").upper(),
    )

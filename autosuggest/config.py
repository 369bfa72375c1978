"""
Environment configuration, resolved once at startup.
"""

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ValidationError

from .queries import AUTOCOMPLETE_SIZE, DEFAULT_FIELD, MAPPING_CHECK_SIZE

DEFAULT_INDEX = "orszagos_cimlista"
DEFAULT_PORT = 8080

REQUIRED_VARIABLES = (
    "OPENSEARCH_HOST",
    "OPENSEARCH_PORT",
    "OPENSEARCH_USER",
    "OPENSEARCH_PASSWORD",
)

_TRUE_VALUES = {"1", "true", "yes", "on"}

# Settings field -> environment variable it is read from
_ENV_NAMES = {
    "host": "OPENSEARCH_HOST",
    "port": "OPENSEARCH_PORT",
    "username": "OPENSEARCH_USER",
    "password": "OPENSEARCH_PASSWORD",
    "scheme": "OPENSEARCH_SCHEME",
    "index": "OPENSEARCH_INDEX",
    "field": "AUTOSUGGEST_FIELD",
    "autocomplete_size": "AUTOSUGGEST_SIZE",
    "mapping_check_size": "MAPPING_CHECK_SIZE",
    "timeout": "OPENSEARCH_TIMEOUT",
    "listen_port": "PORT",
}


class ConfigError(Exception):
    """Raised when a required environment variable is missing or invalid."""


class Settings(BaseModel):
    host: str
    port: int
    username: str
    password: str
    scheme: str = "http"
    index: str = DEFAULT_INDEX
    field: str = DEFAULT_FIELD
    autocomplete_size: int = AUTOCOMPLETE_SIZE
    mapping_check_size: int = MAPPING_CHECK_SIZE
    escape_regex: bool = False
    timeout: float = 10.0
    listen_port: int = DEFAULT_PORT

    @property
    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}:{self.port}"


def _get(environ: Mapping[str, str], key: str, default: Optional[str] = None) -> Optional[str]:
    value = environ.get(key, "").strip()
    return value or default


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment.

    Raises ConfigError naming every required variable that is unset or blank,
    or every variable whose value cannot be converted.
    """
    if environ is None:
        environ = os.environ

    missing = [key for key in REQUIRED_VARIABLES if not _get(environ, key)]
    if missing:
        raise ConfigError(f"Missing required environment variable(s): {', '.join(missing)}")

    escape = _get(environ, "AUTOSUGGEST_ESCAPE_REGEX", "false").lower() in _TRUE_VALUES
    values = {
        "host": _get(environ, "OPENSEARCH_HOST"),
        "port": _get(environ, "OPENSEARCH_PORT"),
        "username": _get(environ, "OPENSEARCH_USER"),
        "password": _get(environ, "OPENSEARCH_PASSWORD"),
        "scheme": _get(environ, "OPENSEARCH_SCHEME", "http"),
        "index": _get(environ, "OPENSEARCH_INDEX", DEFAULT_INDEX),
        "field": _get(environ, "AUTOSUGGEST_FIELD", DEFAULT_FIELD),
        "autocomplete_size": _get(environ, "AUTOSUGGEST_SIZE", str(AUTOCOMPLETE_SIZE)),
        "mapping_check_size": _get(environ, "MAPPING_CHECK_SIZE", str(MAPPING_CHECK_SIZE)),
        "escape_regex": escape,
        "timeout": _get(environ, "OPENSEARCH_TIMEOUT", "10"),
        "listen_port": _get(environ, "PORT", str(DEFAULT_PORT)),
    }
    try:
        settings = Settings(**values)
    except ValidationError as e:
        invalid = [_ENV_NAMES.get(str(err["loc"][0]), str(err["loc"][0])) for err in e.errors()]
        raise ConfigError(f"Invalid value for environment variable(s): {', '.join(invalid)}") from e

    settings.mapping_check_size = min(settings.mapping_check_size, MAPPING_CHECK_SIZE)
    return settings

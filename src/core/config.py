"""Process-wide runtime configuration.

Settings start from the defaults table below, are overlaid with environment
variables on first access, and are overlaid once more by the JSON secret
fetched from AWS Secrets Manager during ``bootstrap()``.

Components must read settings through ``settings.get(...)`` on every use
instead of capturing values at import time, so that values arriving with the
secret fetch are honoured.
"""

import os
import threading
from collections.abc import Mapping
from typing import Any, Final

from aws_lambda_powertools import Logger
from aws_lambda_powertools.utilities import parameters
from aws_lambda_powertools.utilities.parameters.exceptions import (
    GetParameterError,
    TransformParameterError,
)

from core.models.errors import ConfigurationError
from core.utils.constants import (
    DEFAULT_AWS_REGION,
    DEFAULT_SECRET_NAME,
    ENV_APP_DB_HOST,
    ENV_APP_DB_NAME,
    ENV_APP_DB_PASSWORD,
    ENV_APP_DB_URL,
    ENV_APP_DB_USER,
    ENV_APP_SECRET_NAME,
    ENV_AWS_ENDPOINT_URL,
    ENV_AWS_REGION,
    ENV_S3_BUCKET,
)

logger = Logger(UTC=True)

DEFAULTS: Final[Mapping[str, str]] = {
    ENV_APP_DB_HOST: "",
    ENV_APP_DB_USER: "",
    ENV_APP_DB_PASSWORD: "",
    ENV_APP_DB_NAME: "",
    ENV_APP_DB_URL: "",
    ENV_AWS_REGION: DEFAULT_AWS_REGION,
    ENV_S3_BUCKET: "",
    ENV_AWS_ENDPOINT_URL: "",
    ENV_APP_SECRET_NAME: DEFAULT_SECRET_NAME,
}

# Used when the secret store cannot be reached.
FALLBACK_DATABASE: Final[Mapping[str, str]] = {
    ENV_APP_DB_HOST: "localhost",
    ENV_APP_DB_NAME: "STUDENTS",
    ENV_APP_DB_PASSWORD: "student12",
    ENV_APP_DB_USER: "nodeapp",
}

SECRET_KEY_MAP: Final[Mapping[str, str]] = {
    "user": ENV_APP_DB_USER,
    "password": ENV_APP_DB_PASSWORD,
    "host": ENV_APP_DB_HOST,
    "db": ENV_APP_DB_NAME,
    ENV_AWS_REGION: ENV_AWS_REGION,
    ENV_S3_BUCKET: ENV_S3_BUCKET,
}


class Settings:
    """Thread-safe settings cell read on every access."""

    def __init__(self, defaults: Mapping[str, str] = DEFAULTS) -> None:
        self._defaults = dict(defaults)
        self._values: dict[str, str] | None = None
        self._bootstrapped = False
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        values = dict(self._defaults)

        for key in values:
            env_value = os.getenv(key)
            if env_value is None:
                logger.debug(
                    "Value not found in environment, using default",
                    extra={"key": key},
                )
            else:
                values[key] = env_value

        return values

    def _current(self) -> dict[str, str]:
        if self._values is None:
            with self._lock:
                if self._values is None:
                    self._values = self._load()
        return self._values

    def get(self, key: str, default: str | None = None) -> str | None:
        """Return the current value for ``key``.

        Empty strings are treated as unset and yield ``default``.
        """
        value = self._current().get(key)
        return value if value else default

    def require(self, key: str) -> str:
        """Return the value for ``key`` or raise ConfigurationError."""
        value = self.get(key)
        if not value:
            raise ConfigurationError(
                message=f"{key} is not configured. Check that the secret has been loaded.",
                setting=key,
            )
        return value

    def as_dict(self) -> dict[str, str]:
        """Snapshot of every known setting."""
        return dict(self._current())

    @property
    def bootstrapped(self) -> bool:
        return self._bootstrapped

    def apply(self, overrides: Mapping[str, Any]) -> None:
        """Replace several values at once."""
        with self._lock:
            values = dict(self._values if self._values is not None else self._load())
            values.update({key: str(value) for key, value in overrides.items()})
            self._values = values

    def bootstrap(self, *, force: bool = False) -> None:
        """Overlay values from the JSON secret, once per process.

        When the secret cannot be fetched the database settings fall back
        to the local development defaults.
        """
        if self._bootstrapped and not force:
            return

        secret_name = self.get(ENV_APP_SECRET_NAME, DEFAULT_SECRET_NAME)

        try:
            secret = parameters.get_secret(secret_name, transform="json")
        except (GetParameterError, TransformParameterError) as exc:
            logger.warning(
                "Secrets not found. Proceeding with default values",
                extra={"secret_name": secret_name, "error": str(exc)},
            )
            self.apply(FALLBACK_DATABASE)
        else:
            overrides = {
                SECRET_KEY_MAP[name]: value
                for name, value in (secret or {}).items()
                if name in SECRET_KEY_MAP
            }
            self.apply(overrides)
            logger.info(
                "Configuration loaded from secret",
                extra={"secret_name": secret_name, "keys": sorted(overrides)},
            )

        self._bootstrapped = True

    def override(self, **values: str) -> None:
        """Force values and mark the settings as bootstrapped (tests)."""
        self.apply(values)
        self._bootstrapped = True

    def reset(self) -> None:
        """Drop every loaded value; the next access reloads from env."""
        with self._lock:
            self._values = None
            self._bootstrapped = False


settings = Settings()


def bootstrap() -> Settings:
    """Load the secret into the shared settings and return them."""
    settings.bootstrap()
    return settings

"""
Client configuration.

Settings come from keyword arguments or from the environment. An optional
``.env`` file is loaded with python-dotenv before the variables are read:

    RESELLER_BASE_URL      API base URL (default https://accfarm.com/api/v1/)
    RESELLER_TIMEOUT       Per-request timeout in seconds (default 60)
    RESELLER_BEARER_TOKEN  Initial bearer token
    RESELLER_USER_SECRET   Initial user secret
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from pydantic import Field, field_validator

from .engine.exceptions import ConfigurationError
from .schemas.bases import SDKModel


DEFAULT_BASE_URL = "https://accfarm.com/api/v1/"
DEFAULT_TIMEOUT = 60.0
ENV_PREFIX = "RESELLER_"


class ClientSettings(SDKModel):
    """Connection settings of a ``ResellerClient``.

    Attributes:
        base_url: API base URL, always ending with a slash.
        timeout: Per-request timeout in seconds.
        bearer_token: Initial bearer token.
        user_secret: Initial user secret.
    """

    base_url: str = Field(default=DEFAULT_BASE_URL, min_length=8, description="API base URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, description="Request timeout (seconds)")
    bearer_token: str = Field(default="", description="Initial bearer token")
    user_secret: str = Field(default="", description="Initial user secret")

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @classmethod
    def from_env(cls, env_file: Optional[Union[str, Path]] = None) -> "ClientSettings":
        """
        Build settings from ``RESELLER_*`` environment variables.

        Args:
            env_file: Optional path of a ``.env`` file to load first.

        Raises:
            ConfigurationError: If ``env_file`` is given but missing, or a
                value is invalid.
        """
        if env_file is not None:
            env_path = Path(env_file)
            if not env_path.exists():
                raise ConfigurationError(f"Config path is not exist: {env_path}")
            load_dotenv(dotenv_path=env_path)

        values = {}
        for name in ("base_url", "timeout", "bearer_token", "user_secret"):
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw != "":
                values[name] = raw

        try:
            return cls(**values)
        except ValueError as e:
            raise ConfigurationError(f"Invalid client settings: {e}") from e

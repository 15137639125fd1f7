"""Client configuration with Pydantic validation.

This module provides the frozen configuration object consumed by the request
builder and dispatcher, with support for YAML files and environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

ENV_PREFIX = "GAMEAPI_"


class ClientConfig(BaseModel):
    """Connection and header settings for the game API client.

    All values are supplied at construction time, never per call. The
    configuration can be:
    - Instantiated with defaults: `ClientConfig()`
    - Loaded from YAML: `ClientConfig.from_yaml("client.yaml")`
    - Loaded from the environment: `ClientConfig.from_env()`
    """

    model_config = ConfigDict(frozen=True)

    base_url: str = Field(
        "http://murk.dev/api/",
        min_length=1,
        description="Base URL every route is appended to",
    )
    client_agent: str = Field(
        "GameClient-Agent",
        min_length=1,
        description="Client identifier sent as User-Agent: X-<client_agent>",
    )
    authorization_header: str = Field(
        "Authorization",
        min_length=1,
        description="Header name carrying the current credential",
    )
    initial_credential: str = Field(
        "unauthenticated",
        description="Placeholder credential used until the first login succeeds",
    )
    timeout: float = Field(
        30.0,
        gt=0,
        description="Transport timeout in seconds",
    )

    @field_validator("base_url")
    @classmethod
    def _ensure_trailing_slash(cls, value: str) -> str:
        return value if value.endswith("/") else value + "/"

    @classmethod
    def from_yaml(cls, path: str) -> ClientConfig:
        """Read client settings from a YAML mapping keyed by field name.

        Keys absent from the file keep their defaults, so a file holding only
        ``base_url`` is enough to point the client at another backend.
        ``GAMEAPI_*`` variables are not consulted here; use from_env() for
        deployments configured through the environment.

        Raises:
            FileNotFoundError: If ``path`` does not exist.
            ValidationError: If a value fails validation, e.g. a non-positive
                timeout or an empty authorization header name.
        """
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    def to_yaml(self, path: str) -> None:
        """Write every setting to ``path`` in field declaration order.

        The placeholder credential is written as well; the output is
        readable by from_yaml().
        """
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(
                self.model_dump(),
                f,
                default_flow_style=False,
                sort_keys=False,
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ClientConfig:
        """Load configuration from `GAMEAPI_*` environment variables.

        Unset variables fall back to the field defaults, e.g. `GAMEAPI_BASE_URL`
        overrides `base_url` and `GAMEAPI_TIMEOUT` overrides `timeout`.
        """
        env = os.environ if environ is None else environ
        data: dict[str, str] = {}
        for name in cls.model_fields:
            value = env.get(f"{ENV_PREFIX}{name.upper()}")
            if value is not None:
                data[name] = value
        return cls.model_validate(data)

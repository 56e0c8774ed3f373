# src/archespec/config/settings.py
# Copyright (c) Arche.
# SPDX-License-Identifier: MIT
"""archespec Configuration (Pydantic Settings, v2)

Summary:
    Typed, validated configuration of the runtime defaults: the OpenAPI
    version documents are generated for, the strong parameter mode, the
    omission policy of responses and the indentation of exported
    documents. Only the application layer reads settings; the domain layer
    receives plain arguments.

Design:
    - Pydantic v2 BaseSettings with `extra='forbid'` to catch unknown env.
    - Explicit field declarations with constrained types and ranges.
    - Environment enumeration for behavior toggles (includes TEST).
    - Singleton accessor `get_settings()` with LRU cache.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import lru_cache
from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from archespec.domain.exceptions.meta import InvalidArgumentError
from archespec.domain.value_objects.openapi_version import SUPPORTED_VERSIONS, OpenAPIVersion

logger = logging.getLogger(__name__)


class Environment(str, Enum):
    """Logical deployment environment."""

    DEVELOPMENT = "development"
    TEST = "test"
    CI = "ci"
    STAGING = "staging"
    PRODUCTION = "production"


class Settings(BaseSettings):
    """Typed configuration of archespec.

    Entry points such as the export CLI read settings through
    ``get_settings()``. Library callers may pass explicit arguments instead.
    """

    # ---------------------------
    # Core environment
    # ---------------------------
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Logical deployment environment.",
        validation_alias="ENVIRONMENT",
    )

    log_level: str | None = Field(
        default=None,
        description="Overrides the root log level, e.g. DEBUG or WARNING.",
        validation_alias="LOG_LEVEL",
    )

    service_name: str = Field(
        default="archespec",
        description="Service name every structured log record is enriched with.",
        validation_alias="SERVICE_NAME",
    )

    # ---------------------------
    # Documents
    # ---------------------------
    default_openapi_version: str = Field(
        default="3.1",
        description=f"OpenAPI version used when none is given, one of {', '.join(SUPPORTED_VERSIONS)}.",
        validation_alias="ARCHESPEC_OPENAPI_VERSION",
    )

    json_indent: int | None = Field(
        default=None,
        ge=0,
        le=8,
        description="Indentation of exported documents. Compact output if not set.",
        validation_alias="ARCHESPEC_JSON_INDENT",
    )

    # ---------------------------
    # Runtime pipeline
    # ---------------------------
    strong_parameters: bool = Field(
        default=False,
        description="Reject request parameters that can't be mapped to the operation.",
        validation_alias="ARCHESPEC_STRONG_PARAMETERS",
    )

    response_omit: Literal["nil", "empty"] | None = Field(
        default=None,
        description="Default policy of omitting properties from responses.",
        validation_alias="ARCHESPEC_RESPONSE_OMIT",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="forbid",
        case_sensitive=False,
    )

    @field_validator("default_openapi_version")
    @classmethod
    def _check_openapi_version(cls, value: str) -> str:
        """Reject versions documents can't be generated for.

        Raises:
            ValueError: If the version isn't supported.
        """
        try:
            OpenAPIVersion.from_value(value)
        except InvalidArgumentError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value!r}")
        return level

    @property
    def openapi_version(self) -> OpenAPIVersion:
        return OpenAPIVersion.from_value(self.default_openapi_version)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton `Settings` instance.

    Returns:
        Settings: Validated settings.

    Raises:
        RuntimeError: If configuration is invalid.
    """
    try:
        settings = Settings()
        logger.debug(
            "Settings initialized",
            extra={
                "environment": settings.environment.value,
                "default_openapi_version": settings.default_openapi_version,
                "strong_parameters": settings.strong_parameters,
                "response_omit": settings.response_omit,
                "json_indent": settings.json_indent,
            },
        )
        return settings
    except ValidationError as exc:
        logger.exception("Invalid archespec configuration")
        raise RuntimeError(f"Invalid configuration: {exc}") from exc


__all__ = ["Environment", "Settings", "get_settings"]

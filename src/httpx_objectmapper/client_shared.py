"""Shared helpers for sync/async client bootstrap."""

from __future__ import annotations

from .config import ObjectMapperClientConfig
from .core.errors import ConfigError


def validate_client_config(config: ObjectMapperClientConfig) -> None:
    try:
        config.validate()
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


__all__ = [
    "validate_client_config",
]

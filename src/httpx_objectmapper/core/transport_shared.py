"""Shared helpers for building sync/async httpx clients."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from ..config import ObjectMapperClientConfig


def build_default_headers(config: ObjectMapperClientConfig) -> Mapping[str, str]:
    return {
        "Accept": "application/json",
        "Accept-Encoding": "gzip",
        "User-Agent": config.user_agent,
    }


def build_default_timeout(config: ObjectMapperClientConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.transport.timeout_connect_seconds,
        read=config.transport.timeout_read_seconds,
        write=config.transport.timeout_write_seconds,
        pool=config.transport.timeout_pool_seconds,
    )


def build_client_kwargs(config: ObjectMapperClientConfig) -> dict[str, Any]:
    return {
        "base_url": config.base_url,
        "headers": build_default_headers(config),
        "timeout": build_default_timeout(config),
        "follow_redirects": config.transport.follow_redirects,
    }


__all__ = [
    "build_default_headers",
    "build_default_timeout",
    "build_client_kwargs",
]

"""
Public, high-level helpers for building an RTWire client.
"""

from __future__ import annotations

from typing import Mapping, Optional

import requests

from .core.client import RTWireClient
from .core.config import ClientConfig, ClientParameters, load_client_config

__all__ = ["create_client"]


def create_client(
    *,
    config: Optional[ClientConfig] = None,
    session: Optional[requests.Session] = None,
    env_file: Optional[str] = ".env",
    overrides: Optional[Mapping[str, str]] = None,
    base: Optional[Mapping[str, str]] = None,
    parameters: Optional[ClientParameters] = None,
    url: Optional[str] = None,
    scheme: Optional[str] = None,
    host: Optional[str] = None,
    network: Optional[str] = None,
    user: Optional[str] = None,
    password: Optional[str] = None,
    timeout_seconds: Optional[float | int | str] = None,
) -> RTWireClient:
    """
    Construct an :class:`RTWireClient`.

    Callers can either supply a ready-made :class:`ClientConfig` or let the
    helper assemble one from environment data and keyword arguments.
    """
    if config is not None:
        extras = (
            overrides,
            base,
            parameters,
            url,
            scheme,
            host,
            network,
            user,
            password,
            timeout_seconds,
        )
        if any(item is not None and item != {} for item in extras):
            raise ValueError(
                "Provide either a pre-built ClientConfig or individual parameters, not both."
            )
        cfg = config
    else:
        cfg = load_client_config(
            env_file=env_file,
            overrides=overrides,
            base=base,
            parameters=parameters,
            url=url,
            scheme=scheme,
            host=host,
            network=network,
            user=user,
            password=password,
            timeout_seconds=timeout_seconds,
        )
    return RTWireClient(cfg, session=session)

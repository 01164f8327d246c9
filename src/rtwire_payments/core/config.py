"""
Configuration objects and helpers for the RTWire client.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlsplit

from .environment import build_environment

__all__ = [
    "MAINNET",
    "TESTNET3",
    "MAINNET_URL",
    "TESTNET3_URL",
    "ConfigError",
    "ClientConfig",
    "ClientParameters",
    "load_client_config",
]

MAINNET = "mainnet"
TESTNET3 = "testnet3"
NETWORKS = (MAINNET, TESTNET3)

DEFAULT_HOST = "api.rtwire.com"
DEFAULT_SCHEME = "https"
DEFAULT_TIMEOUT_SECONDS = 30.0

MAINNET_URL = f"{DEFAULT_SCHEME}://{DEFAULT_HOST}/v1/{MAINNET}"
TESTNET3_URL = f"{DEFAULT_SCHEME}://{DEFAULT_HOST}/v1/{TESTNET3}"

_PARAMETER_TO_ENV_KEY = {
    "url": "RTWIRE_URL",
    "scheme": "RTWIRE_SCHEME",
    "host": "RTWIRE_HOST",
    "network": "RTWIRE_NETWORK",
    "user": "RTWIRE_USER",
    "password": "RTWIRE_PASSWORD",
    "timeout_seconds": "RTWIRE_TIMEOUT_SECONDS",
}


class ConfigError(Exception):
    """Raised when the supplied configuration is invalid."""


@dataclass(frozen=True)
class ClientParameters:
    """
    Explicit parameter bundle for constructing :class:`ClientConfig`.

    Any field left as ``None`` falls back to the environment.
    """

    url: Optional[str] = None
    scheme: Optional[str] = None
    host: Optional[str] = None
    network: Optional[str] = None
    user: Optional[str] = None
    password: Optional[str] = None
    timeout_seconds: Optional[float | int | str] = None

    def as_overrides(self) -> Dict[str, str]:
        return _collect_overrides(
            {name: getattr(self, name) for name in _PARAMETER_TO_ENV_KEY}
        )


def _collect_overrides(explicit: Mapping[str, Any]) -> Dict[str, str]:
    overrides: Dict[str, str] = {}
    for key, value in explicit.items():
        if value is None:
            continue
        try:
            env_key = _PARAMETER_TO_ENV_KEY[key]
        except KeyError as exc:
            raise TypeError(f"Unknown client parameter '{key}'") from exc
        overrides[env_key] = str(value)
    return overrides


def _require(values: Mapping[str, str], key: str) -> str:
    value = (values.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} must be provided")
    return value


def _normalize_network(raw: str) -> str:
    network = raw.strip().lower()
    if network not in NETWORKS:
        raise ConfigError(
            f"RTWIRE_NETWORK must be one of {', '.join(NETWORKS)}, got '{raw}'"
        )
    return network


def _normalize_url(raw: str) -> str:
    url = raw.strip().rstrip("/")
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise ConfigError(f"RTWIRE_URL is not a valid http(s) URL: '{raw}'")
    return url


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ConfigError(
            f"RTWIRE_TIMEOUT_SECONDS must be a number, got '{raw}'"
        ) from exc
    if timeout <= 0:
        raise ConfigError("RTWIRE_TIMEOUT_SECONDS must be greater than zero")
    return timeout


def _network_from_url(url: str) -> Optional[str]:
    tail = urlsplit(url).path.rstrip("/").rsplit("/", 1)[-1]
    return tail if tail in NETWORKS else None


@dataclass(frozen=True)
class ClientConfig:
    base_url: str
    user: str
    password: str
    network: str = MAINNET
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS

    @property
    def auth(self) -> tuple[str, str]:
        return (self.user, self.password)

    def endpoint(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def __repr__(self) -> str:
        return (
            f"ClientConfig(base_url={self.base_url!r}, user={self.user!r}, "
            f"password='***', network={self.network!r}, "
            f"timeout_seconds={self.timeout_seconds!r})"
        )

    @classmethod
    def from_mapping(cls, values: Mapping[str, str]) -> "ClientConfig":
        user = _require(values, "RTWIRE_USER")
        password = _require(values, "RTWIRE_PASSWORD")

        explicit_url = (values.get("RTWIRE_URL") or "").strip()
        if explicit_url:
            base_url = _normalize_url(explicit_url)
            network = _network_from_url(base_url) or _normalize_network(
                values.get("RTWIRE_NETWORK") or MAINNET
            )
        else:
            network = _normalize_network(values.get("RTWIRE_NETWORK") or MAINNET)
            scheme = (values.get("RTWIRE_SCHEME") or DEFAULT_SCHEME).strip().lower()
            host = (values.get("RTWIRE_HOST") or DEFAULT_HOST).strip().strip("/")
            base_url = _normalize_url(f"{scheme}://{host}/v1/{network}")

        timeout_seconds = _parse_timeout(
            values.get("RTWIRE_TIMEOUT_SECONDS") or str(DEFAULT_TIMEOUT_SECONDS)
        )

        return cls(
            base_url=base_url,
            user=user,
            password=password,
            network=network,
            timeout_seconds=timeout_seconds,
        )

    @classmethod
    def from_env(
        cls,
        *,
        env_file: Optional[str] = ".env",
        overrides: Optional[Mapping[str, str]] = None,
        base: Optional[Mapping[str, str]] = None,
        parameters: Optional[ClientParameters] = None,
        **explicit: Any,
    ) -> "ClientConfig":
        merged_overrides = dict(overrides or {})
        if parameters is not None:
            merged_overrides.update(parameters.as_overrides())
        merged_overrides.update(_collect_overrides(explicit))

        environment = build_environment(
            env_file=env_file,
            base=base,
            overrides=merged_overrides,
        )
        return cls.from_mapping(environment.variables)


def load_client_config(
    *,
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
) -> ClientConfig:
    """
    Convenience wrapper that mirrors :meth:`ClientConfig.from_env`.

    Settings can come from environment variables, a ``.env`` file, keyword
    arguments, or any combination of the three. Keyword arguments win.
    """
    return ClientConfig.from_env(
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

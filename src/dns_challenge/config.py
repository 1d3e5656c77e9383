"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import timedelta

import httpx
import requests
from akamai.edgegrid import EdgeRc

DEFAULT_TTL = 120
DEFAULT_PROPAGATION_TIMEOUT = timedelta(seconds=60)
DEFAULT_POLLING_INTERVAL = timedelta(seconds=2)

_DEFAULT_MAX_BODY = 131072
_DEFAULT_NS1_ENDPOINT = "https://api.nsone.net/v1/"
_DEFAULT_NS1_HTTP_TIMEOUT = timedelta(seconds=10)

_FASTDNS_CREDENTIALS = (
    "AKAMAI_HOST",
    "AKAMAI_CLIENT_TOKEN",
    "AKAMAI_CLIENT_SECRET",
    "AKAMAI_ACCESS_TOKEN",
)
_EDGERC_KEYS = ("host", "client_token", "client_secret", "access_token")


@dataclass(frozen=True)
class FastDnsConfig:
    """Akamai FastDNS credentials and challenge tunables.

    ``session`` is an optional caller-owned ``requests.Session`` used for the
    signed API calls; it is never closed by the provider.
    """

    host: str
    client_token: str
    client_secret: str
    access_token: str
    max_body: int = _DEFAULT_MAX_BODY
    ttl: int = DEFAULT_TTL
    propagation_timeout: timedelta = DEFAULT_PROPAGATION_TIMEOUT
    polling_interval: timedelta = DEFAULT_POLLING_INTERVAL
    session: requests.Session | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FastDnsConfig:
        """Build a config from ``AKAMAI_*`` variables.

        When ``AKAMAI_EDGERC`` points at an ``.edgerc`` file the credentials are
        read from it (section ``AKAMAI_EDGERC_SECTION``, default ``default``)
        instead of the individual credential variables.
        """
        environ = os.environ if environ is None else environ

        edgerc_path = environ.get("AKAMAI_EDGERC")
        if edgerc_path:
            credentials = _read_edgerc(edgerc_path, environ.get("AKAMAI_EDGERC_SECTION") or "default")
        else:
            values = _require_env(environ, *_FASTDNS_CREDENTIALS)
            credentials = {
                "host": values["AKAMAI_HOST"],
                "client_token": values["AKAMAI_CLIENT_TOKEN"],
                "client_secret": values["AKAMAI_CLIENT_SECRET"],
                "access_token": values["AKAMAI_ACCESS_TOKEN"],
            }

        return cls(
            **credentials,
            ttl=_int_env(environ, "AKAMAI_TTL", DEFAULT_TTL),
            propagation_timeout=_seconds_env(environ, "AKAMAI_PROPAGATION_TIMEOUT", DEFAULT_PROPAGATION_TIMEOUT),
            polling_interval=_seconds_env(environ, "AKAMAI_POLLING_INTERVAL", DEFAULT_POLLING_INTERVAL),
        )


@dataclass(frozen=True)
class Ns1Config:
    """NS1 API key and challenge tunables.

    ``http_client`` is an optional caller-owned ``httpx.Client``; the API key
    header and endpoint are applied per request, and the client is never closed
    by the provider.
    """

    api_key: str
    ttl: int = DEFAULT_TTL
    propagation_timeout: timedelta = DEFAULT_PROPAGATION_TIMEOUT
    polling_interval: timedelta = DEFAULT_POLLING_INTERVAL
    http_timeout: timedelta = _DEFAULT_NS1_HTTP_TIMEOUT
    endpoint: str = _DEFAULT_NS1_ENDPOINT
    http_client: httpx.Client | None = field(default=None, compare=False, repr=False)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Ns1Config:
        """Build a config from ``NS1_*`` variables."""
        environ = os.environ if environ is None else environ
        values = _require_env(environ, "NS1_API_KEY")
        return cls(
            api_key=values["NS1_API_KEY"],
            ttl=_int_env(environ, "NS1_TTL", DEFAULT_TTL),
            propagation_timeout=_seconds_env(environ, "NS1_PROPAGATION_TIMEOUT", DEFAULT_PROPAGATION_TIMEOUT),
            polling_interval=_seconds_env(environ, "NS1_POLLING_INTERVAL", DEFAULT_POLLING_INTERVAL),
            http_timeout=_seconds_env(environ, "NS1_HTTP_TIMEOUT", _DEFAULT_NS1_HTTP_TIMEOUT),
        )


@dataclass(frozen=True)
class AppConfig:
    """Provider selection plus the vendor configs found in the environment."""

    dns_provider: str
    fastdns: FastDnsConfig | None = None
    ns1: Ns1Config | None = None


def _require_env(environ: Mapping[str, str], *names: str) -> dict[str, str]:
    values = {name: environ.get(name) for name in names}
    missing = [name for name, value in values.items() if not value]
    if missing:
        raise ValueError(f"Required environment variables are not set: {', '.join(missing)}")
    return values


def _int_env(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name)
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got: {raw!r}")
    if value < 1:
        raise ValueError(f"{name} must be a positive integer, got: {value}")
    return value


def _seconds_env(environ: Mapping[str, str], name: str, default: timedelta) -> timedelta:
    return timedelta(seconds=_int_env(environ, name, int(default.total_seconds())))


def _read_edgerc(path: str, section: str) -> dict:
    """Read EdgeGrid credentials from an ``.edgerc`` file section."""
    rc = EdgeRc(path)
    if not rc.has_section(section):
        raise ValueError(f"Section '{section}' not found in edgerc file {path}")
    credentials = {key: rc.get(section, key, fallback="") for key in _EDGERC_KEYS}
    missing = [key for key, value in credentials.items() if not value]
    if missing:
        raise ValueError(f"Edgerc section '{section}' is missing: {', '.join(missing)}")
    credentials["max_body"] = rc.getint(section, "max_body", fallback=_DEFAULT_MAX_BODY)
    return credentials


def load_config(environ: Mapping[str, str] | None = None) -> AppConfig:
    """Load and validate application configuration from environment variables.

    A vendor config is loaded whenever any of its credential variables is set;
    incomplete credentials for that vendor raise ``ValueError``.
    """
    environ = os.environ if environ is None else environ
    dns_provider = _require_env(environ, "DNS_PROVIDER")["DNS_PROVIDER"]

    fastdns = None
    if any(environ.get(name) for name in (*_FASTDNS_CREDENTIALS, "AKAMAI_EDGERC")):
        fastdns = FastDnsConfig.from_env(environ)

    ns1 = Ns1Config.from_env(environ) if environ.get("NS1_API_KEY") else None

    return AppConfig(dns_provider=dns_provider, fastdns=fastdns, ns1=ns1)

"""DNS provider factory — resolve provider name to concrete implementation."""

from __future__ import annotations

from dns_challenge.config import AppConfig
from dns_challenge.dns.base import DnsProvider
from dns_challenge.dns.fastdns import FastDnsProvider
from dns_challenge.dns.ns1 import Ns1Provider


def get_dns_provider(config: AppConfig, provider_name: str | None = None) -> DnsProvider:
    """Instantiate a DNS provider by name.

    Args:
        config: Application configuration.
        provider_name: Override the default provider from config.

    Returns:
        A configured DnsProvider instance.
    """
    name = (provider_name or config.dns_provider).lower()

    if name == "fastdns":
        if config.fastdns is None:
            raise ValueError("AKAMAI_* credentials are required when DNS_PROVIDER=fastdns")
        return FastDnsProvider(config.fastdns)

    if name == "ns1":
        if config.ns1 is None:
            raise ValueError("NS1_API_KEY is required when DNS_PROVIDER=ns1")
        return Ns1Provider(config.ns1)

    raise ValueError(f"Unknown DNS provider: '{name}'")

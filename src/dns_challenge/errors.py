"""Runtime errors raised by DNS providers."""

from __future__ import annotations


class DnsProviderError(Exception):
    """A DNS provider could not complete a challenge record operation."""


class ZoneNotFoundError(DnsProviderError):
    """No authoritative zone could be found for a FQDN."""

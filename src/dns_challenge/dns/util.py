"""DNS-01 helper functions."""

from __future__ import annotations

import hashlib

import dns.exception
import dns.resolver
import josepy
from acme import challenges

from dns_challenge.errors import ZoneNotFoundError


def to_fqdn(name: str) -> str:
    """Return ``name`` with a trailing dot."""
    return name if name.endswith(".") else f"{name}."


def un_fqdn(name: str) -> str:
    """Return ``name`` without its trailing dot."""
    return name.removesuffix(".")


def get_record(domain: str, key_auth: str) -> tuple[str, str]:
    """Compute the DNS-01 record for a domain and key authorization.

    Args:
        domain: Identifier being validated (e.g. "example.com" or "*.example.com").
        key_auth: Key authorization string (``token.thumbprint``).

    Returns:
        Tuple of (fqdn, value): the ``_acme-challenge`` FQDN with a trailing dot
        and the unpadded base64url SHA-256 digest of ``key_auth``.
    """
    digest = hashlib.sha256(key_auth.encode()).digest()
    value = josepy.b64encode(digest).decode()
    fqdn = to_fqdn(f"{challenges.DNS01.LABEL}.{domain.removeprefix('*.')}")
    return fqdn, value


def find_zone_by_fqdn(fqdn: str, resolver: dns.resolver.Resolver | None = None) -> str:
    """Find the authoritative zone for ``fqdn`` by walking its parents for an SOA.

    Returns the zone name with a trailing dot (e.g. "example.com.").

    Raises:
        ZoneNotFoundError: if no SOA is found or the lookup fails.
    """
    try:
        zone = dns.resolver.zone_for_name(to_fqdn(fqdn), resolver=resolver)
    except dns.exception.DNSException as exc:
        raise ZoneNotFoundError(f"could not find the start of authority for {fqdn!r}: {exc}") from exc
    return zone.to_text()


def split_record_name(fqdn: str, zone: str) -> tuple[str, str]:
    """Split an FQDN into (zone, relative_record_name).

    Trailing dots are ignored on both arguments and stripped from the result.

    Args:
        fqdn: Fully qualified record name (e.g. "_acme-challenge.example.com.").
        zone: Authoritative zone (e.g. "example.com.").

    Returns:
        Tuple of (zone, relative_name).
    """
    zone = un_fqdn(zone)
    name = un_fqdn(fqdn)
    suffix = f".{zone}"
    if not name.endswith(suffix):
        raise ValueError(f"Record '{name}' is not under zone '{zone}'")
    return zone, name.removesuffix(suffix)

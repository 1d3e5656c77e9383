"""Shared test fixtures for dns-challenge-providers."""

from unittest.mock import MagicMock

import dns.name
import dns.resolver
import pytest


@pytest.fixture
def zone_lookup(monkeypatch):
    """Replace the SOA walk so every name resolves to the example.com zone."""
    lookup = MagicMock(return_value=dns.name.from_text("example.com."))
    monkeypatch.setattr(dns.resolver, "zone_for_name", lookup)
    return lookup


@pytest.fixture
def no_zone(monkeypatch):
    """Replace the SOA walk with one that never finds a zone."""
    lookup = MagicMock(side_effect=dns.resolver.NoRootSOA())
    monkeypatch.setattr(dns.resolver, "zone_for_name", lookup)
    return lookup

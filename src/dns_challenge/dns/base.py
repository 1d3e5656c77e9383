"""Abstract base class for DNS providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta
from typing import Self

from dns_challenge.dns.util import get_record


class DnsProvider(ABC):
    """Interface for DNS providers that manage ACME DNS-01 challenge TXT records."""

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def present(self, domain: str, token: str, key_auth: str) -> None:
        """Create the TXT record that fulfills the DNS-01 challenge for ``domain``."""
        fqdn, value = get_record(domain, key_auth)
        self.create_record(domain, token, fqdn, value)

    def cleanup(self, domain: str, token: str, key_auth: str) -> None:
        """Remove the TXT record created by :meth:`present`."""
        fqdn, value = get_record(domain, key_auth)
        self.delete_record(domain, token, fqdn, value)

    @abstractmethod
    def create_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        """Create a TXT record for DNS-01 challenge validation.

        Args:
            domain: Identifier being validated (e.g. "example.com").
            token: ACME challenge token. Not part of the record content.
            fqdn: Record FQDN (e.g. "_acme-challenge.example.com.").
            value: TXT record value.
        """

    @abstractmethod
    def delete_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        """Delete the TXT record after DNS-01 challenge validation.

        A missing record is not an error.
        """

    @abstractmethod
    def timeout(self) -> tuple[timedelta, timedelta]:
        """Return (propagation_timeout, polling_interval) for the propagation check."""

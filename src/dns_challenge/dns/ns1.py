"""NS1 DNS provider — create/delete TXT records via the NS1 REST API."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import timedelta

import httpx

from dns_challenge.config import Ns1Config
from dns_challenge.dns.base import DnsProvider
from dns_challenge.dns.util import find_zone_by_fqdn, un_fqdn
from dns_challenge.errors import DnsProviderError, ZoneNotFoundError
from dns_challenge.models import Ns1Record

logger = logging.getLogger(__name__)

_RECORD_TYPE = "TXT"
_API_ERRORS = (httpx.HTTPError, ValueError, KeyError)


class Ns1Client:
    """Access to NS1 zones and record sets, authenticated with an API key header.

    Uses ``config.http_client`` when set and otherwise creates its own client;
    only a client created here is closed by :meth:`close`.
    """

    def __init__(self, config: Ns1Config) -> None:
        self._endpoint = config.endpoint
        self._headers = {"X-NSONE-Key": config.api_key}
        self._owns_client = config.http_client is None
        self._client = config.http_client or httpx.Client(timeout=config.http_timeout.total_seconds())

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        return self._client.request(method, f"{self._endpoint}{path}", headers=self._headers, **kwargs)

    @staticmethod
    def _record_path(zone: str, domain: str, record_type: str) -> str:
        return f"zones/{zone}/{domain}/{record_type}"

    def get_zone(self, zone: str) -> dict:
        resp = self._request("GET", f"zones/{zone}")
        resp.raise_for_status()
        return resp.json()

    def get_record(self, zone: str, domain: str, record_type: str) -> Ns1Record | None:
        """Fetch a record set, or None when NS1 answers 404."""
        resp = self._request("GET", self._record_path(zone, domain, record_type))
        if resp.status_code == httpx.codes.NOT_FOUND:
            return None
        resp.raise_for_status()
        return Ns1Record.from_dict(resp.json())

    def create_record(self, record: Ns1Record) -> None:
        resp = self._request("PUT", self._record_path(record.zone, record.domain, record.type), json=record.to_dict())
        resp.raise_for_status()

    def update_record(self, record: Ns1Record) -> None:
        resp = self._request("POST", self._record_path(record.zone, record.domain, record.type), json=record.to_dict())
        resp.raise_for_status()

    def delete_record(self, zone: str, domain: str, record_type: str) -> bool:
        """Delete a record set. Returns False when it did not exist."""
        resp = self._request("DELETE", self._record_path(zone, domain, record_type))
        if resp.status_code == httpx.codes.NOT_FOUND:
            return False
        resp.raise_for_status()
        return True

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class Ns1Provider(DnsProvider):
    """DNS provider backed by NS1 hosted zones.

    An existing TXT record set gets the new value appended as one more answer;
    identical values are not deduplicated.
    """

    def __init__(self, config: Ns1Config | None, *, _client: Ns1Client | None = None) -> None:
        if config is None:
            raise ValueError("ns1: the configuration of the DNS provider is missing")
        if not config.api_key:
            raise ValueError("ns1: credentials are missing")
        self._config = config
        self._client = _client or Ns1Client(config)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Ns1Provider:
        """Build a provider from ``NS1_*`` environment variables."""
        try:
            config = Ns1Config.from_env(environ)
        except ValueError as exc:
            raise ValueError(f"ns1: {exc}") from exc
        return cls(config)

    def create_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        zone = self._get_hosted_zone(fqdn)
        name = un_fqdn(fqdn)

        try:
            record = self._client.get_record(zone, name, _RECORD_TYPE)
        except _API_ERRORS as exc:
            raise DnsProviderError(f"ns1: failed to get the existing record: {exc}") from exc

        if record is None:
            logger.info("Create a new record for [zone: %s, fqdn: %s, domain: %s]", zone, fqdn, domain)
            record = Ns1Record(zone=zone, domain=name, type=_RECORD_TYPE, ttl=self._config.ttl, answers=((value,),))
            try:
                self._client.create_record(record)
            except _API_ERRORS as exc:
                raise DnsProviderError(f"ns1: failed to create record [zone: {zone!r}, fqdn: {fqdn!r}]: {exc}") from exc
            return

        logger.info("Update an existing record for [zone: %s, fqdn: %s, domain: %s]", zone, fqdn, domain)
        try:
            self._client.update_record(record.with_answer(value))
        except _API_ERRORS as exc:
            raise DnsProviderError(f"ns1: failed to update record [zone: {zone!r}, fqdn: {fqdn!r}]: {exc}") from exc

    def delete_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        zone = self._get_hosted_zone(fqdn)
        name = un_fqdn(fqdn)

        try:
            deleted = self._client.delete_record(zone, name, _RECORD_TYPE)
        except _API_ERRORS as exc:
            raise DnsProviderError(f"ns1: failed to delete record [zone: {zone!r}, domain: {name!r}]: {exc}") from exc

        if deleted:
            logger.info("Deleted TXT record %s from NS1 zone %s", name, zone)
        else:
            logger.warning("TXT record %s not found in NS1 zone %s, skipping delete", name, zone)

    def timeout(self) -> tuple[timedelta, timedelta]:
        return self._config.propagation_timeout, self._config.polling_interval

    def close(self) -> None:
        """Close the underlying HTTP client unless the caller supplied it."""
        self._client.close()

    def _get_hosted_zone(self, fqdn: str) -> str:
        """Resolve the authoritative zone for ``fqdn`` and confirm NS1 hosts it."""
        try:
            auth_zone = un_fqdn(find_zone_by_fqdn(fqdn))
        except ZoneNotFoundError as exc:
            raise ZoneNotFoundError(f"ns1: failed to extract auth zone from fqdn {fqdn!r}: {exc}") from exc

        try:
            return self._client.get_zone(auth_zone)["zone"]
        except _API_ERRORS as exc:
            raise DnsProviderError(f"ns1: failed to get zone [authZone: {auth_zone!r}, fqdn: {fqdn!r}]: {exc}") from exc

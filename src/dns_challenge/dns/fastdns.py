"""Akamai FastDNS provider — create/delete TXT records via the config-dns v1 zone API."""

from __future__ import annotations

import logging
import time
from collections.abc import Mapping
from datetime import timedelta

import requests
from akamai.edgegrid import EdgeGridAuth

from dns_challenge.config import FastDnsConfig
from dns_challenge.dns.base import DnsProvider
from dns_challenge.dns.util import find_zone_by_fqdn, split_record_name, to_fqdn
from dns_challenge.errors import DnsProviderError, ZoneNotFoundError
from dns_challenge.models import TxtRecord

logger = logging.getLogger(__name__)

_ZONES_PATH = "/config-dns/v1/zones"
_HTTP_TIMEOUT = 30


def _bump_serial(zone: dict) -> dict:
    """Return a copy of ``zone`` with its SOA serial advanced for saving."""
    soa = dict(zone["zone"].get("soa") or {})
    serial = soa.get("serial") or 0
    soa["serial"] = serial + 1 if serial > 0 else int(time.time())
    return {**zone, "zone": {**zone["zone"], "soa": soa}}


class FastDnsClient:
    """EdgeGrid-signed access to FastDNS zones. A zone is read and saved as a whole.

    Requests go through ``config.session`` when set. The EdgeGrid auth is
    passed per request so a shared session is left unmodified.
    """

    def __init__(self, config: FastDnsConfig) -> None:
        self._base_url = f"https://{config.host}"
        self._auth = EdgeGridAuth(
            client_token=config.client_token,
            client_secret=config.client_secret,
            access_token=config.access_token,
            max_body=config.max_body,
        )
        self._owns_session = config.session is None
        self._session = config.session or requests.Session()

    def _zone_url(self, zone_name: str) -> str:
        return f"{self._base_url}{_ZONES_PATH}/{zone_name}"

    def get_zone(self, zone_name: str) -> dict:
        resp = self._session.get(self._zone_url(zone_name), auth=self._auth, timeout=_HTTP_TIMEOUT)
        resp.raise_for_status()
        return resp.json()

    def save_zone(self, zone_name: str, zone: dict) -> None:
        body = _bump_serial(zone)
        logger.debug("Saving FastDNS zone %s with serial %s", zone_name, body["zone"]["soa"]["serial"])
        resp = self._session.post(self._zone_url(zone_name), json=body, auth=self._auth, timeout=_HTTP_TIMEOUT)
        resp.raise_for_status()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()


class FastDnsProvider(DnsProvider):
    """DNS provider backed by Akamai FastDNS zones.

    An identical TXT entry (same name, TTL, target and active flag) already in
    the zone makes :meth:`create_record` a no-op.
    """

    def __init__(self, config: FastDnsConfig | None, *, _client: FastDnsClient | None = None) -> None:
        if config is None:
            raise ValueError("fastdns: the configuration of the DNS provider is missing")
        if not (config.host and config.client_token and config.client_secret and config.access_token):
            raise ValueError("fastdns: credentials are missing")
        self._config = config
        self._client = _client or FastDnsClient(config)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> FastDnsProvider:
        """Build a provider from ``AKAMAI_*`` environment variables."""
        try:
            config = FastDnsConfig.from_env(environ)
        except ValueError as exc:
            raise ValueError(f"fastdns: {exc}") from exc
        return cls(config)

    def create_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        zone_name, record_name = self._find_zone_and_record_name(fqdn, domain)
        zone = self._get_zone(zone_name)

        record = TxtRecord(name=record_name, ttl=self._config.ttl, target=value, active=True)
        entries = zone["zone"].get("txt") or []
        if any(TxtRecord.from_dict(entry) == record for entry in entries if entry):
            logger.info("TXT record %s already present in FastDNS zone %s", record_name, zone_name)
            return

        updated = {**zone, "zone": {**zone["zone"], "txt": [*entries, record.to_dict()]}}
        self._save_zone(zone_name, updated, fqdn)
        logger.info("Created TXT record %s in FastDNS zone %s", record_name, zone_name)

    def delete_record(self, domain: str, token: str, fqdn: str, value: str) -> None:
        zone_name, record_name = self._find_zone_and_record_name(fqdn, domain)
        zone = self._get_zone(zone_name)

        entries = zone["zone"].get("txt") or []
        kept = [entry for entry in entries if not entry or entry.get("name") != record_name]
        if len(kept) == len(entries):
            logger.warning("TXT record %s not found in FastDNS zone %s, skipping delete", record_name, zone_name)
            return

        self._save_zone(zone_name, {**zone, "zone": {**zone["zone"], "txt": kept}}, fqdn)
        logger.info("Deleted TXT record %s from FastDNS zone %s", record_name, zone_name)

    def timeout(self) -> tuple[timedelta, timedelta]:
        return self._config.propagation_timeout, self._config.polling_interval

    def close(self) -> None:
        """Close the underlying HTTP session unless the caller supplied it."""
        self._client.close()

    def _find_zone_and_record_name(self, fqdn: str, domain: str) -> tuple[str, str]:
        try:
            zone = find_zone_by_fqdn(to_fqdn(domain))
        except ZoneNotFoundError as exc:
            raise ZoneNotFoundError(f"fastdns: {exc}") from exc
        try:
            return split_record_name(fqdn, zone)
        except ValueError as exc:
            raise DnsProviderError(f"fastdns: {exc}") from exc

    def _get_zone(self, zone_name: str) -> dict:
        try:
            return self._client.get_zone(zone_name)
        except requests.RequestException as exc:
            raise DnsProviderError(f"fastdns: failed to get zone '{zone_name}': {exc}") from exc

    def _save_zone(self, zone_name: str, zone: dict, fqdn: str) -> None:
        try:
            self._client.save_zone(zone_name, zone)
        except requests.RequestException as exc:
            raise DnsProviderError(f"fastdns: failed to save zone [zone: '{zone_name}', fqdn: '{fqdn}']: {exc}") from exc

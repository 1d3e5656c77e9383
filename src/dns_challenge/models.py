"""Data classes for the TXT records exchanged with the vendor APIs."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class TxtRecord:
    """A TXT entry inside a FastDNS zone. ``name`` is relative to the zone."""

    name: str
    ttl: int | None
    target: str | None
    active: bool = True

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "ttl": self.ttl,
            "active": self.active,
            "target": self.target,
        }

    @classmethod
    def from_dict(cls, data: dict) -> TxtRecord:
        return cls(
            name=data["name"],
            ttl=data.get("ttl"),
            target=data.get("target"),
            active=data.get("active", True),
        )


@dataclass(frozen=True)
class Ns1Record:
    """An NS1 record set. ``domain`` is the full record name without a trailing dot."""

    zone: str
    domain: str
    type: str
    ttl: int | None = None
    answers: tuple[tuple[str, ...], ...] = ()

    def with_answer(self, *rdata: str) -> Ns1Record:
        """Return a copy with one more answer appended after the existing ones."""
        return replace(self, answers=(*self.answers, tuple(rdata)))

    def to_dict(self) -> dict:
        data = {
            "zone": self.zone,
            "domain": self.domain,
            "type": self.type,
            "answers": [{"answer": list(rdata)} for rdata in self.answers],
        }
        if self.ttl is not None:
            data["ttl"] = self.ttl
        return data

    @classmethod
    def from_dict(cls, data: dict) -> Ns1Record:
        return cls(
            zone=data["zone"],
            domain=data["domain"],
            type=data["type"],
            ttl=data.get("ttl"),
            answers=tuple(tuple(a.get("answer", ())) for a in data.get("answers", [])),
        )

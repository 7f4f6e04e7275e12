"""
oipverify.records — Ledger record envelope and its typed payloads.

A ledger record carries its payloads in ``record.details`` keyed by template
id. The template id is the discriminant: ``LedgerRecord.view(kind)`` projects
the payload for one ``RecordKind`` and refuses kinds the record does not carry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import RecordNotFound


class RecordKind(Enum):
    PUBLISHER = "tmpl_433C2783"
    VERIFICATION_CLAIM = "tmpl_F471DFF9"


@dataclass(frozen=True)
class Publisher:
    """The registry's authoritative identity for a txid."""
    name: str
    flo_bip44_xpub: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Publisher":
        return cls(
            name=str(data.get("name", "") or ""),
            flo_bip44_xpub=str(data.get("floBip44XPub", "") or ""),
        )


@dataclass(frozen=True)
class VerificationClaim:
    """Post ids that should carry the publisher's assertion. Empty = not provided."""
    twitter_id: str = ""
    gab_id: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "VerificationClaim":
        return cls(
            twitter_id=str(data.get("twitterId", "") or ""),
            gab_id=str(data.get("gabId", "") or ""),
        )


Payload = Union[Publisher, VerificationClaim]

_PAYLOAD_TYPES: dict[RecordKind, Any] = {
    RecordKind.PUBLISHER: Publisher,
    RecordKind.VERIFICATION_CLAIM: VerificationClaim,
}


@dataclass(frozen=True)
class RecordMeta:
    deactivated: bool = False
    signed_by: str = ""
    time: int = 0
    txid: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "RecordMeta":
        return cls(
            deactivated=bool(data.get("deactivated", False)),
            signed_by=str(data.get("signed_by", "")),
            time=int(data.get("time", 0) or 0),
            txid=str(data.get("txid", "")),
        )


@dataclass(frozen=True)
class LedgerRecord:
    """One result of a ledger index lookup."""
    txid: str
    details: dict = field(default_factory=dict)
    meta: RecordMeta = field(default_factory=RecordMeta)

    @classmethod
    def from_result(cls, txid: str, result: dict) -> "LedgerRecord":
        """Build from one entry of the index's ``results`` array."""
        record = result.get("record") or {}
        details = record.get("details") or {}
        if not isinstance(details, dict):
            raise ValueError("record.details is not an object")
        return cls(
            txid=txid,
            details=details,
            meta=RecordMeta.from_dict(result.get("meta") or {}),
        )

    @property
    def kinds(self) -> set[RecordKind]:
        known = {k.value: k for k in RecordKind}
        return {known[key] for key in self.details if key in known}

    def view(self, kind: RecordKind) -> Payload:
        """Project the typed payload for ``kind``."""
        payload = self.details.get(kind.value)
        if not isinstance(payload, dict):
            raise RecordNotFound(self.txid, f"record carries no {kind.name.lower()} payload")
        return _PAYLOAD_TYPES[kind].from_dict(payload)

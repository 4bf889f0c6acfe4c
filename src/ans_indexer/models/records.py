"""Record types derived from ANS events and persisted by the lookup store."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

# (domain, subdomain) - subdomain is "" for a bare domain
CurrentAnsLookupPK = tuple[str, str]


@dataclass
class CurrentAnsLookup:
    """Latest known state of one registered name."""

    domain: str
    subdomain: str
    registered_address: str | None
    last_transaction_version: int
    expiration_timestamp: datetime  # UTC, second precision
    inserted_at: datetime  # UTC, processing time

    @property
    def pk(self) -> CurrentAnsLookupPK:
        return (self.domain, self.subdomain)

    def to_dict(self) -> dict:
        """JSON-friendly representation (timestamps as ISO 8601)."""
        return {
            "domain": self.domain,
            "subdomain": self.subdomain,
            "registered_address": self.registered_address,
            "last_transaction_version": self.last_transaction_version,
            "expiration_timestamp": self.expiration_timestamp.isoformat(),
            "inserted_at": self.inserted_at.isoformat(),
        }

"""Decoded ANS contract events.

These are transient: built from a raw event payload and consumed
immediately by the lookup reducer.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Union


@dataclass(frozen=True)
class SetNameAddressEvent:
    """Emitted when a name's target address is set or cleared (SetNameAddressEventV1)."""

    domain_name: str
    subdomain_name: str | None
    new_address: str | None  # None when the address was cleared
    expiration_time_secs: Decimal


@dataclass(frozen=True)
class RegisterNameEvent:
    """Emitted when a domain or subdomain is registered (RegisterNameEventV1).

    Registration never carries a target address.
    """

    domain_name: str
    subdomain_name: str | None
    expiration_time_secs: Decimal


AnsEvent = Union[SetNameAddressEvent, RegisterNameEvent]

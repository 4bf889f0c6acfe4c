"""Wire layouts of the ANS `domains` module events.

Move `Option<String>` values arrive as `{"vec": []}` or `{"vec": ["value"]}`;
`to_event()` unwraps them so nothing past this module sees the container.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel, Field

from ans_indexer.models.events import RegisterNameEvent, SetNameAddressEvent


class OptionalString(BaseModel):
    vec: list[str]

    def get_string(self) -> str | None:
        return self.vec[0] if self.vec else None


class SetNameAddressEventV1(BaseModel):
    subdomain_name: OptionalString
    domain_name: str = Field(min_length=1)
    new_address: OptionalString
    expiration_time_secs: Decimal

    def to_event(self) -> SetNameAddressEvent:
        return SetNameAddressEvent(
            domain_name=self.domain_name,
            subdomain_name=self.subdomain_name.get_string(),
            new_address=self.new_address.get_string(),
            expiration_time_secs=self.expiration_time_secs,
        )


class RegisterNameEventV1(BaseModel):
    subdomain_name: OptionalString
    domain_name: str = Field(min_length=1)
    expiration_time_secs: Decimal

    def to_event(self) -> RegisterNameEvent:
        return RegisterNameEvent(
            domain_name=self.domain_name,
            subdomain_name=self.subdomain_name.get_string(),
            expiration_time_secs=self.expiration_time_secs,
        )

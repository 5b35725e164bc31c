"""Domain models (Pydantic v2).

Notes:
- `Program` is static configuration: frozen, shared by reference, never
  mutated after load.
- `EligibilityReport` is the only structure returned to callers of the
  engine. Amounts cross that boundary as canonical decimal strings.
- These models describe *what* the data is, not *how* it is fetched.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from core.domain.chain import ChainFamily

ADDRESS_PLACEHOLDER = "{address}"


class ParserKind(str, Enum):
    """Closed set of response parsers a program can be bound to."""

    IDENTITY_AMOUNT = "identity-amount"
    DIRECT_NUMERIC = "direct-numeric"
    SCALED_INTEGER = "scaled-integer"
    ERROR_FLAGGED = "error-flagged"


class Program(BaseModel):
    """One airdrop-eligibility provider.

    The URL template carries a single literal `{address}` placeholder that is
    substituted on each lookup.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", populate_by_name=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Display name shown to users (also the lookup key).",
    )
    url_template: str = Field(
        ...,
        alias="urlTemplate",
        description="Endpoint URL containing exactly one '{address}' placeholder.",
    )
    chain_family: ChainFamily = Field(
        ...,
        alias="chainFamily",
        description="Address format accepted by the provider.",
    )
    parser: ParserKind = Field(
        ...,
        description="Response parser used to normalize the provider payload.",
    )
    amount_field: str = Field(
        default="amount",
        alias="amountField",
        min_length=1,
        description="Dotted path of the amount inside the JSON object.",
    )
    decimals: int = Field(
        default=18,
        ge=0,
        le=36,
        description="Fixed-point scale used by the scaled-integer parser.",
    )

    @field_validator("url_template")
    @classmethod
    def _single_placeholder(cls, value: str) -> str:
        count = value.count(ADDRESS_PLACEHOLDER)
        if count != 1:
            raise ValueError(f"url_template must contain '{ADDRESS_PLACEHOLDER}' exactly once (found {count})")
        if not value.startswith(("http://", "https://")):
            raise ValueError("url_template must be an http(s) URL")
        return value

    def url_for(self, address: str) -> str:
        return self.url_template.replace(ADDRESS_PLACEHOLDER, address)


class ProgramsFile(BaseModel):
    programs: list[Program] = Field(default_factory=list)


class AddressAmount(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    amount: str = Field(..., description="Canonical decimal string ('0' = not eligible).")


class AddressFailure(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    error: str = Field(..., description="Reason the lookup failed.")
    status_code: int | None = None


class EligibilityReport(BaseModel):
    """Result of resolving one batch of addresses against one program.

    The four buckets are disjoint and keep the deduplicated input order.
    """

    program: str = Field(..., description="Name of the program that was queried.")
    eligible: list[AddressAmount] = Field(default_factory=list)
    not_eligible: list[AddressAmount] = Field(default_factory=list)
    errored: list[AddressFailure] = Field(default_factory=list)
    invalid: list[str] = Field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.eligible) + len(self.not_eligible) + len(self.errored) + len(self.invalid)

    def addresses(self) -> set[str]:
        """All addresses present in the report, across buckets."""

        out = {entry.address for entry in self.eligible}
        out.update(entry.address for entry in self.not_eligible)
        out.update(entry.address for entry in self.errored)
        out.update(self.invalid)
        return out

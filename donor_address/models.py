"""Pydantic models for the structured address migration.

StructuredAddress is the persisted shape of `donations.donor_address_obj`;
EligibleRecord is the projected row the migration works on. Both normalize
loose store values (None, numbers, JSON text) instead of trusting them.
"""

import json
import re
from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .gazetteer import DEFAULT_COUNTRY

PINCODE_PATTERN = re.compile(r"^\d{6}$")


class StructuredAddress(BaseModel):
    """Structured donor address derived from a legacy free-text string."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    line: str = Field("", description="Street / house / locality line")
    city: str = Field("", description="City or town")
    state: str = Field("", description="State or union territory")
    country: str = Field(DEFAULT_COUNTRY, description="Country (fixed default, never inferred)")
    pincode: str = Field("", description="Six-digit postal code, or empty")

    @field_validator("line", "city", "state", "pincode", mode="before")
    @classmethod
    def none_to_empty(cls, v: Any) -> str:
        """Stored documents may carry nulls or numbers in place of strings."""
        if v is None:
            return ""
        return str(v)

    @field_validator("country", mode="before")
    @classmethod
    def default_country(cls, v: Any) -> str:
        if v is None or v == "":
            return DEFAULT_COUNTRY
        return str(v)

    @field_validator("pincode")
    @classmethod
    def six_digit_pincode(cls, v: str) -> str:
        if v and not PINCODE_PATTERN.match(v):
            raise ValueError(f"pincode must be exactly six digits, got {v!r}")
        return v

    @property
    def has_signal(self) -> bool:
        """True when at least one of city/state/pincode was extracted."""
        return bool(self.city or self.state or self.pincode)


class EligibleRecord(BaseModel):
    """A donation row projected to the fields the migration needs."""

    model_config = ConfigDict(frozen=True)

    record_id: Union[int, str] = Field(..., description="Opaque store identifier")
    legacy_address: Optional[str] = Field(None, description="Original free-text donor address")
    structured_address: Optional[StructuredAddress] = Field(None, description="Existing structured address")

    @field_validator("legacy_address", mode="before")
    @classmethod
    def decode_legacy(cls, v: Any) -> Optional[str]:
        """Decode byte strings from the driver; reject anything that is not text."""
        if v is None:
            return None
        if isinstance(v, (bytes, bytearray)):
            return bytes(v).decode("utf-8", errors="replace")
        if not isinstance(v, str):
            raise ValueError(f"legacy address must be text, got {type(v).__name__}")
        return v

    @field_validator("structured_address", mode="before")
    @classmethod
    def decode_structured(cls, v: Any) -> Any:
        """JSON columns arrive as str/bytes from some drivers and as dicts from others."""
        if isinstance(v, (bytes, bytearray)):
            v = bytes(v).decode("utf-8")
        if isinstance(v, str):
            v = json.loads(v) if v.strip() else None
        return v


class MigrationOutcome(str, Enum):
    """Per-record classification for the run summary and audit trail."""

    MIGRATED = "migrated"
    SKIPPED = "skipped"
    ERROR = "error"


class RecordResult(BaseModel):
    """Audit entry for one processed record."""

    record_id: Any
    outcome: MigrationOutcome
    original: Optional[str] = None
    parsed: Optional[StructuredAddress] = None
    reason: Optional[str] = None


class MigrationSummary(BaseModel):
    """Aggregate counts for a migration pass."""

    migrated: int = 0
    skipped: int = 0
    errors: int = 0
    total: int = 0
    dry_run: bool = False

    def record(self, outcome: MigrationOutcome) -> None:
        """Count one record's outcome."""
        if outcome is MigrationOutcome.MIGRATED:
            self.migrated += 1
        elif outcome is MigrationOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.errors += 1
        self.total += 1

"""
Read-side address helpers for donation records.

Public pages show a donor's city and the admin views show a one-line address.
Both prefer the structured address and fall back to the legacy string, so
they work on records the migration has not reached yet.
"""

import re
from typing import Optional

from .gazetteer import DEFAULT_COUNTRY
from .models import EligibleRecord, StructuredAddress
from .parser import split_pincode

# States commonly typed into the city slot of legacy addresses
_STATE_NOISE = re.compile(
    r"\b(Maharashtra|Gujarat|Karnataka|Tamil Nadu|Delhi|Rajasthan|UP|MP|Bihar|West Bengal|Telangana|Andhra Pradesh)\b",
    re.IGNORECASE,
)


def extract_city(address: Optional[str]) -> str:
    """
    Guess a display city from a legacy address string.

    Takes the second-to-last comma piece (or the last, for two pieces), strips
    state names out of it, and falls back to the country name.

    Examples:
        >>> extract_city("Flat 4, Andheri, Mumbai, Maharashtra 400053")
        'Mumbai'
        >>> extract_city("Baner Pune Maharashtra")
        'India'
    """
    if not address:
        return DEFAULT_COUNTRY
    working, _ = split_pincode(address)
    parts = [p.strip() for p in working.split(",")]
    if len(parts) >= 2:
        city_part = parts[-2] if len(parts) >= 3 else parts[-1]
        clean_city = _STATE_NOISE.sub("", city_part).strip()
        if clean_city and len(clean_city) > 1:
            return clean_city
    return DEFAULT_COUNTRY


def display_city(record: EligibleRecord) -> str:
    """City for public display: structured city first, legacy guess second."""
    structured = record.structured_address
    if structured is not None and structured.city:
        return structured.city
    return extract_city(record.legacy_address)


def format_full_address(record: EligibleRecord) -> str:
    """One-line address from whichever representation the record has."""
    structured: Optional[StructuredAddress] = record.structured_address
    if structured is not None and (structured.line or structured.city):
        parts = [structured.line, structured.city, structured.state, structured.country, structured.pincode]
        return ", ".join(p for p in parts if p)
    return record.legacy_address or ""

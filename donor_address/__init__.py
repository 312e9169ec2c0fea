"""Structured address migration for legacy donor records.

Provides:
- AddressParser: legacy free-text address -> StructuredAddress
- Eligibility filter deciding which donations still need migrating
- MigrationRunner: sequential, failure-isolated, idempotent batch
"""

from .display import display_city, extract_city, format_full_address
from .eligibility import is_eligible, select_eligible
from .errors import FatalConfigurationError, RecordProcessingError
from .gazetteer import DEFAULT_COUNTRY, INDIAN_GAZETTEER, Gazetteer
from .models import EligibleRecord, MigrationOutcome, MigrationSummary, RecordResult, StructuredAddress
from .parser import AddressParser, parse_address
from .runner import MigrationRunner

__all__ = [
    # Parsing
    "AddressParser",
    "parse_address",
    "Gazetteer",
    "INDIAN_GAZETTEER",
    "DEFAULT_COUNTRY",
    # Models
    "StructuredAddress",
    "EligibleRecord",
    "MigrationOutcome",
    "MigrationSummary",
    "RecordResult",
    # Migration
    "MigrationRunner",
    "is_eligible",
    "select_eligible",
    # Display helpers
    "display_city",
    "extract_city",
    "format_full_address",
    # Errors
    "FatalConfigurationError",
    "RecordProcessingError",
]

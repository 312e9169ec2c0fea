"""Which donation records still need a structured address.

A record is eligible when it has a non-empty legacy address and its
structured address is missing or has no city. Once a pass writes a city the
record drops out, which is what makes re-running the migration a no-op.

The SQL filter below is the same predicate expressed for the donations table;
keep the two in step.
"""

from .models import EligibleRecord

ELIGIBLE_WHERE_SQL = """
    donor_address IS NOT NULL
    AND donor_address <> ''
    AND (
        donor_address_obj IS NULL
        OR JSON_TYPE(JSON_EXTRACT(donor_address_obj, '$.city')) IS NULL
        OR JSON_TYPE(JSON_EXTRACT(donor_address_obj, '$.city')) = 'NULL'
        OR JSON_UNQUOTE(JSON_EXTRACT(donor_address_obj, '$.city')) = ''
    )
"""


def is_eligible(record: EligibleRecord) -> bool:
    """True if the record has legacy text and no usable structured city."""
    if not record.legacy_address:
        return False
    structured = record.structured_address
    return structured is None or not structured.city


def select_eligible(records):
    """Filter an iterable of records down to the eligible ones, keeping order."""
    return [record for record in records if is_eligible(record)]

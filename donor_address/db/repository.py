"""Data access for the donations table.

The migration reads three columns and writes one:

    id                 primary key
    donor_address      legacy free-text address (read only here)
    donor_address_obj  JSON structured address (written once per record)
"""

import json
from typing import Any

import pymysql

from ..eligibility import ELIGIBLE_WHERE_SQL
from ..errors import RecordProcessingError
from ..models import StructuredAddress
from .client import execute_query


def _serialize_json(value: Any) -> str | None:
    """Serialize a value to JSON string for storage."""
    if value is None:
        return None
    return json.dumps(value)


class DonationRepository:
    """Record-store collaborator for the address migration."""

    def __init__(self, conn: pymysql.Connection):
        self.conn = conn

    def fetch_eligible(self, limit: int | None = None) -> list[dict]:
        """Get donations that still need a structured address.

        Rows are returned as plain dicts keyed record_id / legacy_address /
        structured_address; callers build EligibleRecord from them one at a
        time so a single malformed row cannot fail the whole fetch.

        Args:
            limit: Optional cap on the number of rows (staged rollouts)

        Returns:
            Row dicts ordered by id
        """
        sql = f"""
            SELECT id, donor_address, donor_address_obj
            FROM donations
            WHERE {ELIGIBLE_WHERE_SQL}
            ORDER BY id
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (limit,)

        rows = execute_query(self.conn, sql, params) or []
        return [
            {
                "record_id": row["id"],
                "legacy_address": row.get("donor_address"),
                "structured_address": row.get("donor_address_obj"),
            }
            for row in rows
        ]

    def set_structured_address(self, record_id: Any, address: StructuredAddress) -> None:
        """Write the structured address for one donation, leaving donor_address untouched.

        Raises:
            RecordProcessingError: If the write fails or no row matched the id
        """
        try:
            affected = execute_query(
                self.conn,
                "UPDATE donations SET donor_address_obj = %s WHERE id = %s",
                (_serialize_json(address.model_dump()), record_id),
                fetch="none",
            )
        except pymysql.Error as e:
            raise RecordProcessingError(record_id, f"update failed: {e}") from e
        if not affected:
            raise RecordProcessingError(record_id, "no donation row matched the id")

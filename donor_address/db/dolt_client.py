"""Dolt version control for migration runs.

After a live pass, the structured-address writes can be recorded as a single
Dolt commit so the change set is reviewable (and revertible) as one unit.
"""

import os

import pymysql


class DoltVersionControl:
    """Commit helper bound to the run's connection."""

    def __init__(self, conn: pymysql.Connection, author: str | None = None, email: str | None = None):
        """
        Args:
            conn: Open Dolt connection
            author: Commit author name (default: from DOLT_AUTHOR env var or 'migration')
            email: Commit author email (default: from DOLT_EMAIL env var or 'migration@donations.local')
        """
        self.conn = conn
        self.author = author or os.environ.get("DOLT_AUTHOR", "migration")
        self.email = email or os.environ.get("DOLT_EMAIL", "migration@donations.local")

    def status(self) -> list[dict]:
        """Uncommitted table changes."""
        with self.conn.cursor() as cursor:
            cursor.execute("SELECT * FROM dolt_status")
            return list(cursor.fetchall())

    def commit(self, message: str) -> str | None:
        """Stage and commit all changes.

        Returns:
            Commit hash if changes were committed, None if there was nothing to commit

        Example:
            hash = DoltVersionControl(conn).commit("Migrate structured donor addresses: 42 donations")
        """
        if not self.status():
            return None

        with self.conn.cursor() as cursor:
            cursor.execute("CALL DOLT_ADD('-A')")
            cursor.execute(
                "CALL DOLT_COMMIT('--author', %s, '-m', %s)",
                (f"{self.author} <{self.email}>", message),
            )
            result = cursor.fetchone()

        return result["hash"] if result else None

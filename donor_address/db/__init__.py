"""DoltDB access for the address migration.

Provides:
- A scoped connection built from a connection URL
- DonationRepository, the migration's record store
- Dolt commit helper for recording a live run
"""

from .client import connection_config, execute_query, open_connection
from .dolt_client import DoltVersionControl
from .repository import DonationRepository

__all__ = [
    "connection_config",
    "execute_query",
    "open_connection",
    "DoltVersionControl",
    "DonationRepository",
]

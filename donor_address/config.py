"""
Configuration for the address migration.

Database: DoltDB (version-controlled, MySQL-compatible). Configure via environment variables:
  - DOLT_URL: connection string, e.g. mysql://root:@127.0.0.1:3306/donations
  - DATABASE_URL: accepted when DOLT_URL is not set
  - DOLT_AUTHOR / DOLT_EMAIL: author for the optional post-run Dolt commit

A .env file at the project root is loaded first when present.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from .errors import FatalConfigurationError

DATABASE_URL_VARS = ("DOLT_URL", "DATABASE_URL")


@dataclass(frozen=True)
class MigrationConfig:
    """Settings for one migration run.

    Attributes:
        database_url: Record store connection string
        dry_run: Compute and report changes without writing
        limit: Process at most this many eligible records
        commit: Create a Dolt commit after a live run
        log_level: Logging level name
        log_file: Optional log file name under logs/
    """

    database_url: str
    dry_run: bool = False
    limit: Optional[int] = None
    commit: bool = False
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_env_file(env_path: Optional[Path] = None) -> None:
    """Load a .env file without overriding variables already set."""
    load_dotenv(env_path or Path(__file__).parent.parent / ".env")


def get_database_url(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Read the record store connection string.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        The first non-empty value of DOLT_URL, DATABASE_URL

    Raises:
        FatalConfigurationError: If neither variable is set
    """
    env = os.environ if environ is None else environ
    for var in DATABASE_URL_VARS:
        value = (env.get(var) or "").strip()
        if value:
            return value
    raise FatalConfigurationError(f"{' or '.join(DATABASE_URL_VARS)} not found in environment")


def load_config(
    dry_run: bool = False,
    limit: Optional[int] = None,
    commit: bool = False,
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> MigrationConfig:
    """Build the run configuration from CLI options and the environment."""
    if limit is not None and limit < 1:
        raise FatalConfigurationError(f"--limit must be a positive integer, got {limit}")
    return MigrationConfig(
        database_url=get_database_url(environ),
        dry_run=dry_run,
        limit=limit,
        commit=commit,
        log_level=log_level,
        log_file=log_file,
    )

"""
Logging infrastructure for the address migration.

Provides:
- Structured logging with millisecond timestamps
- Run-mode tag on every line (MIGRATE vs MIGRATE:DRY)
- Console and optional file output
- Error/warning tracking for the end-of-run report

Logging must never interrupt a migration pass, so every emitting method
drops handler failures instead of raising.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

LIVE_PHASE = "MIGRATE"
DRY_RUN_PHASE = "MIGRATE:DRY"


class MillisecondsFormatter(logging.Formatter):
    """Formatter that includes milliseconds and aligns log levels."""

    def formatTime(self, record, datefmt=None):  # noqa: N802 - must match parent class method name
        ct = datetime.fromtimestamp(record.created)
        if datefmt and "%f" in datefmt:
            s = ct.strftime(datefmt.replace(",%f", ""))
            return s + f",{int(record.msecs):03d}"
        elif datefmt:
            return ct.strftime(datefmt)
        else:
            return ct.strftime("%Y-%m-%d %H:%M:%S") + f",{int(record.msecs):03d}"


def _format_kwargs(message: str, kwargs: dict) -> str:
    if kwargs:
        formatted_data = " ".join(f"{k}={v}" for k, v in kwargs.items())
        message = f"{message} [{formatted_data}]"
    return message


class MigrationLogger:
    """
    Logger collaborator for migration runs.
    """

    def __init__(
        self,
        name: str = "address_migration",
        log_level: str = "INFO",
        log_file: Optional[str] = None,
        log_dir: Optional[Path] = None,
        dry_run: bool = False,
        console: bool = True,
    ):
        """
        Initialize the migration logger.

        Args:
            name: Logger name
            log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
            log_file: Optional log file name
            log_dir: Directory for log files (defaults to logs/ at the project root)
            dry_run: Tag every line as a preview
            console: Write to stdout; False gives a silent logger (tests, library use)
        """
        self.dry_run = dry_run
        self.phase = DRY_RUN_PHASE if dry_run else LIVE_PHASE
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, log_level.upper()))

        # Prevent propagation to root logger to avoid duplicate logs
        self.logger.propagate = False

        if self.logger.handlers:
            self.logger.handlers.clear()

        fmt_str = f"%(asctime)s | %(levelname)-8s | {self.phase} | %(message)s"
        formatter = MillisecondsFormatter(fmt_str, datefmt="%Y-%m-%d %H:%M:%S,%f")

        if console:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(getattr(logging, log_level.upper()))
            console_handler.setFormatter(formatter)
            self.logger.addHandler(console_handler)
        else:
            self.logger.addHandler(logging.NullHandler())

        if log_file:
            if log_dir is None:
                log_dir = Path(__file__).parent.parent.parent / "logs"

            log_dir.mkdir(parents=True, exist_ok=True)
            log_path = log_dir / log_file

            file_handler = logging.FileHandler(log_path)
            file_handler.setLevel(logging.DEBUG)  # Log everything to file
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

            self.info(f"Logging to file: {log_path}")

        # Track errors for summary reporting
        self.errors = []
        self.warnings = []

    def _emit(self, level: int, message: str, exc_info: bool = False):
        try:
            self.logger.log(level, message, exc_info=exc_info, stacklevel=3)
        except Exception:
            # A broken handler must not abort the batch
            pass

    def debug(self, message: str, **kwargs):
        """Log debug message with optional structured data."""
        self._emit(logging.DEBUG, _format_kwargs(message, kwargs))

    def info(self, message: str, **kwargs):
        """Log info message with optional structured data."""
        self._emit(logging.INFO, _format_kwargs(message, kwargs))

    def warning(self, message: str, **kwargs):
        """Log warning message and track for reporting."""
        message = _format_kwargs(message, kwargs)
        self._emit(logging.WARNING, message)
        self.warnings.append(
            {
                "message": message,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    def error(self, message: str, exception: Optional[Exception] = None, **kwargs):
        """Log error message and track for reporting."""
        if exception:
            message = f"{message} | Exception: {str(exception)}"
        message = _format_kwargs(message, kwargs)
        self._emit(logging.ERROR, message, exc_info=exception is not None)
        self.errors.append(
            {
                "message": message,
                "exception": str(exception) if exception else None,
                "timestamp": datetime.now().isoformat(),
                "data": kwargs,
            }
        )

    # ------------------------------------------------------------------
    # Per-record audit trail
    # ------------------------------------------------------------------

    def log_run_start(self, num_records: int):
        """Log start of a migration pass."""
        self.info("=" * 60)
        self.info("MIGRATION: Populate structured donor addresses from legacy strings")
        self.info(f"MODE: {'DRY RUN (no changes will be written)' if self.dry_run else 'LIVE'}")
        self.info(f"Found {num_records} donations to migrate", num_records=num_records)
        self.info("=" * 60)

    def log_migrated(self, record_id, original: str, parsed):
        """Log a record that was (or, in a dry run, would be) updated."""
        tag = "[DRY]" if self.dry_run else "UPDATE"
        self.info(f"  {tag} {record_id}:")
        self.info(f'  {tag}   Original: "{original}"')
        self.info(
            f'  {tag}   Parsed:   line="{parsed.line}", city="{parsed.city}", '
            f'state="{parsed.state}", pincode="{parsed.pincode}"'
        )

    def log_skipped(self, record_id, original: Optional[str], reason: str):
        """Log a record left untouched."""
        prefix = "[DRY] SKIP" if self.dry_run else "SKIP"
        self.info(f'  {prefix} {record_id}: {reason}: "{original}"')

    def log_record_error(self, record_id, reason: str, exception: Optional[Exception] = None):
        """Log a record whose processing failed; the pass continues."""
        prefix = "[DRY] ERROR" if self.dry_run else "ERROR"
        self.error(f"  {prefix} {record_id}: {reason}", record_id=record_id)
        if exception is not None:
            self.debug(f"  {prefix} {record_id}: {type(exception).__name__}: {exception}")

    def log_summary(self, summary):
        """Log the end-of-run counts."""
        self.info("=" * 60)
        self.info("MIGRATION PREVIEW COMPLETE (nothing written)" if self.dry_run else "MIGRATION COMPLETE")
        self.info(f"  Migrated: {summary.migrated}")
        self.info(f"  Skipped:  {summary.skipped}")
        self.info(f"  Errors:   {summary.errors}")
        self.info(f"  Total:    {summary.total}")
        self.info("=" * 60)

    def get_error_summary(self) -> dict:
        """Get summary of errors and warnings for reporting."""
        return {
            "total_errors": len(self.errors),
            "total_warnings": len(self.warnings),
            "errors": self.errors,
            "warnings": self.warnings,
        }


def get_silent_logger(dry_run: bool = False) -> MigrationLogger:
    """Logger with no output, used when no logger is supplied."""
    return MigrationLogger(name="address_migration.silent", dry_run=dry_run, console=False)

"""
Batch migration of legacy donor addresses to structured addresses.

The runner fetches the eligible set once, then walks it sequentially:

    parse -> skip if nothing useful was extracted -> write (or preview) -> count

Each record is handled inside its own error boundary: a malformed row or a
failed update is logged, counted as an error, and the pass moves on. Only
the fetch itself is fatal.
"""

from typing import Any, Iterable, Mapping, Optional, Protocol, Union

from pydantic import ValidationError

from .eligibility import is_eligible
from .errors import FatalConfigurationError, RecordProcessingError
from .models import EligibleRecord, MigrationOutcome, MigrationSummary, RecordResult, StructuredAddress
from .parser import AddressParser
from .utils.logger import MigrationLogger, get_silent_logger


class RecordStore(Protocol):
    """What the runner needs from the donation store."""

    def fetch_eligible(self, limit: Optional[int] = None) -> Iterable[Union[EligibleRecord, Mapping[str, Any]]]: ...

    def set_structured_address(self, record_id: Any, address: StructuredAddress) -> None: ...


def to_record(item: Union[EligibleRecord, Mapping[str, Any]]) -> EligibleRecord:
    """Normalize a store row into an EligibleRecord.

    Raises:
        RecordProcessingError: If the row does not have the expected shape
    """
    if isinstance(item, EligibleRecord):
        return item
    record_id = item.get("record_id") if isinstance(item, Mapping) else None
    try:
        return EligibleRecord.model_validate(item)
    except ValidationError as e:
        reasons = "; ".join(f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors())
        raise RecordProcessingError(record_id, f"malformed record ({reasons})") from e


class MigrationRunner:
    """Orchestrates one migration pass over the donation store."""

    def __init__(
        self,
        store: RecordStore,
        logger: Optional[MigrationLogger] = None,
        parser: Optional[AddressParser] = None,
    ):
        """
        Args:
            store: Record store collaborator (fetch_eligible / set_structured_address)
            logger: Audit logger; a silent logger is used when omitted
            parser: Address parser (default: Indian gazetteer)
        """
        self.store = store
        self.logger = logger
        self.parser = parser or AddressParser()
        self.results: list[RecordResult] = []

    def _log(self, method: str, *args) -> None:
        """Call a logger method, ignoring logger failures."""
        try:
            getattr(self.logger, method)(*args)
        except Exception:
            pass

    def run(self, dry_run: bool = False, limit: Optional[int] = None) -> MigrationSummary:
        """
        Migrate every eligible record once.

        Args:
            dry_run: Report intended changes without calling the store's update
            limit: Process at most this many eligible records

        Returns:
            MigrationSummary where total == migrated + skipped + errors

        Raises:
            FatalConfigurationError: If the eligible set cannot be fetched
        """
        if self.logger is None:
            self.logger = get_silent_logger(dry_run=dry_run)

        try:
            items = list(self.store.fetch_eligible(limit=limit))
        except FatalConfigurationError:
            raise
        except Exception as e:
            raise FatalConfigurationError(f"Could not fetch eligible donations: {e}") from e

        if limit is not None:
            items = items[:limit]

        summary = MigrationSummary(dry_run=dry_run)
        self.results = []
        self._log("log_run_start", len(items))

        for item in items:
            result = self.process_record(item, dry_run=dry_run)
            self.results.append(result)
            summary.record(result.outcome)

        self._log("log_summary", summary)
        return summary

    def process_record(self, item: Union[EligibleRecord, Mapping[str, Any]], dry_run: bool = False) -> RecordResult:
        """Parse and (unless dry_run) persist one record. Never raises."""
        if isinstance(item, EligibleRecord):
            record_id = item.record_id
        else:
            record_id = item.get("record_id") if isinstance(item, Mapping) else None
        original = None
        try:
            record = to_record(item)
            record_id = record.record_id
            original = record.legacy_address

            if not is_eligible(record):
                reason = "Already has a structured city"
                self._log("log_skipped", record_id, original, reason)
                return RecordResult(record_id=record_id, outcome=MigrationOutcome.SKIPPED, original=original, reason=reason)

            parsed = self.parser.parse(original)

            if not parsed.has_signal:
                reason = "Could not parse address"
                self._log("log_skipped", record_id, original, reason)
                return RecordResult(
                    record_id=record_id, outcome=MigrationOutcome.SKIPPED, original=original, parsed=parsed, reason=reason
                )

            if parsed == record.structured_address:
                # City-less results stay eligible; rewriting the same value is not a migration
                reason = "Structured address already up to date"
                self._log("log_skipped", record_id, original, reason)
                return RecordResult(
                    record_id=record_id, outcome=MigrationOutcome.SKIPPED, original=original, parsed=parsed, reason=reason
                )

            self._log("log_migrated", record_id, original, parsed)
            if not dry_run:
                self.store.set_structured_address(record_id, parsed)

            return RecordResult(record_id=record_id, outcome=MigrationOutcome.MIGRATED, original=original, parsed=parsed)

        except RecordProcessingError as e:
            if record_id is None:
                record_id = e.record_id
            self._log("log_record_error", record_id, e.reason, e)
            return RecordResult(record_id=record_id, outcome=MigrationOutcome.ERROR, original=original, reason=e.reason)
        except Exception as e:
            reason = str(e) or type(e).__name__
            self._log("log_record_error", record_id, reason, e)
            return RecordResult(record_id=record_id, outcome=MigrationOutcome.ERROR, original=original, reason=reason)

from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord
from ..services.range_store import MappingError

"""Rejected-rule log for one mapping run.

Every rule the range store refuses while the config is applied is kept as an
ErrorRecord tagged with the config it came from. At the end of the run the
records go to `logs/errors-YYYYMMDD-HHMMSS.log` (UTC, stamped when the run
started) as JSON Lines. A run without rejections leaves no file behind.
"""

__all__ = [
    "RejectedRuleLog",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class RejectedRuleLog:
    """Collects rule rejections for a single rules source."""

    def __init__(self, source: str, logs_dir: Path | None = None) -> None:
        self.source = source
        self.logs_dir = logs_dir or LOGS_DIR
        self.started_at = datetime.now(UTC)
        self._records: list[ErrorRecord] = []

    @property
    def records(self) -> tuple[ErrorRecord, ...]:
        return tuple(self._records)

    @property
    def file_path(self) -> Path:
        return self.logs_dir / f"errors-{self.started_at.strftime(TIMESTAMP_FMT)}.log"

    def __len__(self) -> int:
        return len(self._records)

    def reject(self, rule: int, error: MappingError) -> ErrorRecord:
        """Record that rule number ``rule`` (1-based) was refused with ``error``."""
        record = ErrorRecord.create(self.source, rule, error.error_type, str(error))
        self._records.append(record)
        return record

    def counts_by_type(self) -> dict[str, int]:
        return dict(Counter(r.error_type for r in self._records))

    def write(self) -> Path | None:
        """Append pending records to the run's log file.

        Returns:
            The log path, or None when there was nothing to write
        """
        if not self._records:
            return None
        self.logs_dir.mkdir(parents=True, exist_ok=True)
        path = self.file_path
        with path.open("a", encoding="utf-8") as f:
            f.writelines(r.to_json_line() + "\n" for r in self._records)
        self._records.clear()
        return path

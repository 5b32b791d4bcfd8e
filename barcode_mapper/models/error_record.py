from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the rejected-rule log.

Each mapping rule that the range store refuses (overlap or incomplete input)
becomes one ErrorRecord, written as a JSON Lines entry with a fixed key set.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Where the rule came from (config file name or "cli")
        rule: Rule position in its source (1-based). Use -1 when unknown
        error_type: Error classification in UPPER_SNAKE_CASE format
        message: Human-readable rejection reason
    """
    timestamp: str  # ISO8601 UTC
    source: str
    rule: int
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(source: str, rule: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            source=source,
            rule=rule,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        # dataclass -> dict keeps the key set fixed
        return json.dumps(asdict(self), ensure_ascii=False)

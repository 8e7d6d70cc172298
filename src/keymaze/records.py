from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class BestTimeRecord:
    seconds: float
    width: int = 0
    height: int = 0
    timestamp: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat(timespec="seconds")
    )

    def to_json(self, *, indent: Optional[int] = 2) -> str:
        return json.dumps(asdict(self), indent=indent, ensure_ascii=False)

    @staticmethod
    def from_json(data: str) -> "BestTimeRecord":
        payload = json.loads(data)
        record = BestTimeRecord(**payload)
        if isinstance(record.seconds, bool) or not isinstance(record.seconds, (int, float)):
            raise ValueError(f"Invalid best time: {record.seconds!r}")
        if not math.isfinite(record.seconds) or record.seconds < 0:
            raise ValueError(f"Invalid best time: {record.seconds!r}")
        return record


class BestTimeStore:
    """Filesystem-backed best completion time.

    Holds a single record that only ever improves. A missing or unreadable
    file means there is no record yet.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> Optional[BestTimeRecord]:
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return BestTimeRecord.from_json(f.read())
        except (OSError, ValueError, TypeError) as exc:
            logger.error("Failed to read best time from %s: %s", self.path, exc)
            return None

    def best_time(self) -> Optional[float]:
        record = self.read()
        return record.seconds if record is not None else None

    def submit(self, seconds: float, width: int = 0, height: int = 0) -> bool:
        """Store ``seconds`` if it beats the current record. Returns True if stored."""
        current = self.best_time()
        if current is not None and seconds >= current:
            logger.debug("%.2fs does not beat record %.2fs", seconds, current)
            return False
        self._write(BestTimeRecord(seconds=seconds, width=width, height=height))
        logger.info("New best time %.2fs (previous: %s)", seconds, current)
        return True

    def _write(self, record: BestTimeRecord) -> None:
        """Write the record atomically.

        Raises OSError on failure.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".json.tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(record.to_json(indent=2))
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, self.path)


def format_best_time(seconds: Optional[float]) -> str:
    if seconds is None:
        return "No record"
    return f"{int(seconds)} seconds"


__all__ = ["BestTimeRecord", "BestTimeStore", "format_best_time"]

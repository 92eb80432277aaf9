"""JSONL capture file reader."""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

from listing_normalizer.errors import RawFileNotFoundError
from listing_normalizer.models.raw import RawRecord

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 120


@dataclass(frozen=True)
class LineOutcome:
    """One non-blank line: a parsed record, or the reason it could not be parsed."""

    line_number: int
    record: Optional[RawRecord] = None
    snippet: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None


def read_raw_records(path: str | Path) -> Iterator[LineOutcome]:
    """
    Yield one LineOutcome per non-blank line of a JSONL file, streaming.
    Raises RawFileNotFoundError before reading when the file does not exist.
    """
    path = Path(path)
    if not path.is_file():
        raise RawFileNotFoundError(f"RAW_FILE_NOT_FOUND: {path}")

    with path.open(encoding="utf-8", errors="replace") as fh:
        for line_number, line in enumerate(fh, start=1):
            text = line.strip()
            if not text:
                continue
            try:
                value = json.loads(text)
            except json.JSONDecodeError as e:
                logger.warning("Skipping line %d of %s: invalid JSON (%s)", line_number, path.name, e.msg)
                yield LineOutcome(line_number, snippet=text[:SNIPPET_LENGTH], error=str(e))
                continue
            except RecursionError:
                logger.warning("Skipping line %d of %s: JSON nested too deeply", line_number, path.name)
                yield LineOutcome(line_number, snippet=text[:SNIPPET_LENGTH], error="JSON nested too deeply")
                continue
            yield LineOutcome(line_number, record=RawRecord.from_line_value(value), snippet=text[:SNIPPET_LENGTH])

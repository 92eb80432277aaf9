"""Unit tests for the JSONL reader and raw record construction."""

from pathlib import Path
from typing import Callable

import pytest

from listing_normalizer.errors import RawFileNotFoundError
from listing_normalizer.models.raw import RawRecord
from listing_normalizer.reader import SNIPPET_LENGTH, read_raw_records


class TestReadRawRecords:
    """Tests for read_raw_records."""

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """A missing file raises RawFileNotFoundError, which is also a FileNotFoundError."""
        with pytest.raises(RawFileNotFoundError, match="RAW_FILE_NOT_FOUND"):
            list(read_raw_records(tmp_path / "nope.jsonl"))
        with pytest.raises(FileNotFoundError):
            list(read_raw_records(tmp_path / "nope.jsonl"))

    def test_blank_lines_skipped_and_errors_reported(self, write_jsonl: Callable[..., Path]) -> None:
        """Blank lines are skipped; invalid JSON becomes a failed outcome."""
        path = write_jsonl([{"payload_json": {"id": "1"}}, "   ", "{broken"])
        outcomes = list(read_raw_records(path))
        assert len(outcomes) == 2
        assert outcomes[0].ok
        assert outcomes[0].line_number == 1
        assert outcomes[0].record.payload == {"id": "1"}
        assert not outcomes[1].ok
        assert outcomes[1].line_number == 3
        assert outcomes[1].snippet == "{broken"
        assert outcomes[1].error

    def test_deeply_nested_line_is_reported(self, write_jsonl: Callable[..., Path]) -> None:
        """JSON nested too deeply to decode becomes a failed outcome; later lines still read."""
        deep = '{"payload_json": ' + "[" * 100000 + "]" * 100000 + "}"
        path = write_jsonl([deep, {"payload_json": {"id": "1"}}])
        outcomes = list(read_raw_records(path))
        assert len(outcomes) == 2
        assert not outcomes[0].ok
        assert outcomes[0].error
        assert len(outcomes[0].snippet) == SNIPPET_LENGTH
        assert outcomes[1].ok
        assert outcomes[1].record.payload == {"id": "1"}

    def test_snippet_is_truncated(self, write_jsonl: Callable[..., Path]) -> None:
        """Snippets are capped."""
        path = write_jsonl(["x" * 500])
        (outcome,) = read_raw_records(path)
        assert len(outcome.snippet) == SNIPPET_LENGTH


class TestRawRecord:
    """Tests for RawRecord.from_line_value."""

    def test_payload_json_and_extras(self) -> None:
        """Known metadata is lifted; other keys land in extras."""
        record = RawRecord.from_line_value(
            {
                "platform_code": "dabang",
                "source_url": "https://x",
                "collected_at": "2025-01-01",
                "sigungu": "노원구",
                "payload_json": {"id": "1"},
            }
        )
        assert record.payload == {"id": "1"}
        assert record.extras == {"sigungu": "노원구"}
        assert record.platform_code == "dabang"
        assert record.collected_at == "2025-01-01"
        assert record.base_url == "https://x"

    def test_payload_key_order(self) -> None:
        """payload beats data when both are present."""
        record = RawRecord.from_line_value({"data": {"a": 1}, "payload": {"b": 2}})
        assert record.payload == {"b": 2}
        assert record.extras == {"data": {"a": 1}}

    def test_whole_line_is_payload(self) -> None:
        """Without a payload key, the line minus metadata is the payload."""
        record = RawRecord.from_line_value({"id": "1", "request_url": "https://r", "list_data": {"x": 1}})
        assert record.payload == {"id": "1"}
        assert record.list_data == {"x": 1}
        assert record.base_url == "https://r"

    def test_bare_values(self) -> None:
        """Non-object lines become the payload."""
        assert RawRecord.from_line_value([1, 2]).payload == [1, 2]
        assert RawRecord.from_line_value("x").base_url == ""

"""Run orchestration: read → discover → resolve → parse → dedup → metrics."""

import logging
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from listing_normalizer.errors import SourceAccessBlockedError, error_code
from listing_normalizer.models.listing import NormalizedListing, ViolationCode
from listing_normalizer.models.run import RunMetadata, RunResult, RunSample
from listing_normalizer.reader import LineOutcome, read_raw_records
from listing_normalizer.scoring import Deduplicator
from listing_normalizer.validation import RecordCounters, build_metrics

if TYPE_CHECKING:
    from listing_normalizer.adapters.base import ListingAdapter

logger = logging.getLogger(__name__)


class NormalizationRun:
    """
    State for one normalize() call: counters, the run-wide dedup map and samples.
    Records are processed sequentially; a failing record is counted and skipped.
    """

    def __init__(
        self,
        adapter: "ListingAdapter",
        source_file: str | Path,
        *,
        max_items: Optional[int] = None,
        include_raw: bool = False,
    ):
        self.adapter = adapter
        self.source_file = Path(source_file)
        self.include_raw = include_raw
        self.counters = RecordCounters()
        self.dedup = Deduplicator(max_items)
        self.samples: list[RunSample] = []
        self.max_samples = adapter.options.max_samples

    def execute(self) -> RunResult:
        """Process the whole file. Raises RawFileNotFoundError if it does not exist."""
        started_at = datetime.now(timezone.utc)
        t0 = time.monotonic()
        spec = self.adapter.spec
        logger.info("Normalizing %s as %s", self.source_file, spec.platform_code)

        for outcome in read_raw_records(self.source_file):
            self.counters.raw_records += 1
            if not outcome.ok:
                self._record_parse_failure(outcome)
                continue
            self.counters.parsed_raw_records += 1
            self._process(outcome)

        duration_ms = int((time.monotonic() - t0) * 1000)
        items = self.dedup.items
        thresholds = self.adapter.options.thresholds()
        metrics = build_metrics(items, self.counters, thresholds, duration_ms)
        metadata = RunMetadata(
            platform_code=spec.platform_code,
            platform_name=spec.platform_name,
            collection_mode=spec.collection_mode.value,
            source_file=str(self.source_file),
            raw_records=metrics.raw_records,
            parsed_raw_records=metrics.parsed_raw_records,
            parse_failure=metrics.parse_failure,
            unmapped_records=metrics.unmapped_records,
            normalized_records=metrics.normalized_items,
            started_at=started_at,
            generated_at=datetime.now(timezone.utc),
            duration_ms=duration_ms,
            thresholds=thresholds,
        )
        logger.info(
            "Finished %s: %d records, %d items, %d failed, %d unmapped in %d ms",
            self.source_file.name,
            metrics.raw_records,
            metrics.normalized_items,
            metrics.parse_failure,
            metrics.unmapped_records,
            duration_ms,
        )
        return RunResult(metadata=metadata, stats=metrics, samples=self.samples, items=items)

    def _process(self, outcome: LineOutcome) -> None:
        record = outcome.record
        try:
            listings = self.adapter.normalize_record(record)
        except SourceAccessBlockedError as e:
            logger.warning("Line %d of %s: %s", outcome.line_number, self.source_file.name, e)
            self._record_failure(outcome, e)
            return
        except Exception as e:
            logger.exception("Line %d of %s: normalization failed", outcome.line_number, self.source_file.name)
            self._record_failure(outcome, e)
            return

        if not listings:
            self.counters.unmapped_records += 1
            return
        for listing in listings:
            if self.include_raw:
                listing.raw = record.payload
            if self.dedup.offer(listing) == "added":
                self._add_ok_sample(listing, outcome.line_number)

    def _record_parse_failure(self, outcome: LineOutcome) -> None:
        code = ViolationCode.RECORD_PARSE_FAIL.value
        self.counters.record_failure(code, json_error=True)
        self._add_sample(
            RunSample(
                parse_status="fail",
                line_number=outcome.line_number,
                raw_snippet=outcome.snippet,
                error_code=code,
                error=outcome.error,
            )
        )

    def _record_failure(self, outcome: LineOutcome, exc: Exception) -> None:
        code = error_code(exc)
        self.counters.record_failure(code)
        self._add_sample(
            RunSample(
                parse_status="fail",
                line_number=outcome.line_number,
                raw_source=outcome.record.base_url or None,
                error_code=code,
                error=str(exc) or type(exc).__name__,
            )
        )

    def _add_ok_sample(self, listing: NormalizedListing, line_number: int) -> None:
        self._add_sample(
            RunSample(
                parse_status="ok",
                line_number=line_number,
                source_ref=listing.source_ref,
                address=listing.has_address,
                has_price=listing.has_price,
                has_area=listing.has_area,
                image_count=len(listing.image_urls),
                validation_count=len(listing.validation),
            )
        )

    def _add_sample(self, sample: RunSample) -> None:
        if len(self.samples) < self.max_samples:
            self.samples.append(sample)

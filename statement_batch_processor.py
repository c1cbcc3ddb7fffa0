"""
Statement Batch Processor for extracting many transaction alerts at once.
Handles plain lists of alert texts and JSON exports, with per-item error handling.
"""

import json
import logging
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

import pandas as pd

from statement_engine.extraction.direction import Direction
from statement_engine.extraction.engine import (
    StatementExtractor,
    ExtractionOptions,
    ExtractedRecord,
    EmptyInputError,
    AmountNotFoundError,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


class InvalidAlertFileError(Exception):
    """Raised when an alert file cannot be read as a list of alerts."""
    pass


@dataclass
class ProcessingError:
    """Details of a processing error."""
    item_id: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total_items: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0

    # Direction counts
    debits: int = 0
    credits: int = 0

    total_confidence: float = 0.0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def average_confidence(self) -> float:
        """Calculate average direction confidence."""
        if self.successful == 0:
            return 0.0
        return self.total_confidence / self.successful

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_items == 0:
            return 0.0
        return (self.successful / self.total_items) * 100


@dataclass
class BatchResult:
    """Complete result of batch processing."""
    stats: BatchStats
    results: List[Tuple[str, ExtractedRecord]]
    errors: List[ProcessingError]
    error_summary: Dict[str, int] = field(default_factory=dict)


class StatementBatchProcessor:
    """Batch processor for transaction alerts."""

    def __init__(
        self,
        options: Optional[ExtractionOptions] = None,
        extractor: Optional[StatementExtractor] = None
    ):
        """
        Initialize the batch processor.

        Args:
            options: Extraction options applied to every item (strict by default,
                so unreadable alerts are reported as errors)
            extractor: Extractor to use (a default one is created if omitted)
        """
        self.options = options or ExtractionOptions()
        self.extractor = extractor or StatementExtractor()

        logger.info(
            f"Initialized batch processor: strict={self.options.strict}, "
            f"default_currency={self.options.default_currency}"
        )

    def process_batch(
        self,
        items: List[Tuple[str, str]],
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BatchResult:
        """
        Extract a batch of alerts.

        Args:
            items: List of (item_id, alert_text) tuples
            progress_callback: Optional callback(current, total, message)

        Returns:
            BatchResult with all extraction results
        """
        stats = BatchStats(
            total_items=len(items),
            start_time=datetime.now()
        )

        results = []
        errors = []
        error_types = {}

        logger.info(f"Starting batch processing of {len(items)} alerts")

        for idx, (item_id, text) in enumerate(items):
            if progress_callback:
                progress_callback(idx + 1, len(items), f"Processing: {item_id}")

            logger.debug(f"Processing alert {idx + 1}/{len(items)}: {item_id}")

            try:
                record = self.extractor.extract(text, self.options)
            except EmptyInputError as e:
                error = ProcessingError(item_id, "EMPTY_INPUT", str(e))
                logger.error(f"{error.error_type} in {item_id}: {error.error_message}")
            except AmountNotFoundError as e:
                error = ProcessingError(item_id, "AMOUNT_NOT_FOUND", str(e))
                logger.error(f"{error.error_type} in {item_id}: {error.error_message}")
            except Exception as e:
                error = ProcessingError(
                    item_id,
                    "PROCESSING_ERROR",
                    f"{type(e).__name__}: {str(e)}"
                )
                logger.error(f"Processing error in {item_id}: {traceback.format_exc()}")
            else:
                results.append((item_id, record))
                stats.processed += 1
                stats.successful += 1
                stats.total_confidence += record.confidence
                if record.direction == Direction.DEBIT:
                    stats.debits += 1
                else:
                    stats.credits += 1
                continue

            errors.append(error)
            stats.failed += 1
            stats.processed += 1
            error_types[error.error_type] = error_types.get(error.error_type, 0) + 1

        stats.end_time = datetime.now()

        logger.info(
            f"Batch processing complete: {stats.successful}/{stats.total_items} successful, "
            f"avg confidence: {stats.average_confidence:.2f}, time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            results=results,
            errors=errors,
            error_summary=error_types
        )

    def load_alerts_json(self, filename: str, content: bytes) -> List[Tuple[str, str]]:
        """
        Read alerts from a JSON export.

        Accepts a list of strings, a list of {"id": ..., "text": ...} objects,
        or a dictionary holding such a list under "alerts" or "messages".
        Items without an id are numbered "<filename>#<index>".

        Args:
            filename: Name of the file, used for generated ids and logging
            content: Raw file bytes

        Returns:
            List of (item_id, alert_text) tuples

        Raises:
            InvalidAlertFileError: If the structure is not a list of alerts
        """
        try:
            data = json.loads(content.decode("utf-8"))
        except UnicodeDecodeError:
            # SMS exports from older phones are often latin-1
            data = json.loads(content.decode("latin-1"))

        if isinstance(data, dict):
            data = data.get("alerts", data.get("messages"))

        if not isinstance(data, list):
            raise InvalidAlertFileError(f"No alert list found in {filename}")

        items = []
        for idx, entry in enumerate(data):
            if isinstance(entry, str):
                items.append((f"{filename}#{idx}", entry))
            elif isinstance(entry, dict) and isinstance(entry.get("text"), str):
                items.append((str(entry.get("id") or f"{filename}#{idx}"), entry["text"]))
            else:
                raise InvalidAlertFileError(f"{filename}: item {idx} is not an alert")

        logger.info(f"{filename}: loaded {len(items)} alerts")
        return items

    def results_to_dataframe(self, results: List[Tuple[str, ExtractedRecord]]) -> pd.DataFrame:
        """
        Convert extraction results to a pandas DataFrame.

        Args:
            results: List of (item_id, ExtractedRecord) tuples

        Returns:
            pandas DataFrame
        """
        rows = []
        for item_id, record in results:
            row = {
                "Item ID": item_id,
                "Date": record.date,
                "Type": record.direction.value,
                "Amount": float(record.amount),
                "Currency": record.currency,
                "Balance": float(record.balance) if record.balance is not None else None,
                "Reference ID": record.reference_id or "",
                "Description": record.description,
                "Confidence": round(record.confidence, 2),
            }
            rows.append(row)

        return pd.DataFrame(rows)

    def errors_to_dataframe(self, errors: List[ProcessingError]) -> pd.DataFrame:
        """
        Convert processing errors to a pandas DataFrame.

        Args:
            errors: List of ProcessingError objects

        Returns:
            pandas DataFrame
        """
        rows = []
        for error in errors:
            row = {
                "Item ID": error.item_id,
                "Error Type": error.error_type,
                "Error Message": error.error_message,
                "Timestamp": error.timestamp,
            }
            rows.append(row)

        return pd.DataFrame(rows)

"""
SMS Batch Processor for processing exported message files.
Handles JSON, CSV files and ZIP archives with comprehensive error handling.
"""

import csv
import io
import json
import logging
import os
import traceback
import zipfile
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional, Tuple

from sms_finance_engine import process_messages
from sms_finance_engine.categorisation.analytics import CategorizationCounters
from sms_finance_engine.config.mapping_loader import seed_mapping_store
from sms_finance_engine.models import ParsedBill, PatternSuggestion, Transaction, TransactionType
from sms_finance_engine.recurring.pattern_detector import PatternDetector
from sms_finance_engine.stores import InMemoryMerchantMappingStore, InMemoryRecurringRuleStore

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = (".json", ".csv")


class InvalidMessageFileError(Exception):
    """Raised when a file's structure cannot be normalized to a message list."""
    pass


@dataclass
class ProcessingError:
    """Details of a processing error."""
    file_name: str
    error_type: str
    error_message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat())


@dataclass
class FileResult:
    """Parsed output of a single message file."""
    file_name: str
    message_count: int
    transactions: List[Dict]
    bills: List[ParsedBill]
    ignored: int


@dataclass
class BatchStats:
    """Statistics for batch processing."""
    total_files: int = 0
    processed: int = 0
    successful: int = 0
    failed: int = 0

    # Message counts
    total_messages: int = 0
    transactions: int = 0
    bills: int = 0
    ignored: int = 0
    needs_review: int = 0

    # Amounts
    total_debits: float = 0.0
    total_credits: float = 0.0

    # Timing
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def parse_rate(self) -> float:
        """Share of messages that became a transaction or bill, as a percentage."""
        if self.total_messages == 0:
            return 0.0
        return (self.transactions + self.bills) / self.total_messages * 100

    @property
    def processing_time(self) -> float:
        """Calculate total processing time in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return 0.0

    @property
    def success_rate(self) -> float:
        """Calculate success rate as percentage."""
        if self.total_files == 0:
            return 0.0
        return (self.successful / self.total_files) * 100


@dataclass
class BatchResult:
    """Complete result of batch processing."""
    stats: BatchStats
    results: List[FileResult]
    errors: List[ProcessingError]
    patterns: List[PatternSuggestion] = field(default_factory=list)
    error_summary: Dict[str, int] = field(default_factory=dict)

    @property
    def transactions(self) -> List[Dict]:
        return [txn for result in self.results for txn in result.transactions]

    @property
    def bills(self) -> List[ParsedBill]:
        return [bill for result in self.results for bill in result.bills]

    @staticmethod
    def merge_results(result1: 'BatchResult', result2: 'BatchResult') -> 'BatchResult':
        """
        Merge two BatchResult objects into a single combined result.

        Patterns are taken from the second result, which is expected to have
        been detected over the larger history.

        Args:
            result1: First batch result (typically the existing cumulative result)
            result2: Second batch result (typically the new batch to add)

        Returns:
            New BatchResult with merged data
        """
        merged_stats = BatchStats()

        # Sum all count fields
        for name in ("total_files", "processed", "successful", "failed", "total_messages",
                     "transactions", "bills", "ignored", "needs_review", "total_debits", "total_credits"):
            setattr(merged_stats, name, getattr(result1.stats, name) + getattr(result2.stats, name))

        # Use earliest start time and latest end time
        if result1.stats.start_time and result2.stats.start_time:
            merged_stats.start_time = min(result1.stats.start_time, result2.stats.start_time)
        else:
            merged_stats.start_time = result1.stats.start_time or result2.stats.start_time

        if result1.stats.end_time and result2.stats.end_time:
            merged_stats.end_time = max(result1.stats.end_time, result2.stats.end_time)
        else:
            merged_stats.end_time = result1.stats.end_time or result2.stats.end_time

        merged_error_summary = dict(result1.error_summary)
        for error_type, count in result2.error_summary.items():
            merged_error_summary[error_type] = merged_error_summary.get(error_type, 0) + count

        return BatchResult(
            stats=merged_stats,
            results=result1.results + result2.results,
            errors=result1.errors + result2.errors,
            patterns=result2.patterns or result1.patterns,
            error_summary=merged_error_summary
        )


class SMSBatchProcessor:
    """Batch processor for exported bank message files."""

    def __init__(
        self,
        mappings_csv: Optional[str] = None,
        detect_recurring: bool = True
    ):
        """
        Initialize the batch processor.

        Args:
            mappings_csv: Optional merchant mapping seed CSV
            detect_recurring: Run recurring pattern detection over the whole batch
        """
        self.detect_recurring = detect_recurring

        # Initialize components shared across files so learned aliases carry over
        self.mapping_store = InMemoryMerchantMappingStore()
        self.rule_store = InMemoryRecurringRuleStore()
        self.analytics = CategorizationCounters()
        # Message ids keep counting across files and batches so analytics entries stay distinct
        self._next_message_id = 1

        if mappings_csv:
            seeded = seed_mapping_store(self.mapping_store, mappings_csv)
            logger.info(f"Initialized batch processor with {seeded} seeded merchant mappings")
        else:
            logger.info("Initialized batch processor with an empty merchant mapping store")

    def process_batch(
        self,
        files: List[Tuple[str, bytes]],
        progress_callback: Optional[Callable[[int, int, str], None]] = None
    ) -> BatchResult:
        """
        Process a batch of message files.

        Args:
            files: List of (filename, content) tuples
            progress_callback: Optional callback(current, total, message)

        Returns:
            BatchResult with all processing results
        """
        stats = BatchStats(
            total_files=len(files),
            start_time=datetime.now()
        )

        results = []
        errors = []
        error_types = {}

        logger.info(f"Starting batch processing of {len(files)} files")

        for idx, (filename, content) in enumerate(files):
            try:
                if progress_callback:
                    progress_callback(idx + 1, len(files), f"Processing: {filename}")

                logger.debug(f"Processing file {idx + 1}/{len(files)}: {filename}")

                result = self._process_single_file(filename, content)

                results.append(result)
                stats.processed += 1
                stats.successful += 1

                # Update message statistics
                stats.total_messages += result.message_count
                stats.transactions += len(result.transactions)
                stats.bills += len(result.bills)
                stats.ignored += result.ignored
                for txn in result.transactions:
                    if txn["needs_review"]:
                        stats.needs_review += 1
                    if txn["type"] == "DEBIT":
                        stats.total_debits += txn["amount"]
                    else:
                        stats.total_credits += txn["amount"]

            except json.JSONDecodeError as e:
                self._record_error(errors, error_types, stats, filename, "JSON_PARSE_ERROR", f"Invalid JSON: {str(e)}")
                logger.error(f"JSON parse error in {filename}: {e}")

            except csv.Error as e:
                self._record_error(errors, error_types, stats, filename, "CSV_PARSE_ERROR", f"Invalid CSV: {str(e)}")
                logger.error(f"CSV parse error in {filename}: {e}")

            except KeyError as e:
                self._record_error(errors, error_types, stats, filename, "MISSING_DATA",
                                   f"Missing required field: {str(e)}")
                logger.error(f"Missing data in {filename}: {e}")

            except InvalidMessageFileError as e:
                self._record_error(errors, error_types, stats, filename, "INVALID_FILE_STRUCTURE", str(e))
                logger.error(f"Invalid file structure in {filename}: {e}")

            except ValueError as e:
                self._record_error(errors, error_types, stats, filename, "DATA_VALIDATION_ERROR", str(e))
                logger.error(f"Data validation error in {filename}: {e}")

            except Exception as e:
                self._record_error(errors, error_types, stats, filename, "PROCESSING_ERROR",
                                   f"{type(e).__name__}: {str(e)}")
                logger.error(f"Processing error in {filename}: {traceback.format_exc()}")

        patterns = self._detect_patterns(results) if self.detect_recurring else []

        stats.end_time = datetime.now()

        logger.info(
            f"Batch processing complete: {stats.successful}/{stats.total_files} successful, "
            f"{stats.transactions} transactions, {stats.bills} bills, "
            f"parse rate: {stats.parse_rate:.1f}%, time: {stats.processing_time:.1f}s"
        )

        return BatchResult(
            stats=stats,
            results=results,
            errors=errors,
            patterns=patterns,
            error_summary=error_types
        )

    @staticmethod
    def _record_error(errors, error_types, stats, filename, error_type, message) -> None:
        errors.append(ProcessingError(
            file_name=filename,
            error_type=error_type,
            error_message=message
        ))
        stats.failed += 1
        stats.processed += 1
        error_types[error_type] = error_types.get(error_type, 0) + 1

    def _process_single_file(self, filename: str, content: bytes) -> FileResult:
        """Process a single message file."""
        text = self._decode(content)

        if filename.lower().endswith(".csv"):
            messages = self._read_csv_messages(text, filename)
        else:
            messages = self._normalize_json_structure(json.loads(text), filename)

        if not messages:
            raise ValueError("No messages found in file")

        self._validate_messages(messages)

        # Recurring detection runs once over the whole batch
        output = process_messages(
            messages,
            mapping_store=self.mapping_store,
            rule_store=self.rule_store,
            analytics=self.analytics,
            detect_recurring=False,
            first_id=self._next_message_id,
        )
        self._next_message_id += len(messages)

        for txn in output["transactions"]:
            txn["source_file"] = filename

        return FileResult(
            file_name=filename,
            message_count=len(messages),
            transactions=output["transactions"],
            bills=output["bills"],
            ignored=output["ignored"],
        )

    @staticmethod
    def _decode(content: bytes) -> str:
        """Decode file bytes with fallback encoding handling."""
        try:
            return content.decode("utf-8-sig")
        except UnicodeDecodeError:
            # Fallback to cp1252 for Windows-encoded exports
            try:
                return content.decode("cp1252")
            except UnicodeDecodeError:
                # Final fallback to latin-1 which accepts all byte values
                return content.decode("latin-1")

    def _validate_messages(self, messages: List[Dict]) -> None:
        """Validate message data."""
        for idx, message in enumerate(messages):
            if "body" not in message:
                raise KeyError(f"body (message {idx})")
            if not isinstance(message["body"], str):
                raise ValueError(f"Message {idx} has a non-text body: {message['body']!r}")

    def _normalize_json_structure(self, data, filename: str) -> List[Dict]:
        """
        Normalize the supported JSON layouts to a list of message dicts.

        Handles:
        - Root-level list of message objects
        - Root-level list of plain strings (bodies only)
        - Dictionary with a 'messages' key holding either of the above

        Raises:
            InvalidMessageFileError: If structure cannot be normalized
        """
        if isinstance(data, dict):
            if "messages" not in data:
                raise InvalidMessageFileError(
                    f"JSON object in {filename} has no 'messages' key. "
                    f"Found keys: {list(data.keys())}"
                )
            data = data["messages"]

        if not isinstance(data, list):
            raise InvalidMessageFileError(
                f"Unexpected JSON root type in {filename}: {type(data).__name__}. "
                f"Expected list or object with 'messages'."
            )

        messages = []
        for item in data:
            if isinstance(item, str):
                messages.append({"body": item})
            elif isinstance(item, dict):
                messages.append(self._normalize_message_keys(item))
            else:
                raise InvalidMessageFileError(
                    f"Unrecognized message entry in {filename}: {type(item).__name__}"
                )

        logger.debug(f"{filename}: found {len(messages)} messages")
        return messages

    @staticmethod
    def _normalize_message_keys(item: Dict) -> Dict:
        """Map common export key names onto 'body' and 'date'."""
        message = dict(item)
        if "body" not in message:
            for key in ("text", "message", "sms"):
                if key in message:
                    message["body"] = message[key]
                    break
        if "date" not in message:
            for key in ("received_at", "timestamp", "datetime"):
                if key in message:
                    message["date"] = message[key]
                    break
        return message

    def _read_csv_messages(self, text: str, filename: str) -> List[Dict]:
        """Read a CSV export with a 'body' column and an optional 'date' column."""
        reader = csv.DictReader(io.StringIO(text), strict=True)
        columns = [c.strip().lower() for c in (reader.fieldnames or [])]
        if not columns:
            raise InvalidMessageFileError(f"CSV file {filename} has no header row")

        messages = []
        for row in reader:
            normalized = {k.strip().lower(): v for k, v in row.items() if k is not None}
            messages.append(self._normalize_message_keys(normalized))

        if messages and "body" not in messages[0]:
            raise InvalidMessageFileError(
                f"CSV file {filename} has no 'body' column. Found columns: {columns}"
            )
        logger.debug(f"{filename}: found {len(messages)} CSV messages")
        return messages

    def _detect_patterns(self, results: List[FileResult]) -> List[PatternSuggestion]:
        """Run recurring pattern detection over every parsed transaction in the batch."""
        history = [
            Transaction(
                id=txn["id"],
                amount=txn["amount"],
                type=TransactionType(txn["type"]),
                merchant_name=txn["merchant_name"],
                transaction_date=txn["date"],
                merchant_normalized=txn["merchant_normalized"],
                category_id=txn["category_id"],
            )
            for r in results for txn in r.transactions
        ]
        return PatternDetector(rule_store=self.rule_store).detect_patterns(history)

    def load_files_from_paths(self, paths: List[str]) -> List[Tuple[str, bytes]]:
        """
        Load message files from disk.
        Handles JSON and CSV files and ZIP archives.

        Args:
            paths: File paths

        Returns:
            List of (filename, content) tuples
        """
        all_files = []

        for path in paths:
            filename = os.path.basename(path)
            with open(path, "rb") as fh:
                content = fh.read()

            if filename.lower().endswith(".zip"):
                logger.info(f"Extracting ZIP archive: {filename}")
                zip_files = self._extract_zip(content)
                all_files.extend(zip_files)
                logger.info(f"Extracted {len(zip_files)} files from {filename}")

            elif filename.lower().endswith(SUPPORTED_EXTENSIONS):
                all_files.append((filename, content))

            else:
                logger.warning(f"Skipping unsupported file: {filename}")

        logger.info(f"Total files loaded: {len(all_files)}")
        return all_files

    def _extract_zip(self, content: bytes) -> List[Tuple[str, bytes]]:
        """Extract JSON and CSV files from a ZIP archive."""
        files = []

        with zipfile.ZipFile(io.BytesIO(content), "r") as zf:
            for name in zf.namelist():
                # Skip directories and unsupported files
                if name.endswith("/"):
                    continue
                if not name.lower().endswith(SUPPORTED_EXTENSIONS):
                    continue

                # Use just the filename without path
                files.append((os.path.basename(name), zf.read(name)))

        return files

    def results_to_dataframe(self, results: List[FileResult]):
        """
        Convert parsed transactions to a pandas DataFrame.

        Args:
            results: List of FileResult objects

        Returns:
            pandas DataFrame, one row per transaction
        """
        import pandas as pd

        rows = []
        for result in results:
            for txn in result.transactions:
                rows.append({
                    "Source File": result.file_name,
                    "Date": txn["date"],
                    "Type": txn["type"],
                    "Amount": round(txn["amount"], 2),
                    "Merchant": txn["merchant_name"],
                    "Display Name": txn["display_name"],
                    "Bank": txn["bank_name"],
                    "Channel": txn["payment_channel"],
                    "Reference": txn["reference"] or "",
                    "Category": txn["category"],
                    "Category Confidence": round(txn["category_confidence"], 2),
                    "Tier": txn["tier"],
                    "Method": txn["method"],
                    "Needs Review": txn["needs_review"],
                    "Likely Subscription": txn["is_likely_subscription"],
                    "Template": txn["template"],
                })

        return pd.DataFrame(rows)

    def bills_to_dataframe(self, results: List[FileResult]):
        """Convert parsed credit card bills to a pandas DataFrame."""
        import pandas as pd

        rows = []
        for result in results:
            for bill in result.bills:
                rows.append({
                    "Source File": result.file_name,
                    "Bank": bill.bank_name,
                    "Card": bill.card_last_four,
                    "Total Due": bill.total_due,
                    "Minimum Due": bill.minimum_due,
                    "Due Date": bill.due_date,
                })

        return pd.DataFrame(rows)

    def patterns_to_dataframe(self, patterns: List[PatternSuggestion]):
        """Convert recurring pattern suggestions to a pandas DataFrame."""
        import pandas as pd

        rows = []
        for pattern in patterns:
            rows.append({
                "Merchant": pattern.display_name,
                "Frequency": pattern.detected_frequency.value,
                "Average Amount": round(pattern.average_amount, 2),
                "Occurrences": pattern.occurrence_count,
                "Confidence": round(pattern.confidence, 2),
                "Next Expected": pattern.next_expected,
                "Description": pattern.description,
            })

        return pd.DataFrame(rows)

    def errors_to_dataframe(self, errors: List[ProcessingError]):
        """
        Convert processing errors to a pandas DataFrame.

        Args:
            errors: List of ProcessingError objects

        Returns:
            pandas DataFrame
        """
        import pandas as pd

        rows = []
        for error in errors:
            row = {
                "File Name": error.file_name,
                "Error Type": error.error_type,
                "Error Message": error.error_message,
                "Timestamp": error.timestamp,
            }
            rows.append(row)

        return pd.DataFrame(rows)

"""CSV report generation and run summary."""

import csv
import io
import logging
import os
from typing import Iterable, List

from core.exceptions import ReportWriteError
from schemas.extraction import CSV_FIELDS, ExtractionResult, FailedFile, RunSummary

logger = logging.getLogger(__name__)


def to_csv_bytes(results: Iterable[ExtractionResult]) -> bytes:
    """Serialize results to UTF-8 CSV with the fixed column order."""
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=CSV_FIELDS, lineterminator="\n")
    writer.writeheader()
    for result in results:
        writer.writerow(result.to_row())
    return buffer.getvalue().encode("utf-8")


def summarize(results: Iterable[ExtractionResult]) -> RunSummary:
    """Count successes and failures; list failed files with their errors."""
    summary = RunSummary()
    for result in results:
        summary.total += 1
        if result.succeeded:
            summary.succeeded += 1
            if not result.has_data:
                summary.partial += 1
        else:
            summary.failed += 1
            summary.failures.append(FailedFile(file=result.file_name, error=result.error))
    return summary


class ReportWriter:
    """Writes the CSV report to the configured output path."""

    def __init__(self, output_path: str):
        self.output_path = output_path

    def write(self, results: List[ExtractionResult]) -> str:
        """
        Write all results (failed ones included), overwriting any existing file.

        Raises:
            ReportWriteError: If the file cannot be written
        """
        payload = to_csv_bytes(results)
        try:
            parent = os.path.dirname(os.path.abspath(self.output_path))
            os.makedirs(parent, exist_ok=True)
            with open(self.output_path, "wb") as f:
                f.write(payload)
        except OSError as e:
            raise ReportWriteError(f"Error writing CSV file {self.output_path}: {e}") from e

        logger.info(f"📄 Data saved to: {self.output_path}")
        return self.output_path

"""
Services module for the resume extraction pipeline.

- llm_service: completion client and contact field extraction with retries
- file_service: moving processed files into success/failed folders
- report_service: CSV report and run summary
"""

from services.file_service import FileOrganizer, move_file, unique_target_path
from services.llm_service import CompletionClient, FieldExtractor, parse_fields
from services.report_service import ReportWriter, summarize, to_csv_bytes

__all__ = [
    # LLM
    "CompletionClient",
    "FieldExtractor",
    "parse_fields",
    # Files
    "FileOrganizer",
    "move_file",
    "unique_target_path",
    # Report
    "ReportWriter",
    "summarize",
    "to_csv_bytes",
]

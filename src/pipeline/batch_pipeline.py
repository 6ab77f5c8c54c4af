"""
Batch Extraction Pipeline ⚡
===========================

Drives a full run over the resume directory.

The Pipeline Workflow:
----------------------
1. **Validation**: Refuse to start without a real API key.
2. **Discovery**: List supported files in the input directory.
3. **Batching**: Split the files into fixed-size batches.
4. **Processing**: Run every file of a batch concurrently through
   Extract -> Normalize -> Field-Extract -> Organize, and wait for all of them.
5. **Pacing**: Sleep between batches to respect the API rate limits.

A single file's failure never stops its batch or the run; it only produces
a result with ``error`` set and a move to the failed directory.
"""
import asyncio
import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence, TypeVar

from core.config import Settings
from core.exceptions import ConfigurationError, InsufficientContentError
from core.logging_config import get_logger
from extractors.text_extractor import extract_text
from models.enums import FileTypeEnum, PipelineEventEnum
from pipeline.events import EventListener, PipelineEvent
from schemas.extraction import ExtractionResult, ResumeJob, RunSummary
from services.file_service import FileOrganizer
from services.llm_service import FieldExtractor
from services.report_service import summarize
from utils.text_utils import has_sufficient_content, normalize_text

logger = get_logger(__name__)

T = TypeVar("T")


def create_batches(items: Sequence[T], batch_size: int) -> List[List[T]]:
    """Split items into consecutive batches of at most ``batch_size``."""
    if batch_size < 1:
        raise ValueError("batch_size must be at least 1")
    return [list(items[i:i + batch_size]) for i in range(0, len(items), batch_size)]


def validate_settings(settings: Settings) -> None:
    """
    Raises:
        ConfigurationError: If the API key is missing or still a placeholder,
            or the batch size is below one
    """
    if not settings.has_valid_api_key:
        raise ConfigurationError("Please set your OPENROUTER_API_KEY in the .env file")
    if settings.batch_size < 1:
        raise ConfigurationError(f"BATCH_SIZE must be at least 1, got {settings.batch_size}")


def discover_jobs(input_dir: str, extensions: Sequence[str]) -> List[ResumeJob]:
    """List supported resume files (not directories) in ``input_dir``, sorted by name."""
    # Extensions without an extractor are never picked up
    allowed = {ext.lower() for ext in extensions} & set(FileTypeEnum.get_extensions())
    jobs = []
    for entry in sorted(os.listdir(input_dir)):
        path = os.path.join(input_dir, entry)
        if not os.path.isfile(path):
            continue
        if os.path.splitext(entry)[1].lower() not in allowed:
            continue
        jobs.append(ResumeJob.from_path(path))
    return jobs


@dataclass
class RunOutcome:
    """Everything a run produced, in batch order."""
    results: List[ExtractionResult] = field(default_factory=list)
    summary: RunSummary = field(default_factory=RunSummary)
    no_files: bool = False


class BatchPipeline:
    """Processes every resume in the input directory, batch by batch."""

    def __init__(
        self,
        settings: Settings,
        field_extractor: FieldExtractor,
        organizer: Optional[FileOrganizer] = None,
        text_extractor: Callable[[ResumeJob], Awaitable[str]] = extract_text,
        listener: Optional[EventListener] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.settings = settings
        self.field_extractor = field_extractor
        self.organizer = organizer or FileOrganizer.from_settings(settings)
        self.text_extractor = text_extractor
        self.listener = listener
        self._sleep = sleep

        self.total = 0
        self.processed = 0
        self.succeeded = 0
        self.failed = 0

    def _emit(self, kind: PipelineEventEnum, **kwargs) -> None:
        if self.listener is None:
            return
        self.listener(PipelineEvent(
            kind=kind,
            processed=self.processed,
            succeeded=self.succeeded,
            failed=self.failed,
            total=self.total,
            **kwargs,
        ))

    async def _extract_fields(self, job: ResumeJob) -> ExtractionResult:
        raw_text = await self.text_extractor(job)
        cleaned = normalize_text(raw_text, self.settings.max_text_length)

        if not has_sufficient_content(cleaned, self.settings.min_text_length):
            raise InsufficientContentError("Insufficient text content extracted")

        return await self.field_extractor.extract(cleaned, job.file_name)

    async def process_job(self, job: ResumeJob, batch_index: int = 0) -> ExtractionResult:
        """
        Run one resume through the whole pipeline. Never raises for per-file errors.

        The file goes to the success folder only when the AI call succeeded
        and at least one field came back populated.
        """
        self._emit(PipelineEventEnum.JOB_STARTED, file_name=job.file_name, batch_index=batch_index)
        logger.info(f"Processing: {job.file_name}")

        try:
            result = await self._extract_fields(job)
        except Exception as e:
            message = str(e) or type(e).__name__
            logger.error(f"✗ Failed: {job.file_name} - {message}", extra={"file": job.file_name})
            result = ExtractionResult.failed(job.file_name, message)

        move_to_success = result.succeeded and result.has_data
        if move_to_success:
            logger.info(f"✓ Completed: {job.file_name}")
        elif result.succeeded:
            logger.warning(f"⚠ Partially completed: {job.file_name} (limited data extracted)")

        await self.organizer.organize(job.path, move_to_success)

        # No await between the counter updates and the event
        self.processed += 1
        if result.succeeded:
            self.succeeded += 1
            self._emit(
                PipelineEventEnum.JOB_SUCCEEDED,
                file_name=job.file_name,
                batch_index=batch_index,
                partial=not result.has_data,
            )
        else:
            self.failed += 1
            self._emit(
                PipelineEventEnum.JOB_FAILED,
                file_name=job.file_name,
                batch_index=batch_index,
                error=result.error,
            )
        return result

    async def run_jobs(self, jobs: Sequence[ResumeJob]) -> List[ExtractionResult]:
        """Process jobs in sequential batches, each batch concurrently."""
        batches = create_batches(jobs, self.settings.batch_size)
        self.total = len(jobs)
        self.processed = self.succeeded = self.failed = 0
        results: List[ExtractionResult] = []

        for index, batch in enumerate(batches, 1):
            logger.info(f"Processing batch {index}/{len(batches)}")

            batch_results = await asyncio.gather(
                *(self.process_job(job, batch_index=index) for job in batch)
            )
            results.extend(batch_results)

            self._emit(
                PipelineEventEnum.BATCH_COMPLETED,
                batch_index=index,
                batch_count=len(batches),
            )

            if index < len(batches):
                await self._sleep(self.settings.batch_delay_seconds)

        return results

    async def run(self) -> RunOutcome:
        """
        Execute the full run.

        Raises:
            ConfigurationError: Before any directory is created or file touched
        """
        validate_settings(self.settings)
        self.organizer.ensure_directories()

        jobs = discover_jobs(self.settings.resume_dir, self.settings.supported_extensions_list)
        if not jobs:
            logger.info("No resume files found in the directory.")
            return RunOutcome(no_files=True)

        logger.info(
            f"Found {len(jobs)} resume files, processing in batches of {self.settings.batch_size}",
            extra={"files": len(jobs), "batch_size": self.settings.batch_size},
        )

        results = await self.run_jobs(jobs)
        return RunOutcome(results=results, summary=summarize(results))

"""
Format dispatch for resume text extraction.

Each ``FileTypeEnum`` member maps to exactly one extraction function.
Decoder failures of any kind surface as ``DecodeError``.
"""

import asyncio
import logging

from core.exceptions import DecodeError
from extractors.pdf_extractor import extract_pdf
from extractors.word_extractor import extract_doc, extract_word
from models.enums import FileTypeEnum
from schemas.extraction import ResumeJob

logger = logging.getLogger(__name__)

EXTRACTORS = {
    FileTypeEnum.PDF: extract_pdf,
    FileTypeEnum.DOCX: extract_word,
    FileTypeEnum.DOC: extract_doc,
}


def extract_text_sync(job: ResumeJob) -> str:
    """Run the extractor registered for the job's file type."""
    extractor = EXTRACTORS[job.file_type]
    try:
        return extractor(job.path) or ""
    except Exception as e:
        logger.debug(f"Extraction failed for {job.file_name}: {e}")
        raise DecodeError(str(e) or type(e).__name__) from e


async def extract_text(job: ResumeJob) -> str:
    """
    Extract raw text without blocking the event loop.

    Decoders are synchronous, so they run in a worker thread while the
    other jobs of the batch keep going.
    """
    return await asyncio.to_thread(extract_text_sync, job)

"""
ResumeHarvest Test Suite Configuration
======================================

Shared pytest fixtures for the ResumeHarvest test suite: isolated settings
pointing at a temporary resume directory, a scripted completion client, and
helpers that write real PDF/DOCX resumes to disk.

Fixtures:
---------
    make_settings : callable
        Build a ``Settings`` instance rooted in ``tmp_path``.
    settings : Settings
        Default test settings (valid API key, no delays).
    fake_client : FakeCompletionClient
        Completion client returning scripted replies.
    no_sleep : AsyncMock
        Replacement for ``asyncio.sleep`` that records delays.
    make_pdf / make_docx : callable
        Write a resume document with the given lines of text.

Usage:
------
    def test_example(settings, fake_client):
        assert settings.batch_size == 100
"""
import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add src (and this directory, for the shared fakes) to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent))

from core.config import Settings  # noqa: E402
from fakes import RESUME_LINES, FakeCompletionClient  # noqa: E402


@pytest.fixture
def make_settings(tmp_path):
    """
    Build settings isolated from the environment and any local .env file.

    Returns:
        callable: ``make_settings(**overrides) -> Settings``
    """
    def _make(**overrides):
        resume_dir = tmp_path / "resumes"
        resume_dir.mkdir(exist_ok=True)
        values = {
            "openrouter_api_key": "sk-test-key",
            "resume_dir": str(resume_dir),
            "output_csv": str(tmp_path / "extracted_data.csv"),
            "success_dir": str(resume_dir / "success"),
            "failed_dir": str(resume_dir / "failed"),
            "delay_between_batches": 0,
            "retry_base_delay": 0.0,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def no_sleep():
    """Async sleep replacement; inspect ``await_args_list`` for delays."""
    return AsyncMock(return_value=None)


@pytest.fixture
def make_pdf():
    """
    Write a single-page PDF containing the given lines.

    Returns:
        callable: ``make_pdf(path, lines=RESUME_LINES) -> Path``
    """
    import fitz

    def _make(path, lines=None):
        doc = fitz.open()
        page = doc.new_page()
        y = 72
        for line in lines or RESUME_LINES:
            page.insert_text((72, y), line, fontsize=11)
            y += 16
        doc.save(str(path))
        doc.close()
        return Path(path)

    return _make


@pytest.fixture
def make_docx():
    """
    Write a DOCX with one paragraph per line.

    Returns:
        callable: ``make_docx(path, lines=RESUME_LINES) -> Path``
    """
    import docx

    def _make(path, lines=None):
        document = docx.Document()
        for line in lines or RESUME_LINES:
            document.add_paragraph(line)
        document.save(str(path))
        return Path(path)

    return _make

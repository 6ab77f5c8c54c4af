"""
End-to-End Tests
================

Real PDF/DOCX files on disk, real text extraction and file moves; only the
completion endpoint is faked. The CLI scenarios go through ``main.main``
with configuration taken from environment variables.

Running Tests:
--------------
    pytest tests/integration -v
"""
import csv
from unittest.mock import MagicMock, patch

import pytest

import main
from core.config import get_settings
from core.exceptions import ModelCallError
from fakes import FakeCompletionClient, VALID_REPLY
from pipeline.batch_pipeline import BatchPipeline
from services.llm_service import FieldExtractor
from services.report_service import ReportWriter

SMITH_LINES = [
    "John Smith",
    "Project Manager",
    "john.smith@example.org / 020 7946 0000",
    "10 Downing Lane, London",
    "Fifteen years of delivering infrastructure projects on time.",
]


class RoutingClient(FakeCompletionClient):
    """Always fails for John Smith's resume, answers normally otherwise."""

    async def complete(self, system, user):
        self.calls.append((system, user))
        if "John Smith" in user:
            raise ModelCallError("API returned 502: bad gateway")
        return VALID_REPLY


@pytest.fixture
def three_resumes(tmp_path, make_pdf, make_docx):
    resume_dir = tmp_path / "resumes"
    resume_dir.mkdir(exist_ok=True)
    make_pdf(resume_dir / "1_jane.pdf")
    (resume_dir / "2_corrupt.pdf").write_bytes(b"\x00\x01 definitely not a pdf " * 20)
    make_docx(resume_dir / "3_smith.docx", SMITH_LINES)
    return resume_dir


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at tmp_path through environment variables."""
    resume_dir = tmp_path / "resumes"
    resume_dir.mkdir(exist_ok=True)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OPENROUTER_API_KEY", "sk-test-key")
    monkeypatch.setenv("RESUME_DIR", str(resume_dir))
    monkeypatch.setenv("OUTPUT_CSV", str(tmp_path / "extracted_data.csv"))
    monkeypatch.setenv("SUCCESS_DIR", str(resume_dir / "success"))
    monkeypatch.setenv("FAILED_DIR", str(resume_dir / "failed"))
    monkeypatch.setenv("DELAY_BETWEEN_BATCHES", "0")
    monkeypatch.setenv("RETRY_BASE_DELAY", "0")
    get_settings.cache_clear()
    yield resume_dir
    get_settings.cache_clear()


class TestThreeFileScenario:
    @pytest.mark.asyncio
    async def test_pipeline_and_report(self, settings, three_resumes, tmp_path, no_sleep):
        client = RoutingClient()
        pipeline = BatchPipeline(settings, FieldExtractor.from_settings(settings, client), sleep=no_sleep)

        outcome = await pipeline.run()
        ReportWriter(settings.output_csv).write(outcome.results)

        jane, corrupt, smith = outcome.results
        assert jane.file_name == "1_jane.pdf"
        assert jane.error is None
        assert jane.email == "jane.doe@example.com"

        assert corrupt.file_name == "2_corrupt.pdf"
        assert corrupt.error
        assert not corrupt.has_data

        assert smith.file_name == "3_smith.docx"
        assert smith.error == "API returned 502: bad gateway"
        assert not smith.has_data
        smith_calls = [call for call in client.calls if "John Smith" in call[1]]
        assert len(smith_calls) == settings.max_retries

        assert (three_resumes / "success" / "1_jane.pdf").exists()
        assert (three_resumes / "failed" / "2_corrupt.pdf").exists()
        assert (three_resumes / "failed" / "3_smith.docx").exists()
        assert not any(p.is_file() for p in three_resumes.iterdir())

        with open(settings.output_csv, newline="", encoding="utf-8") as f:
            reader = csv.reader(f)
            header = next(reader)
            rows = list(reader)
        assert header == ["fileName", "name", "email", "phone", "address"]
        assert [row[0] for row in rows] == ["1_jane.pdf", "2_corrupt.pdf", "3_smith.docx"]

        assert outcome.summary.succeeded == 1
        assert outcome.summary.failed == 2


class TestCli:
    def test_full_run(self, cli_env, tmp_path, make_pdf, capsys):
        make_pdf(cli_env / "jane.pdf")

        with patch.object(main, "CompletionClient", lambda settings: FakeCompletionClient()):
            exit_code = main.main(["run"])

        assert exit_code == 0
        assert (tmp_path / "extracted_data.csv").exists()
        assert (cli_env / "success" / "jane.pdf").exists()
        assert "Data saved to" in capsys.readouterr().out

    def test_empty_directory(self, cli_env, tmp_path, capsys):
        exit_code = main.main(["run"])

        assert exit_code == 0
        assert not (tmp_path / "extracted_data.csv").exists()
        assert "No resume files found" in capsys.readouterr().out

    def test_placeholder_credential(self, cli_env, tmp_path, monkeypatch, make_pdf):
        monkeypatch.setenv("OPENROUTER_API_KEY", "your_api_key_here")
        make_pdf(cli_env / "jane.pdf")

        exit_code = main.main(["run"])

        assert exit_code == 1
        assert (cli_env / "jane.pdf").exists()
        assert not (cli_env / "success").exists()
        assert not (cli_env / "failed").exists()
        assert not (tmp_path / "extracted_data.csv").exists()

    def test_overrides_from_arguments(self, cli_env, tmp_path, make_pdf):
        make_pdf(cli_env / "jane.pdf")
        output = tmp_path / "custom.csv"

        with patch.object(main, "CompletionClient", lambda settings: FakeCompletionClient()):
            exit_code = main.main(["run", "--output", str(output), "--no-organize"])

        assert exit_code == 0
        assert output.exists()
        assert (cli_env / "jane.pdf").exists()

    @pytest.mark.parametrize("batch_size", ["0", "-1"])
    def test_invalid_batch_size_touches_nothing(self, cli_env, tmp_path, make_pdf, batch_size, capsys):
        make_pdf(cli_env / "jane.pdf")

        exit_code = main.main(["run", "--batch-size", batch_size])

        assert exit_code == 1
        assert "batch_size" in capsys.readouterr().out
        assert (cli_env / "jane.pdf").exists()
        assert not (cli_env / "success").exists()
        assert not (cli_env / "failed").exists()
        assert not (tmp_path / "extracted_data.csv").exists()

    def test_interrupt_exits_cleanly(self, cli_env, tmp_path, make_pdf):
        make_pdf(cli_env / "jane.pdf")

        with patch.object(main, "run_extraction", MagicMock(side_effect=KeyboardInterrupt)):
            exit_code = main.main(["run"])

        assert exit_code == 0
        assert not (tmp_path / "extracted_data.csv").exists()

    def test_setup_writes_env(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        answers = iter(["sk-live-key", "./cvs", "5", "openai/gpt-4o"])

        with patch("main.Prompt.ask", side_effect=lambda *a, **k: next(answers)):
            exit_code = main.main(["setup"])

        assert exit_code == 0
        env = (tmp_path / ".env").read_text()
        assert "OPENROUTER_API_KEY=sk-live-key" in env
        assert "BATCH_SIZE=5" in env
        assert (tmp_path / "cvs" / "success").is_dir()
        assert (tmp_path / "cvs" / "failed").is_dir()

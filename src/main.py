"""
ResumeHarvest - Resume Contact Extraction 📄
===========================================

Command-line entry point. Reads resumes from a directory, extracts name,
email, phone and address with an LLM, and writes them to a CSV file.

Commands:
---------
1. **run**: Process every resume in RESUME_DIR (default command).
2. **setup**: Create a ``.env`` file and the resume folders interactively.

Usage:
------
    $ python src/main.py run --input-dir ./resumes --output ./contacts.csv
    $ resume-harvest setup

Exit codes: 0 on completion (including "no files found") and on Ctrl+C,
1 on invalid configuration or an unexpected error.
"""

import argparse
import asyncio
import os
import sys
from typing import List, Optional

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeRemainingColumn
from rich.prompt import Confirm, Prompt
from rich.table import Table

from core.config import Settings, get_settings
from core.exceptions import ConfigurationError, ReportWriteError
from core.logging_config import get_logger, setup_logging
from models.enums import PipelineEventEnum
from pipeline.batch_pipeline import BatchPipeline, RunOutcome
from pipeline.events import PipelineEvent
from services.file_service import FileOrganizer
from services.llm_service import CompletionClient, FieldExtractor
from services.report_service import ReportWriter

logger = get_logger(__name__)
console = Console()

ENV_TEMPLATE = """# OpenRouter API Configuration
OPENROUTER_API_KEY={api_key}

# Processing Configuration
BATCH_SIZE={batch_size}
MAX_RETRIES=3
DELAY_BETWEEN_BATCHES=2000

# File Paths
RESUME_DIR={resume_dir}
OUTPUT_CSV=./extracted_data.csv
SUCCESS_DIR={resume_dir}/success
FAILED_DIR={resume_dir}/failed

# File Organization (set to false to disable automatic file moving)
ORGANIZE_FILES=true

# AI Model Configuration
AI_MODEL={model}
AI_BASE_URL=https://openrouter.ai/api/v1
"""


class ProgressRenderer:
    """Renders pipeline events as a rich progress bar and per-file lines."""

    def __init__(self, progress: Progress):
        self.progress = progress
        self.task_id = None

    def __call__(self, event: PipelineEvent) -> None:
        if self.task_id is None:
            self.task_id = self.progress.add_task("Progress", total=event.total)

        out = self.progress.console
        if event.kind == PipelineEventEnum.JOB_SUCCEEDED:
            if event.partial:
                out.print(f"[yellow]⚠ Partially completed:[/yellow] {event.file_name} (limited data extracted)")
            else:
                out.print(f"[green]✓ Completed:[/green] {event.file_name}")
        elif event.kind == PipelineEventEnum.JOB_FAILED:
            out.print(f"[red]✗ Failed:[/red] {event.file_name} - {event.error}")
        elif event.kind == PipelineEventEnum.BATCH_COMPLETED:
            out.print(f"[cyan]Batch {event.batch_index}/{event.batch_count} done[/cyan]")

        self.progress.update(self.task_id, completed=event.processed, total=event.total)


def print_summary(outcome: RunOutcome) -> None:
    summary = outcome.summary
    table = Table(title="📊 Summary")
    table.add_column("Total", justify="right")
    table.add_column("✓ Successful", justify="right", style="green")
    table.add_column("⚠ Partial", justify="right", style="yellow")
    table.add_column("✗ Failed", justify="right", style="red")
    table.add_row(str(summary.total), str(summary.succeeded), str(summary.partial), str(summary.failed))
    console.print(table)

    if summary.failures:
        console.print("\n[bold red]❌ Failed files:[/bold red]")
        for failure in summary.failures:
            console.print(f"   • {failure.file}: {failure.error}")


async def run_extraction(settings: Settings) -> RunOutcome:
    """Build the pipeline from settings and run it with a progress bar."""
    progress = Progress(
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TextColumn("Files"),
        TimeRemainingColumn(),
        console=console,
    )

    async with CompletionClient(settings) as client:
        pipeline = BatchPipeline(
            settings,
            FieldExtractor.from_settings(settings, client),
            organizer=FileOrganizer.from_settings(settings),
            listener=ProgressRenderer(progress),
        )
        with progress:
            return await pipeline.run()


def finish_run(settings: Settings, outcome: RunOutcome) -> None:
    """Write the CSV and print the summary."""
    if outcome.no_files:
        console.print("No resume files found in the directory.")
        return

    try:
        path = ReportWriter(settings.output_csv).write(outcome.results)
        console.print(f"\n✅ Successfully processed {outcome.summary.total} resumes")
        console.print(f"📄 Data saved to: {path}")
    except ReportWriteError as e:
        logger.error(str(e))

    print_summary(outcome)


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """
    Layer command-line options over the loaded settings.

    Raises:
        ConfigurationError: If an override fails settings validation
    """
    overrides = {}
    if args.input_dir:
        overrides["resume_dir"] = args.input_dir
    if args.output:
        overrides["output_csv"] = args.output
    if args.batch_size is not None:
        overrides["batch_size"] = args.batch_size
    if args.no_organize:
        overrides["organize_files"] = False
    if not overrides:
        return settings

    try:
        return Settings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid option: {problems}") from e


def command_run(args: argparse.Namespace) -> int:
    try:
        settings = apply_overrides(get_settings(), args)
    except ConfigurationError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        return 1

    setup_logging(
        level=settings.log_level,
        json_format=settings.log_json,
        log_file=settings.log_file,
        console_handler=None if settings.log_json else RichHandler(console=console, show_path=False),
    )

    console.print("🚀 Starting resume processing...\n")
    try:
        outcome = asyncio.run(run_extraction(settings))
    except ConfigurationError as e:
        console.print(f"[bold red]❌ {e}[/bold red]")
        return 1

    finish_run(settings, outcome)
    return 0


def command_setup(args: argparse.Namespace) -> int:
    """Interactive first-run configuration."""
    console.print("🚀 Resume Parser Setup\n")

    if os.path.exists(args.env_file):
        console.print(f"✅ {args.env_file} file already exists")
        if not Confirm.ask("Overwrite it?", default=False):
            return 0

    api_key = Prompt.ask("Enter your OpenRouter API Key (get one at https://openrouter.ai/)", default="")
    if not api_key.strip():
        console.print("⚠️  No API key provided. You can set it later in the .env file.")
        console.print("⚠️  The application will not work without a valid API key.\n")
        api_key = "your_openrouter_api_key_here"

    resume_dir = Prompt.ask("Resume directory", default="./resumes")
    batch_size = Prompt.ask("Batch size", default="10")
    model = Prompt.ask("AI model", default="openai/gpt-4o")

    with open(args.env_file, "w", encoding="utf-8") as f:
        f.write(ENV_TEMPLATE.format(
            api_key=api_key.strip(),
            batch_size=batch_size,
            resume_dir=resume_dir.rstrip("/"),
            model=model,
        ))
    console.print(f"✅ Created {args.env_file} file")

    for directory in (resume_dir, os.path.join(resume_dir, "success"), os.path.join(resume_dir, "failed")):
        os.makedirs(directory, exist_ok=True)
    console.print(f"✅ Created {resume_dir} with success/ and failed/ folders")
    console.print("\n🎉 Setup complete! Put resumes in the folder and run: resume-harvest run")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="resume-harvest",
        description="Extract contact details from PDF/DOC/DOCX resumes into a CSV file.",
    )
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser("run", help="Process all resumes in the input directory")
    run_parser.add_argument("--input-dir", help="Directory containing resumes (RESUME_DIR)")
    run_parser.add_argument("--output", help="CSV output path (OUTPUT_CSV)")
    run_parser.add_argument("--batch-size", type=int, help="Files processed concurrently (BATCH_SIZE)")
    run_parser.add_argument("--no-organize", action="store_true", help="Leave files in place")
    run_parser.set_defaults(handler=command_run)

    setup_parser = subparsers.add_parser("setup", help="Create a .env file interactively")
    setup_parser.add_argument("--env-file", default=".env")
    setup_parser.set_defaults(handler=command_setup)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        args = parser.parse_args(["run"])

    try:
        return args.handler(args)
    except KeyboardInterrupt:
        console.print("\n\n⚠️ Process interrupted by user")
        return 0
    except Exception as e:
        console.print(f"[bold red]Fatal error:[/bold red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())

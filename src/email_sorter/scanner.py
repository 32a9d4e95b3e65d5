"""Scan orchestration - finds records, classifies them, aggregates results."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from pathlib import Path

import structlog
from rich.markup import escape

from .config import ScoringConfig
from .constants import ATTACHMENTS_DIR, DEFAULT_REPORT_NAME, DEFAULT_WORKERS, RECORD_EXTENSION
from .display import console, create_progress, print_summary
from .models import Category, EmailRecord, ScanOutcome, SortReport, SortStats
from .parser import parse_record
from .report import generate_report, save_report
from .scorer import classify_record
from .stats import StatsAggregator

logger = structlog.get_logger()


def find_record_files(base_directory: Path) -> list[Path]:
    """List record files under ``base_directory`` in sorted order.

    Files inside an attachments folder are ignored. Raises if the directory
    does not exist or cannot be listed.
    """
    base_directory = Path(base_directory)
    if not base_directory.exists():
        raise FileNotFoundError(f"Directory not found: {base_directory}")
    if not base_directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {base_directory}")

    files = []
    for path in base_directory.rglob(f"*{RECORD_EXTENSION}"):
        if not path.is_file():
            continue
        if ATTACHMENTS_DIR in path.relative_to(base_directory).parts[:-1]:
            continue
        files.append(path)
    return sorted(files)


def analyze_file(
    file_path: Path,
    config: ScoringConfig,
    now: datetime | None = None,
) -> EmailRecord | None:
    """Read, parse, score and classify one record file.

    Returns None for files that are not classifiable records. Read errors
    propagate.
    """
    content = Path(file_path).read_text(encoding="utf-8")
    file_size = Path(file_path).stat().st_size

    parsed = parse_record(content, file_path, file_size=file_size, now=now)
    if parsed is None:
        return None
    return classify_record(parsed, config)


class EmailSorter:
    """Sorts every stored record under a directory into categories.

    Progress events are logged through structlog. Library callers should
    configure structlog first (for example with cli.configure_logging);
    unconfigured structlog prints every event to stdout.
    """

    def __init__(
        self,
        base_directory: Path,
        config: ScoringConfig | None = None,
        workers: int = DEFAULT_WORKERS,
    ) -> None:
        self.base_directory = Path(base_directory)
        self.config = config or ScoringConfig()
        self.workers = max(1, workers)
        self.aggregator = StatsAggregator()
        self.outcome = ScanOutcome()

    @property
    def stats(self) -> SortStats:
        return self.aggregator.stats

    @property
    def categories(self) -> dict[Category, list[EmailRecord]]:
        return self.aggregator.categories

    def sort_emails(self, show_progress: bool = True, now: datetime | None = None) -> ScanOutcome:
        """Classify all records and fold them into the statistics.

        Unreadable files are logged and counted; they do not stop the run.
        """
        now = now or datetime.now(timezone.utc)
        files = find_record_files(self.base_directory)
        self.outcome.scanned = len(files)
        logger.info("scan_started", directory=str(self.base_directory), files=len(files))

        if show_progress:
            console.print(f"Sorting emails in: [bold]{escape(str(self.base_directory))}[/bold]")

        results: dict[Path, EmailRecord | None] = {}

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            futures = {
                executor.submit(analyze_file, path, self.config, now): path
                for path in files
            }

            with create_progress("Classifying", disable=not show_progress) as progress:
                task = progress.add_task("classifying", total=len(files))
                for future in as_completed(futures):
                    path = futures[future]
                    try:
                        results[path] = future.result()
                    except (OSError, UnicodeDecodeError) as e:
                        logger.warning("record_read_failed", path=str(path), error=str(e))
                        self.outcome.errors += 1
                        self.outcome.failed_files.append(str(path))
                    progress.advance(task)

        # Fold in path order so per-category lists do not depend on scheduling
        for path in sorted(results):
            record = results[path]
            if record is None:
                self.outcome.skipped += 1
                continue
            self.aggregator.add(record)
            self.outcome.classified += 1

        self.outcome.failed_files.sort()
        logger.info(
            "scan_finished",
            classified=self.outcome.classified,
            skipped=self.outcome.skipped,
            errors=self.outcome.errors,
        )
        return self.outcome

    def generate_report(self) -> SortReport:
        return generate_report(self.aggregator, self.base_directory)

    def save_report(self, report: SortReport, output_name: str = DEFAULT_REPORT_NAME) -> Path:
        return save_report(report, self.base_directory, output_name)

    def print_summary(self) -> None:
        print_summary(self.aggregator, self.outcome)

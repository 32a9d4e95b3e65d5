"""Build sorting reports and write them to JSON or CSV."""

from __future__ import annotations

import csv
import json
from pathlib import Path

import structlog

from .constants import TOP_SENDERS_LIMIT, UNKNOWN_DATE
from .models import Category, EmailRecord, EmailSummary, SortReport
from .stats import StatsAggregator

logger = structlog.get_logger()

_RECOMMENDATION_TEMPLATES = {
    Category.DELETE: "{pct:.1f}% of emails can be deleted",
    Category.SUMMARIZE: "{pct:.1f}% of emails can be summarized",
    Category.KEEP: "{pct:.1f}% of emails should be kept in full",
}


def category_percentages(aggregator: StatsAggregator) -> dict[str, float]:
    """Percentage of the batch per category, rounded to one decimal place."""
    return {str(c): round(aggregator.percentage(c), 1) for c in Category}


def build_recommendations(aggregator: StatsAggregator) -> dict[str, str]:
    """One line of advice per category. Empty when nothing was classified."""
    if aggregator.stats.total_emails == 0:
        return {}
    return {
        str(category): template.format(pct=aggregator.percentage(category))
        for category, template in _RECOMMENDATION_TEMPLATES.items()
    }


def relative_path(path: Path, base_directory: Path) -> str:
    try:
        return str(path.relative_to(base_directory))
    except ValueError:
        return str(path)


def summarize_record(record: EmailRecord, base_directory: Path) -> EmailSummary:
    return EmailSummary(
        file=relative_path(record.file_path, base_directory),
        subject=record.subject,
        sender=record.sender,
        date=record.date.strftime("%Y-%m-%d") if record.date else UNKNOWN_DATE,
        score=record.score,
        email_type=record.email_type.label,
        size=record.file_size,
        attachments=record.attachment_count,
    )


def generate_report(aggregator: StatsAggregator, base_directory: Path) -> SortReport:
    """Turn aggregated statistics into a SortReport."""
    stats = aggregator.stats
    base_directory = Path(base_directory)

    records = {
        str(category): [summarize_record(r, base_directory) for r in emails]
        for category, emails in aggregator.categories.items()
        if emails
    }

    return SortReport(
        total_emails=stats.total_emails,
        categories=dict(stats.by_category),
        recommendations=build_recommendations(aggregator),
        by_type=dict(stats.by_type),
        by_sender=aggregator.top_senders(TOP_SENDERS_LIMIT),
        by_date=dict(sorted(stats.by_date.items())),
        records=records,
    )


def save_report(report: SortReport, base_directory: Path, output_name: str) -> Path:
    """Write the report as JSON under ``base_directory`` and return its path.

    Write failures propagate to the caller.
    """
    output_path = Path(base_directory) / output_name
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    logger.info("report_saved", path=str(output_path))
    return output_path


def export_records(
    aggregator: StatsAggregator,
    base_directory: Path,
    format: str,
    output_path: str,
) -> None:
    """Export every classified record with its category.

    Args:
        aggregator: Statistics holding the per-category record lists.
        base_directory: Scan root, used to shorten file paths.
        format: Output format, either 'csv' or 'json'.
        output_path: Path to write the output file.
    """
    rows = []
    for category, emails in aggregator.categories.items():
        for record in emails:
            row = summarize_record(record, Path(base_directory)).to_dict()
            row["category"] = str(category)
            rows.append(row)

    if format == "csv":
        with open(output_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(
                f,
                fieldnames=[
                    "file",
                    "category",
                    "subject",
                    "sender",
                    "date",
                    "score",
                    "type",
                    "size",
                    "attachments",
                ],
            )
            writer.writeheader()
            writer.writerows(rows)
    elif format == "json":
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2, ensure_ascii=False)
    else:
        raise ValueError(f"Unsupported export format: {format}")

    logger.info("records_exported", path=output_path, format=format, rows=len(rows))

"""Rich-based display functions for Email Sorter."""

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from .constants import SUMMARY_SENDERS_LIMIT, UNKNOWN_DATE
from .models import Category, EmailRecord, ScanOutcome
from .report import category_percentages
from .stats import StatsAggregator, ranked

console = Console()

_CATEGORY_COLORS = {
    Category.DELETE: "red",
    Category.SUMMARIZE: "yellow",
    Category.KEEP: "green",
}

_CATEGORY_LABELS = {
    Category.DELETE: "To delete",
    Category.SUMMARIZE: "To summarize",
    Category.KEEP: "To keep",
}


def create_progress(description: str, disable: bool = False) -> Progress:
    """Create a configured Rich Progress bar."""
    return Progress(
        SpinnerColumn(),
        TextColumn(f"[bold blue]{description}"),
        BarColumn(),
        MofNCompleteColumn(),
        TimeElapsedColumn(),
        console=console,
        disable=disable,
    )


def format_summary(aggregator: StatsAggregator) -> str:
    """Plain-text summary: totals, percentages, types and top senders."""
    stats = aggregator.stats
    lines = [f"Total emails analyzed: {stats.total_emails}"]
    for category in Category:
        lines.append(f"{_CATEGORY_LABELS[category]}: {aggregator.count(category)}")

    if stats.total_emails > 0:
        lines.append("")
        lines.append("Percentages:")
        for label, pct in category_percentages(aggregator).items():
            lines.append(f"   {label.capitalize()}: {pct:.1f}%")

    lines.append("")
    lines.append("Email types found:")
    for label, count in ranked(stats.by_type):
        lines.append(f"   {label}: {count}")

    lines.append("")
    lines.append("Top senders:")
    for sender, count in aggregator.top_senders(SUMMARY_SENDERS_LIMIT):
        lines.append(f"   {sender or '(no sender)'}: {count}")

    return "\n".join(lines)


def print_summary(aggregator: StatsAggregator, outcome: ScanOutcome | None = None) -> None:
    """Print the sorting summary panel."""
    body = format_summary(aggregator)
    if outcome is not None and (outcome.skipped or outcome.errors):
        body += f"\n\nSkipped files: {outcome.skipped}  |  Errors: {outcome.errors}"
    console.print(Panel(Text(body), title="Email Sorting Summary"))


def display_category_table(aggregator: StatsAggregator, category: Category, limit: int = 20) -> None:
    """Display the highest-scoring records of one category."""
    records = sorted(
        aggregator.categories[category],
        key=lambda r: (-r.score, str(r.file_path)),
    )[:limit]
    if not records:
        return

    color = _CATEGORY_COLORS[category]
    table = Table(title=f"{_CATEGORY_LABELS[category]} ({aggregator.count(category)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Subject")
    table.add_column("Sender")
    table.add_column("Date")
    table.add_column("Type")
    table.add_column("Score", justify="right")

    for idx, record in enumerate(records, start=1):
        table.add_row(
            str(idx),
            escape(record.subject),
            escape(record.sender),
            record.date.strftime("%Y-%m-%d") if record.date else UNKNOWN_DATE,
            record.email_type.label,
            f"[{color}]{record.score}[/{color}]",
        )

    console.print(table)


def display_record_detail(record: EmailRecord) -> None:
    """Display detailed information for a single classified record."""
    color = _CATEGORY_COLORS[record.category]
    age = f"{record.age_days} days" if record.age_days is not None else UNKNOWN_DATE

    lines = [
        f"[bold]File:[/bold] {escape(str(record.file_path))}",
        f"[bold]Subject:[/bold] {escape(record.subject)}",
        f"[bold]From:[/bold] {escape(record.sender)}",
        f"[bold]Date:[/bold] {record.date.isoformat() if record.date else UNKNOWN_DATE}",
        f"[bold]Age:[/bold] {age}",
        f"[bold]Type:[/bold] {record.email_type.label}",
        f"[bold]Body length:[/bold] {record.body_length}",
        f"[bold]Attachments:[/bold] {record.attachment_count}",
        f"[bold]Score:[/bold] [{color}]{record.score}[/{color}]",
        f"[bold]Category:[/bold] [{color}]{record.category}[/{color}]",
    ]
    if record.tags:
        lines.append(f"[bold]Tags:[/bold] {escape(', '.join(record.tags))}")

    console.print(Panel("\n".join(lines), title="Record Detail"))

"""Data models for Email Sorter."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path


class Category(Enum):
    """Disposition assigned to a stored email."""

    DELETE = "delete"
    SUMMARIZE = "summarize"
    KEEP = "keep"

    def __str__(self) -> str:
        return self.value


class EmailType(Enum):
    """Kind of email, used to look up a configured type weight."""

    NEWSLETTER = "newsletter"
    MAILING_LIST = "mailing_list"
    GROUP = "group"
    DIRECT = "direct"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return EMAIL_TYPE_LABELS[self]

    def __str__(self) -> str:
        return self.label


# Keys of ScoringConfig.type_weights. Every EmailType must have an entry.
EMAIL_TYPE_LABELS: dict[EmailType, str] = {
    EmailType.NEWSLETTER: "newsletter",
    EmailType.MAILING_LIST: "mailing_list",
    EmailType.GROUP: "group",
    EmailType.DIRECT: "direct",
    EmailType.UNKNOWN: "unknown",
}


@dataclass(frozen=True)
class EmailRecord:
    """A stored email after ingestion, scoring and classification."""

    file_path: Path
    file_size: int  # bytes on disk
    body_length: int  # characters
    attachment_count: int
    date: datetime | None
    age_days: int | None
    sender: str
    subject: str
    tags: list[str] = field(default_factory=list)
    email_type: EmailType = EmailType.DIRECT
    score: int = 0
    category: Category = Category.SUMMARIZE

    @property
    def has_attachments(self) -> bool:
        return self.attachment_count > 0

    @property
    def file_name(self) -> str:
        return self.file_path.name


@dataclass
class SortStats:
    """Running counters for one batch."""

    total_emails: int = 0
    by_category: dict[str, int] = field(
        default_factory=lambda: {str(c): 0 for c in Category}
    )
    by_type: dict[str, int] = field(default_factory=dict)
    by_sender: dict[str, int] = field(default_factory=dict)
    by_date: dict[str, int] = field(default_factory=dict)


@dataclass
class EmailSummary:
    """Compact per-record entry in a report."""

    file: str
    subject: str
    sender: str
    date: str
    score: int
    email_type: str
    size: int
    attachments: int

    def to_dict(self) -> dict:
        return {
            "file": self.file,
            "subject": self.subject,
            "sender": self.sender,
            "date": self.date,
            "score": self.score,
            "type": self.email_type,
            "size": self.size,
            "attachments": self.attachments,
        }


@dataclass
class SortReport:
    """Structured result of a sorting run."""

    total_emails: int
    categories: dict[str, int]
    recommendations: dict[str, str]
    by_type: dict[str, int]
    by_sender: list[tuple[str, int]]
    by_date: dict[str, int]
    records: dict[str, list[EmailSummary]] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "summary": {
                "total_emails": self.total_emails,
                "categories": dict(self.categories),
                "recommendations": dict(self.recommendations),
            },
            "details": {
                "by_type": dict(self.by_type),
                "by_sender": [[sender, count] for sender, count in self.by_sender],
                "by_date": dict(self.by_date),
            },
            "categories": {
                name: [s.to_dict() for s in summaries]
                for name, summaries in self.records.items()
            },
        }


@dataclass
class ScanOutcome:
    """Bookkeeping for a directory scan."""

    scanned: int = 0
    classified: int = 0
    skipped: int = 0
    errors: int = 0
    failed_files: list[str] = field(default_factory=list)

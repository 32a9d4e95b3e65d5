"""Shared fixtures for tests."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
import structlog

from email_sorter.config import ScoringConfig
from email_sorter.models import EmailRecord, EmailType

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def make_content(body: str = "Just checking in.", **fields) -> str:
    """Build a stored record with a YAML frontmatter block."""
    lines = ["---"]
    for key, value in fields.items():
        if isinstance(value, list):
            lines.append(f"{key}:")
            lines.extend(f"  - {item}" for item in value)
        else:
            lines.append(f"{key}: {value}")
    lines.append("---")
    lines.append("")
    lines.append(body)
    return "\n".join(lines)


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def config() -> ScoringConfig:
    return ScoringConfig()


@pytest.fixture
def plain_record() -> EmailRecord:
    """A direct email with no signals beyond its type weight."""
    return EmailRecord(
        file_path=Path("/mail/inbox/plain.md"),
        file_size=1200,
        body_length=1000,
        attachment_count=0,
        date=None,
        age_days=None,
        sender="bob@example.com",
        subject="Hello",
        email_type=EmailType.DIRECT,
    )


@pytest.fixture
def mail_dir(tmp_path: Path) -> Path:
    """A scan directory holding one delete, one keep and one summarize record."""
    inbox = tmp_path / "inbox"
    inbox.mkdir()
    (inbox / "spam.md").write_text(
        make_content(subject="Hello", **{"from": "spam@example.com"}),
        encoding="utf-8",
    )
    (inbox / "contract.md").write_text(
        make_content(subject="Signed contract", **{"from": "lawyer@firm.com"}, date="2024-05-20"),
        encoding="utf-8",
    )
    (tmp_path / "lunch.md").write_text(
        make_content(body="See you at noon", subject="Lunch", **{"from": "friend@example.com"}),
        encoding="utf-8",
    )
    return tmp_path


@pytest.fixture
def spam_config() -> ScoringConfig:
    return ScoringConfig(delete_senders=["spam@example.com"])

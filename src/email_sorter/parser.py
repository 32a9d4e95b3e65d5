"""Parse stored email records (YAML frontmatter + body) into EmailRecords."""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import NamedTuple

import structlog
import yaml

from .constants import (
    FALLBACK_DATE_FORMATS,
    FRONTMATTER_DELIMITER,
    MIN_CONTENT_LENGTH,
    NEWSLETTER_SUBJECT_MARKERS,
)
from .models import EmailRecord, EmailType

logger = structlog.get_logger()

_BOOL_TAG = "tag:yaml.org,2002:bool"
_TEXT_TAGS = {_BOOL_TAG, "tag:yaml.org,2002:timestamp"}


class FrontmatterLoader(yaml.SafeLoader):
    """SafeLoader that leaves dates and yes/no/on/off words as strings.

    Only true/false resolve to booleans, as in YAML 1.2. Dates are parsed by
    parse_date so that impossible calendar dates become None instead of
    raising inside the loader.
    """


FrontmatterLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in _TEXT_TAGS]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
FrontmatterLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class ParsedRecord(NamedTuple):
    """An ingested record together with the body text it was built from."""

    record: EmailRecord
    body: str


def extract_frontmatter(content: str) -> tuple[str, str] | None:
    """Split content into (frontmatter, body).

    The first line must start with the delimiter; the frontmatter runs up to
    the next line that is the delimiter on its own. Returns None when either
    delimiter is missing.
    """
    if not content.startswith(FRONTMATTER_DELIMITER):
        return None

    lines = content.splitlines()
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            return "\n".join(lines[1:i]), "\n".join(lines[i + 1:])
    return None


def parse_date(value: str) -> datetime | None:
    """Parse a date string into a timezone-aware datetime.

    RFC 3339 style timestamps with an offset are tried first, then
    FALLBACK_DATE_FORMATS, which are taken to be UTC.
    """
    if not value:
        return None

    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        parsed = None
    if parsed is not None and parsed.tzinfo is not None:
        return parsed

    for fmt in FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue
    return None


def compute_age_days(when: datetime, now: datetime | None = None) -> int:
    """Whole days from ``when`` to ``now``, truncated toward zero."""
    now = now or datetime.now(timezone.utc)
    return int((now - when) / timedelta(days=1))


def determine_email_type(subject: str) -> EmailType:
    """Classify an email type from its subject line."""
    subject_lower = subject.lower()
    if any(marker in subject_lower for marker in NEWSLETTER_SUBJECT_MARKERS):
        return EmailType.NEWSLETTER
    return EmailType.DIRECT


def _str_field(fm: dict, key: str) -> str:
    value = fm.get(key)
    return value if isinstance(value, str) else ""


def parse_record(
    content: str,
    file_path: Path,
    file_size: int | None = None,
    now: datetime | None = None,
) -> ParsedRecord | None:
    """Build an unscored EmailRecord from a record's text.

    Returns None, without raising, when the content is too short, has no
    frontmatter, or the frontmatter is not valid YAML.
    """
    if len(content.strip()) < MIN_CONTENT_LENGTH:
        logger.info("record_skipped", path=str(file_path), reason="empty")
        return None

    if not content.startswith(FRONTMATTER_DELIMITER):
        logger.info("record_skipped", path=str(file_path), reason="no_frontmatter")
        return None

    parts = extract_frontmatter(content)
    if parts is None:
        logger.info("record_skipped", path=str(file_path), reason="unterminated_frontmatter")
        return None
    frontmatter, body = parts

    try:
        fm = yaml.load(frontmatter, Loader=FrontmatterLoader)
    except (yaml.YAMLError, ValueError) as e:
        logger.info(
            "record_skipped",
            path=str(file_path),
            reason="invalid_frontmatter",
            error=str(e)[:100],
        )
        return None

    if not isinstance(fm, dict):
        fm = {}

    attachments = fm.get("attachments")
    attachment_count = len(attachments) if isinstance(attachments, list) else 0

    tags = fm.get("tags")
    tag_list = [t for t in tags if isinstance(t, str)] if isinstance(tags, list) else []

    parsed_date = parse_date(_str_field(fm, "date"))
    age_days = compute_age_days(parsed_date, now) if parsed_date is not None else None

    subject = _str_field(fm, "subject")

    if file_size is None:
        file_size = len(content.encode("utf-8"))

    record = EmailRecord(
        file_path=Path(file_path),
        file_size=file_size,
        body_length=len(body),
        attachment_count=attachment_count,
        date=parsed_date,
        age_days=age_days,
        sender=_str_field(fm, "from"),
        subject=subject,
        tags=tag_list,
        email_type=determine_email_type(subject),
    )
    return ParsedRecord(record=record, body=body)

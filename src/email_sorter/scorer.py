"""Scoring and classification of stored emails."""

from __future__ import annotations

from dataclasses import replace

from .config import ScoringConfig
from .constants import (
    KEEP_INDICATOR_TERMS,
    SCORE_DELETE,
    SCORE_KEEP,
    SCORING_IMPORTANT_TERMS,
    WEIGHT_ATTACHMENT_DROP,
    WEIGHT_ATTACHMENT_KEEP,
    WEIGHT_DELETE_KEYWORD,
    WEIGHT_DELETE_SENDER,
    WEIGHT_IMPORTANT_BODY,
    WEIGHT_KEEP_KEYWORD,
    WEIGHT_KEEP_SENDER,
    WEIGHT_LARGE,
    WEIGHT_OLD,
    WEIGHT_RECENT,
    WEIGHT_SMALL,
)
from .models import Category, EmailRecord, EmailType
from .parser import ParsedRecord


def _count_matches(text: str, needles: list[str]) -> int:
    return sum(1 for n in needles if n.lower() in text)


def _any_match(text: str, needles: list[str]) -> bool:
    return any(n.lower() in text for n in needles)


def calculate_score(record: EmailRecord, body: str, config: ScoringConfig) -> int:
    """Calculate a desirability score for a record.

    The score is an unbounded sum of independent signals: negative leans
    towards delete, positive towards keep.
    """
    total = config.type_weights.get(record.email_type.label, 0)

    if record.age_days is not None:
        if record.age_days <= config.recent_threshold_days:
            total += WEIGHT_RECENT
        elif record.age_days >= config.old_threshold_days:
            total += WEIGHT_OLD

    if record.body_length <= config.small_email_threshold:
        total += WEIGHT_SMALL
    elif record.body_length >= config.large_email_threshold:
        total += WEIGHT_LARGE

    if record.has_attachments:
        total += WEIGHT_ATTACHMENT_KEEP if config.keep_with_attachments else WEIGHT_ATTACHMENT_DROP

    subject_lower = record.subject.lower()
    total += WEIGHT_DELETE_KEYWORD * _count_matches(subject_lower, config.delete_keywords)
    total += WEIGHT_KEEP_KEYWORD * _count_matches(subject_lower, config.keep_keywords)

    sender_lower = record.sender.lower()
    if _any_match(sender_lower, config.delete_senders):
        total += WEIGHT_DELETE_SENDER
    if _any_match(sender_lower, config.keep_senders):
        total += WEIGHT_KEEP_SENDER

    if _any_match(body.lower(), SCORING_IMPORTANT_TERMS):
        total += WEIGHT_IMPORTANT_BODY

    return total


def has_delete_indicators(record: EmailRecord, config: ScoringConfig) -> bool:
    return (
        record.email_type is EmailType.NEWSLETTER
        or _any_match(record.subject.lower(), config.delete_keywords)
        or _any_match(record.sender.lower(), config.delete_senders)
    )


def has_keep_indicators(record: EmailRecord, body: str, config: ScoringConfig) -> bool:
    return (
        _any_match(record.subject.lower(), config.keep_keywords)
        or _any_match(record.sender.lower(), config.keep_senders)
        or (record.has_attachments and config.keep_with_attachments)
        or _any_match(body.lower(), KEEP_INDICATOR_TERMS)
    )


def determine_category(record: EmailRecord, body: str, config: ScoringConfig) -> Category:
    """Assign a category to a scored record.

    Order matters: whitelist, then keep indicators, then delete indicators
    or a low score, then a high score or long body, else summarize.
    """
    if config.is_whitelisted(record.sender):
        return Category.KEEP

    if has_keep_indicators(record, body, config):
        return Category.KEEP
    if has_delete_indicators(record, config) or record.score <= SCORE_DELETE:
        return Category.DELETE
    if record.score >= SCORE_KEEP or record.body_length > config.summarize_max_length:
        return Category.KEEP
    return Category.SUMMARIZE


def classify_record(parsed: ParsedRecord, config: ScoringConfig) -> EmailRecord:
    """Score and categorize a parsed record, returning the completed record."""
    scored = replace(parsed.record, score=calculate_score(parsed.record, parsed.body, config))
    return replace(scored, category=determine_category(scored, parsed.body, config))

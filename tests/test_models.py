"""Tests for the data models."""

from email_sorter.models import EMAIL_TYPE_LABELS, Category, EmailType


def test_category_display():
    assert str(Category.DELETE) == "delete"
    assert str(Category.SUMMARIZE) == "summarize"
    assert str(Category.KEEP) == "keep"


def test_every_email_type_has_a_label():
    assert set(EMAIL_TYPE_LABELS) == set(EmailType)


def test_email_type_labels_match_weight_keys(config):
    assert {t.label for t in EmailType} == set(config.type_weights)
    assert EmailType.MAILING_LIST.label == "mailing_list"
    assert str(EmailType.DIRECT) == "direct"


def test_has_attachments(plain_record):
    assert plain_record.has_attachments is False
    assert plain_record.file_name == "plain.md"

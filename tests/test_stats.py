"""Tests for statistics aggregation."""

from dataclasses import replace
from datetime import datetime, timezone

from email_sorter.models import Category, EmailType
from email_sorter.stats import StatsAggregator, ranked


def test_empty_aggregator_has_all_categories():
    agg = StatsAggregator()
    assert agg.stats.total_emails == 0
    assert agg.stats.by_category == {"delete": 0, "summarize": 0, "keep": 0}
    assert agg.percentage(Category.KEEP) == 0.0
    assert agg.top_senders(10) == []


def test_add_counts_buckets(plain_record):
    agg = StatsAggregator()
    agg.add(replace(plain_record, category=Category.KEEP, date=datetime(2024, 3, 9, tzinfo=timezone.utc)))
    agg.add(replace(plain_record, category=Category.DELETE, email_type=EmailType.NEWSLETTER))
    agg.add(replace(plain_record, sender="carol@example.com", date=datetime(2024, 3, 30, tzinfo=timezone.utc)))

    stats = agg.stats
    assert stats.total_emails == 3
    assert stats.by_category == {"delete": 1, "summarize": 1, "keep": 1}
    assert stats.by_type == {"direct": 2, "newsletter": 1}
    assert stats.by_sender == {"bob@example.com": 2, "carol@example.com": 1}
    # undated records are not bucketed by month
    assert stats.by_date == {"2024-03": 2}
    assert len(agg.categories[Category.KEEP]) == 1
    assert agg.count(Category.SUMMARIZE) == 1


def test_percentages_sum_to_100(plain_record):
    agg = StatsAggregator()
    agg.add_all(
        [
            replace(plain_record, category=Category.DELETE),
            replace(plain_record, category=Category.KEEP),
            replace(plain_record, category=Category.SUMMARIZE),
        ]
    )
    total = sum(agg.percentage(c) for c in Category)
    assert abs(total - 100.0) < 1e-9


def test_ranked_tie_break():
    counts = {"zed@x.com": 2, "amy@x.com": 2, "bob@x.com": 5, "cat@x.com": 1}
    assert ranked(counts) == [
        ("bob@x.com", 5),
        ("amy@x.com", 2),
        ("zed@x.com", 2),
        ("cat@x.com", 1),
    ]
    assert ranked(counts, 2) == [("bob@x.com", 5), ("amy@x.com", 2)]


def test_top_senders_limited_and_sorted(plain_record):
    agg = StatsAggregator()
    for i in range(15):
        for _ in range(i + 1):
            agg.add(replace(plain_record, sender=f"sender{i:02d}@example.com"))

    top = agg.top_senders(10)
    assert len(top) == 10
    counts = [count for _, count in top]
    assert counts == sorted(counts, reverse=True)
    assert top[0] == ("sender14@example.com", 15)


def test_fold_order_does_not_change_counts(plain_record):
    records = [
        replace(plain_record, sender=f"s{i % 3}@x.com", category=list(Category)[i % 3])
        for i in range(9)
    ]
    forward = StatsAggregator()
    forward.add_all(records)
    backward = StatsAggregator()
    backward.add_all(reversed(records))
    assert forward.stats == backward.stats

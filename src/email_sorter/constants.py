"""Constants for Email Sorter."""

from pathlib import Path

# --- Config paths ---
CONFIG_DIR = Path.home() / ".email-sorter"
SORT_CONFIG_PATH = CONFIG_DIR / "sort_config.json"
DEFAULT_REPORT_NAME = "email_sort_report.json"

# --- Stored record format ---
FRONTMATTER_DELIMITER = "---"
MIN_CONTENT_LENGTH = 10  # trimmed characters
RECORD_EXTENSION = ".md"
ATTACHMENTS_DIR = "attachments"

# Tried in order after RFC 3339; all are read as UTC
FALLBACK_DATE_FORMATS = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%d/%m/%Y",
    "%m/%d/%Y",
]

# --- Email type detection ---
NEWSLETTER_SUBJECT_MARKERS = ["newsletter", "bulletin", "digest"]

# --- Default scoring config ---
DEFAULT_DELETE_KEYWORDS = [
    "newsletter",
    "bulletin",
    "digest",
    "promotion",
    "offer",
    "coupon",
    "sale",
    "unsubscribe",
    "marketing",
    "advertisement",
]

DEFAULT_KEEP_KEYWORDS = [
    "contract",
    "invoice",
    "legal",
    "urgent",
    "important",
    "confidential",
]

DEFAULT_SUMMARIZE_MAX_LENGTH = 5000
DEFAULT_RECENT_THRESHOLD_DAYS = 30
DEFAULT_OLD_THRESHOLD_DAYS = 365
DEFAULT_SMALL_EMAIL_THRESHOLD = 500
DEFAULT_LARGE_EMAIL_THRESHOLD = 10000

DEFAULT_TYPE_WEIGHTS = {
    "newsletter": -2,
    "mailing_list": -1,
    "group": 0,
    "direct": 1,
    "unknown": 0,
}

# --- Scoring weights ---
WEIGHT_RECENT = 2
WEIGHT_OLD = -1
WEIGHT_SMALL = -1
WEIGHT_LARGE = 1
WEIGHT_ATTACHMENT_KEEP = 2
WEIGHT_ATTACHMENT_DROP = -1
WEIGHT_DELETE_KEYWORD = -1  # per matching keyword
WEIGHT_KEEP_KEYWORD = 2  # per matching keyword
WEIGHT_DELETE_SENDER = -3
WEIGHT_KEEP_SENDER = 3
WEIGHT_IMPORTANT_BODY = 2

# --- Category thresholds ---
SCORE_DELETE = -2  # at or below
SCORE_KEEP = 2  # at or above

# Body terms awarding WEIGHT_IMPORTANT_BODY once
SCORING_IMPORTANT_TERMS = [
    "contract",
    "invoice",
    "legal",
    "urgent",
    "important",
    "confidential",
    "agreement",
    "signature",
    "payment",
]

# Body terms that force Keep in the classifier.
# Deliberately not the same list as SCORING_IMPORTANT_TERMS.
KEEP_INDICATOR_TERMS = [
    "contract",
    "invoice",
    "legal",
    "urgent",
    "important",
]

# --- Reporting ---
TOP_SENDERS_LIMIT = 10
SUMMARY_SENDERS_LIMIT = 5
UNKNOWN_DATE = "Unknown"

# --- Scanning ---
DEFAULT_WORKERS = 4

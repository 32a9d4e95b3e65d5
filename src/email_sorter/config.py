"""Scoring configuration: defaults, merging, and JSON persistence."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import structlog

from . import constants
from .constants import (
    DEFAULT_DELETE_KEYWORDS,
    DEFAULT_KEEP_KEYWORDS,
    DEFAULT_LARGE_EMAIL_THRESHOLD,
    DEFAULT_OLD_THRESHOLD_DAYS,
    DEFAULT_RECENT_THRESHOLD_DAYS,
    DEFAULT_SMALL_EMAIL_THRESHOLD,
    DEFAULT_SUMMARIZE_MAX_LENGTH,
    DEFAULT_TYPE_WEIGHTS,
)

logger = structlog.get_logger()


class ConfigError(Exception):
    """Raised when a scoring config file cannot be read or has a bad shape."""


@dataclass(frozen=True)
class ScoringConfig:
    """Options that drive scoring and classification for one run."""

    delete_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_DELETE_KEYWORDS))
    delete_senders: list[str] = field(default_factory=list)
    delete_subjects: list[str] = field(default_factory=list)  # reserved

    summarize_max_length: int = DEFAULT_SUMMARIZE_MAX_LENGTH
    summarize_keywords: list[str] = field(default_factory=list)  # reserved

    keep_keywords: list[str] = field(default_factory=lambda: list(DEFAULT_KEEP_KEYWORDS))
    keep_senders: list[str] = field(default_factory=list)
    keep_subjects: list[str] = field(default_factory=list)  # reserved

    whitelist: list[str] = field(default_factory=list)

    recent_threshold_days: int = DEFAULT_RECENT_THRESHOLD_DAYS
    old_threshold_days: int = DEFAULT_OLD_THRESHOLD_DAYS

    small_email_threshold: int = DEFAULT_SMALL_EMAIL_THRESHOLD
    large_email_threshold: int = DEFAULT_LARGE_EMAIL_THRESHOLD

    keep_with_attachments: bool = True

    type_weights: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_TYPE_WEIGHTS))

    def is_whitelisted(self, sender: str) -> bool:
        """Check a sender against the whitelist.

        Entries match case-insensitively in three forms:
          "boss@client.com" -> exact address
          "@company.com"    -> any sender ending with the domain
          "john@"           -> any sender starting with the local part
        """
        if not sender:
            return False

        sender_lower = sender.lower()
        for entry in self.whitelist:
            entry_lower = entry.lower()
            if sender_lower == entry_lower:
                return True
            if entry_lower.startswith("@") and sender_lower.endswith(entry_lower):
                return True
            if entry_lower.endswith("@") and sender_lower.startswith(entry_lower):
                return True
        return False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


_LIST_FIELDS = {
    "delete_keywords",
    "delete_senders",
    "delete_subjects",
    "summarize_keywords",
    "keep_keywords",
    "keep_senders",
    "keep_subjects",
    "whitelist",
}
_INT_FIELDS = {
    "summarize_max_length",
    "recent_threshold_days",
    "old_threshold_days",
    "small_email_threshold",
    "large_email_threshold",
}


def _check_value(name: str, value: Any) -> None:
    """Raise ConfigError if an override value has the wrong shape."""
    if name in _LIST_FIELDS:
        if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
            raise ConfigError(f"'{name}' must be a list of strings")
    elif name in _INT_FIELDS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"'{name}' must be an integer")
    elif name == "keep_with_attachments":
        if not isinstance(value, bool):
            raise ConfigError(f"'{name}' must be true or false")
    elif name == "type_weights":
        if not isinstance(value, dict) or not all(
            isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool)
            for k, v in value.items()
        ):
            raise ConfigError(f"'{name}' must map type labels to integers")


def merge_config(base: ScoringConfig, overrides: dict[str, Any]) -> ScoringConfig:
    """Return a new config with ``overrides`` applied on top of ``base``.

    Precedence is override > base > dataclass default. Keys that are missing,
    set to None, or not config fields fall through to the base value.
    ``type_weights`` is merged key by key rather than replaced.
    """
    known = {f.name for f in fields(ScoringConfig)}
    changes: dict[str, Any] = {}

    for name, value in overrides.items():
        if name not in known or value is None:
            continue
        _check_value(name, value)
        if name == "type_weights":
            value = {**base.type_weights, **value}
        elif name in _LIST_FIELDS:
            value = list(value)
        changes[name] = value

    return replace(base, **changes)


def load_config(path: Path | None = None) -> ScoringConfig:
    """Load a scoring config from a JSON file.

    A missing file yields the defaults. Present fields override defaults.
    """
    config_path = Path(path) if path is not None else constants.SORT_CONFIG_PATH

    if not config_path.exists():
        logger.info("config_loaded", path=str(config_path), defaults=True)
        return ScoringConfig()

    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a JSON object")

    config = merge_config(ScoringConfig(), data)
    logger.info("config_loaded", path=str(config_path), defaults=False)
    return config


def save_config(config: ScoringConfig, path: Path | None = None) -> Path:
    """Write a scoring config as pretty-printed JSON and return its path."""
    config_path = Path(path) if path is not None else constants.SORT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    return config_path

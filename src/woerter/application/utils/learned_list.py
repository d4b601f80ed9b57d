"""Parsing of exported "learned" word lists for the legacy migration."""

from typing import Any

import yaml

_LIST_KEYS = ("learned", "learned_items", "learnedWords")


def _from_yaml(data: Any) -> list[str] | None:
    if isinstance(data, list):
        return [str(item).strip() for item in data if item is not None]
    if isinstance(data, dict):
        for key in _LIST_KEYS:
            if key in data and isinstance(data[key], list):
                return _from_yaml(data[key])
    return None


def parse_learned_list(text: str) -> list[str]:
    """
    Extract item keys from a learned-list export.

    Accepts a YAML/JSON sequence, a mapping holding the sequence under
    "learned", "learned_items" or "learnedWords", or plain text with one key
    per line (blank lines and # comments ignored). Duplicates are dropped,
    first occurrence wins.
    """
    keys: list[str] | None
    try:
        keys = _from_yaml(yaml.safe_load(text))
    except yaml.YAMLError:
        keys = None

    if keys is None:
        keys = [
            line.strip()
            for line in text.splitlines()
            if line.strip() and not line.strip().startswith("#")
        ]

    return list(dict.fromkeys(k for k in keys if k))

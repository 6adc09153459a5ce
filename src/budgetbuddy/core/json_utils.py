#!/usr/bin/env python3
"""
JSON Utilities Module

Centralized JSON reading and writing with consistent formatting. Store
documents hold native datetime timestamps, so these helpers tag them on the
way out and restore them on the way in.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any

TIMESTAMP_TAG = "__timestamp__"


def encode_timestamps(data: Any) -> Any:
    """Recursively replace datetime values with tagged ISO strings."""
    if isinstance(data, datetime):
        return {TIMESTAMP_TAG: data.isoformat()}
    if isinstance(data, dict):
        return {key: encode_timestamps(value) for key, value in data.items()}
    if isinstance(data, list):
        return [encode_timestamps(item) for item in data]
    return data


def decode_timestamps(data: Any) -> Any:
    """Recursively restore tagged ISO strings to datetime values."""
    if isinstance(data, dict):
        if set(data) == {TIMESTAMP_TAG}:
            return datetime.fromisoformat(data[TIMESTAMP_TAG])
        return {key: decode_timestamps(value) for key, value in data.items()}
    if isinstance(data, list):
        return [decode_timestamps(item) for item in data]
    return data


def write_json(filepath: str | Path, data: Any, ensure_ascii: bool = False, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file
        data: Data to write to the file
        ensure_ascii: If True, escape non-ASCII characters (default: False)
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(encode_timestamps(data), f, indent=2, ensure_ascii=ensure_ascii, sort_keys=sort_keys)


def read_json(filepath: str | Path) -> Any:
    """
    Read data from a JSON file.

    Args:
        filepath: Path to the JSON file

    Returns:
        The parsed JSON data with timestamps restored
    """
    with open(filepath, encoding="utf-8") as f:
        return decode_timestamps(json.load(f))


def format_json(data: Any, sort_keys: bool = False) -> str:
    """
    Format data as a pretty-printed JSON string.

    Non-JSON values (dates, Money, enums) fall back to str().
    """
    return json.dumps(encode_timestamps(data), indent=2, ensure_ascii=False, sort_keys=sort_keys, default=str)

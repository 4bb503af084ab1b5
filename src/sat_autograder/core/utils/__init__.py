"""
Utils Package

Serialization and file helpers.
"""

from .serialization import (
    serialize_report,
    deserialize_report,
    serialize_submission,
    deserialize_submission,
    serialize_key,
    deserialize_key,
    save_report_json,
    load_report_json,
    load_named_report_json,
)

__all__ = [
    "serialize_report",
    "deserialize_report",
    "serialize_submission",
    "deserialize_submission",
    "serialize_key",
    "deserialize_key",
    "save_report_json",
    "load_report_json",
    "load_named_report_json",
]

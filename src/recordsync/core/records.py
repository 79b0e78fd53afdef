"""Helpers for preparing local records before they go over the wire."""

from typing import Any, Dict, Iterable

# Local bookkeeping fields that are never sent to the server.
RECORD_FIELDS_TO_CLEAN = ("_status", "last_modified")


def clean_record(record: Dict[str, Any], exclude_fields: Iterable[str] = RECORD_FIELDS_TO_CLEAN) -> Dict[str, Any]:
    """Return a copy of ``record`` without the excluded fields.
    
    Key order of the surviving fields follows the input. The input mapping is
    left untouched.
    """
    excluded = set(exclude_fields)
    return {key: value for key, value in record.items() if key not in excluded}


def is_deletion(record: Dict[str, Any]) -> bool:
    """Whether a local record is a tombstone waiting to be pushed."""
    return record.get("_status") == "deleted"

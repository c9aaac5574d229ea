"""
CLIENT-SIDE FILTER ENGINE

Purpose:
- Derive the distinct values offered by each filter dropdown
- Narrow a loaded list by several criteria at once (logical AND)

Rules:
- Pure functions, no I/O
- Source records are never mutated
- Missing nested fields count as "no value", never an error
- Equality is exact: case-sensitive and type-sensitive
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

# A criterion holding UNSET (or "") places no constraint on the records.
UNSET = None

_MISSING = object()


def get_path(record: Any, field_path: str, default: Any = None) -> Any:
    """
    Read a dot-addressed field such as "address.state".

    Any missing hop or non-mapping intermediate returns `default`.
    """
    current = record
    for part in field_path.split("."):
        if not isinstance(current, Mapping):
            return default
        current = current.get(part, _MISSING)
        if current is _MISSING:
            return default
    return current


def is_unset(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def distinct_values(records: Iterable[Mapping], field_path: str) -> List[Any]:
    """
    Unique, non-empty values found at `field_path`, in first-seen order.
    """
    seen = []
    for record in records:
        value = get_path(record, field_path)
        if is_unset(value):
            continue
        # list membership keeps unhashable values and True/1 apart
        if any(value == s and type(value) is type(s) for s in seen):
            continue
        seen.append(value)
    return seen


def filter_options(records: Sequence[Mapping], field_paths: Iterable[str]) -> Dict[str, List[Any]]:
    """Distinct values for every filterable field, keyed by field path."""
    return {path: distinct_values(records, path) for path in field_paths}


def _matches(record: Mapping, field_path: str, expected: Any) -> bool:
    actual = get_path(record, field_path, _MISSING)
    if actual is _MISSING:
        return False
    return type(actual) is type(expected) and actual == expected


def apply_filters(records: Sequence[Mapping], criteria: Optional[Mapping[str, Any]]) -> List[Mapping]:
    """
    Return the records matching every set criterion, preserving order.

    Args:
        records: Loaded records (read-only snapshot)
        criteria: field path -> required value, UNSET/"" meaning no constraint

    Returns:
        A new list; with no set criteria it holds every record in order.
    """
    active = {
        path: value
        for path, value in (criteria or {}).items()
        if not is_unset(value)
    }
    if not active:
        return list(records)

    return [
        record
        for record in records
        if all(_matches(record, path, value) for path, value in active.items())
    ]


# ==================================================
# UI BOUNDARY CONVERSION
# ==================================================

_TRUE_STRINGS = {"true"}
_FALSE_STRINGS = {"false"}


def parse_choice(value: Any, true_label: str = "yes", false_label: str = "no") -> Optional[bool]:
    """
    Convert a select-box choice into the canonical boolean criterion.

    "claimed"/"unclaimed", "yes"/"no" and "true"/"false" style labels map
    to True/False; an empty or unknown choice maps to UNSET.
    """
    if isinstance(value, bool):
        return value
    if not isinstance(value, str):
        return UNSET

    choice = value.strip().lower()
    if choice == true_label.lower() or choice in _TRUE_STRINGS:
        return True
    if choice == false_label.lower() or choice in _FALSE_STRINGS:
        return False
    return UNSET


def records_to_frame(records: Sequence[Mapping], columns: Mapping[str, str]) -> pd.DataFrame:
    """
    Flatten records into a DataFrame for table display.

    Args:
        records: Filtered records
        columns: column label -> dotted field path
    """
    rows = [
        {label: get_path(record, path) for label, path in columns.items()}
        for record in records
    ]
    return pd.DataFrame(rows, columns=list(columns.keys()))

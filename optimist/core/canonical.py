"""
Canonical serialization for actions, logs and composite state.

All JSON output (CLI, determinism checks) goes through these functions so
that the same state always serializes to the same bytes.
"""

import hashlib
import json
from enum import Enum
from typing import Any


def canonicalize(obj: Any) -> Any:
    """
    Convert arbitrary nested values to canonical form.

    Rules:
    - objects exposing to_dict() are converted first
    - dict keys sorted alphabetically (as strings)
    - tuples converted to lists
    - enums replaced by their value
    """
    if isinstance(obj, Enum):
        return obj.value
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return canonicalize(obj.to_dict())
    if hasattr(obj, "to_list") and callable(obj.to_list):
        return canonicalize(obj.to_list())
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for hashing.

    Returns:
        UTF-8 encoded JSON bytes
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    """Deterministic JSON string (for display or storage)."""
    return canonical_json_bytes(obj).decode("utf-8")


def state_hash(obj: Any) -> str:
    """SHA-256 of the canonical JSON bytes, as hex."""
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()

"""
JSONL action source.

Each non-blank line is one action:
    {"type": "SET", "payload": 5, "transaction": {"kind": "BEGIN", "id": 1}}
"""

import json
from typing import Iterator

from ..core.actions import Action
from ..core.errors import InvalidActionError


def read_actions(path: str) -> Iterator[Action]:
    """
    Read actions from a JSONL file.

    Raises:
        FileNotFoundError: If path does not exist
        InvalidActionError: If a line is not valid JSON or not a valid action
    """
    with open(path, "r", encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                data = json.loads(line)
            except ValueError as ex:
                raise InvalidActionError(f"line {lineno}: invalid JSON: {ex}") from ex
            try:
                yield Action.from_dict(data)
            except InvalidActionError as ex:
                raise InvalidActionError(f"line {lineno}: {ex}") from ex

"""JSONL input/output for responses and resolved question states."""

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from formlogic.registry.models import Response


def read_jsonl(path: Path | str) -> Iterator[dict[str, Any]]:
    """Read a JSONL file and yield each record.

    Args:
        path: Path to the JSONL file.

    Yields:
        Each parsed JSON record.
    """
    with open(path) as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"Invalid JSON in {path} on line {line_num}: {e}") from e


def write_jsonl(path: Path | str, records: Iterator[dict[str, Any]] | list[dict[str, Any]]) -> int:
    """Write records to a JSONL file.

    Returns:
        Number of records written.
    """
    count = 0
    with open(path, "w") as f:
        for record in records:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")
            count += 1
    return count


def load_responses(path: Path | str) -> dict[str, Response]:
    """Load response records from JSONL, keyed by question_id.

    Later records for the same question replace earlier ones.

    Raises:
        ValueError: If a record has no question_id or fails validation.
    """
    responses: dict[str, Response] = {}
    for line_num, record in enumerate(read_jsonl(path), 1):
        try:
            response = Response.model_validate(record)
        except ValidationError as e:
            raise ValueError(f"Invalid response record {line_num}: {e}") from e
        if not response.question_id:
            raise ValueError(f"Response record {line_num} has no question_id")
        responses[response.question_id] = response
    return responses

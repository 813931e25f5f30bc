"""Tests for JSONL input/output."""

import json
from pathlib import Path

import pytest

from formlogic.io import load_responses, read_jsonl, write_jsonl


def write_lines(path: Path, records: list) -> Path:
    path.write_text("\n".join(json.dumps(r) for r in records) + "\n")
    return path


class TestJsonl:
    """Tests for read_jsonl / write_jsonl."""

    def test_write_then_read(self, tmp_path: Path) -> None:
        path = tmp_path / "out.jsonl"
        count = write_jsonl(path, [{"question_id": "q1", "visible": True}, {"question_id": "q2", "visible": False}])

        assert count == 2
        assert list(read_jsonl(path))[1] == {"question_id": "q2", "visible": False}

    def test_blank_lines_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text('{"a": 1}\n\n   \n{"a": 2}\n')
        assert [r["a"] for r in read_jsonl(path)] == [1, 2]

    def test_invalid_line(self, tmp_path: Path) -> None:
        path = tmp_path / "in.jsonl"
        path.write_text('{"a": 1}\nnot json\n')
        with pytest.raises(ValueError, match="line 2"):
            list(read_jsonl(path))


class TestLoadResponses:
    """Tests for load_responses."""

    def test_keyed_by_question_id(self, tmp_path: Path) -> None:
        path = write_lines(tmp_path / "responses.jsonl", [
            {"question_id": "age", "value": 70},
            {"question_id": "skills", "value": ["react", "python"]},
        ])

        responses = load_responses(path)
        assert set(responses) == {"age", "skills"}
        assert responses["age"].value == 70
        assert responses["skills"].value == ["react", "python"]

    def test_later_record_wins(self, tmp_path: Path) -> None:
        path = write_lines(tmp_path / "responses.jsonl", [
            {"question_id": "age", "value": 30},
            {"question_id": "age", "value": 31},
        ])
        assert load_responses(path)["age"].value == 31

    def test_missing_question_id(self, tmp_path: Path) -> None:
        path = write_lines(tmp_path / "responses.jsonl", [{"value": 1}])
        with pytest.raises(ValueError, match="no question_id"):
            load_responses(path)

    def test_invalid_record(self, tmp_path: Path) -> None:
        path = write_lines(tmp_path / "responses.jsonl", [{"question_id": "q1", "valid": "sometimes"}])
        with pytest.raises(ValueError, match="Invalid response record 1"):
            load_responses(path)

"""Tests for index persistence."""

import json

import pytest

from qbank.errors import IndexFormatError
from qbank.pipeline.index import build_index
from qbank.pipeline.loader import load_corpus
from qbank.storage.index_store import load_index, save_index


@pytest.fixture
def index(corpus_dir, tokenizer):
    return build_index(load_corpus(corpus_dir), tokenizer)


class TestIndexStore:
    """Test saving and loading the JSON snapshot."""

    def test_save_and_load(self, index, tmp_path):
        path = save_index(index, tmp_path / "cache" / "index.json")

        loaded = load_index(path)

        assert loaded.signature == index.signature
        assert dict(loaded.postings) == dict(index.postings)
        assert list(loaded.records) == list(index.records)
        assert loaded.get("devops.md#docker") == index.get("devops.md#docker")

    def test_output_is_deterministic(self, index, tmp_path):
        first = save_index(index, tmp_path / "a.json").read_text(encoding="utf-8")
        second = save_index(index, tmp_path / "b.json").read_text(encoding="utf-8")

        assert first == second

    def test_postings_are_sorted_on_disk(self, index, tmp_path):
        path = save_index(index, tmp_path / "index.json")
        data = json.loads(path.read_text(encoding="utf-8"))

        assert list(data["postings"]) == sorted(data["postings"])
        for ids in data["postings"].values():
            assert ids == sorted(ids)

    def test_missing_file(self, tmp_path):
        with pytest.raises(IndexFormatError):
            load_index(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "index.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(IndexFormatError):
            load_index(path)

    def test_wrong_format_version(self, index, tmp_path):
        path = save_index(index, tmp_path / "index.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        data["format_version"] = 99
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(IndexFormatError, match="format version"):
            load_index(path)

    def test_posting_with_unknown_record(self, index, tmp_path):
        path = save_index(index, tmp_path / "index.json")
        data = json.loads(path.read_text(encoding="utf-8"))
        data["postings"]["docker"].append("ghost.md#nowhere")
        path.write_text(json.dumps(data), encoding="utf-8")

        with pytest.raises(IndexFormatError, match="unknown records"):
            load_index(path)

"""Unit tests for tokensim.io.persistence.

Covers:
- to_json: models with to_dict(), dataclasses, Path objects
- save_json: happy path, creates parent dirs, atomic write, string paths
- load_json: happy path, missing file, invalid JSON
"""

from __future__ import annotations

import dataclasses
import json
import os
from pathlib import Path

import pytest

from tokensim.io.persistence import load_json, save_json, to_json
from tokensim.models.topology import ModelSummary, Node, UnifiedModel


# ── to_json ───────────────────────────────────────────────────────────────────────

class TestToJson:
    def test_models_use_api_field_names(self):
        """Objects exposing to_dict() must serialize with their camelCase keys."""
        model = UnifiedModel(
            nodes=[Node(ip="10.0.0.1", name="web1", tokens=["1"])],
            summary=ModelSummary(total_nodes=1, total_tokens=1),
        )

        out = json.loads(to_json(model))

        assert out["nodes"][0]["tokenCount"] == 1
        assert out["summary"]["totalNodes"] == 1
        assert "tokenMappings" in out

    def test_plain_dataclass_falls_back_to_asdict(self):
        @dataclasses.dataclass
        class Marker:
            label: str

        assert json.loads(to_json({"m": Marker("x")})) == {"m": {"label": "x"}}

    def test_unserializable_raises(self):
        with pytest.raises(TypeError):
            to_json({"value": object()})


# ── save_json ─────────────────────────────────────────────────────────────────────

class TestSaveJson:
    def test_save_json_happy_path(self, tmp_path):
        """save_json must write valid JSON to the given path."""
        target = tmp_path / "output.json"
        data = {"customerName": "acme", "projectId": "ring-expansion"}

        save_json(data, target)

        assert json.loads(target.read_text(encoding="utf-8")) == data

    def test_save_json_creates_parent_directories(self, tmp_path):
        """save_json must create intermediate parent directories if they do not exist."""
        target = tmp_path / "a" / "b" / "c" / "output.json"
        save_json({"key": "value"}, target)

        assert target.exists()

    def test_save_json_unicode_preserved(self, tmp_path):
        """Non-ASCII characters must be preserved (ensure_ascii=False)."""
        target = tmp_path / "unicode.json"
        save_json({"host": "wëb-ñode"}, target)

        assert "wëb-ñode" in target.read_text(encoding="utf-8")

    def test_save_json_overwrites_existing_file(self, tmp_path):
        """Saving to an existing path must overwrite the old content."""
        target = tmp_path / "output.json"
        save_json({"version": 1}, target)
        save_json({"version": 2}, target)

        assert json.loads(target.read_text())["version"] == 2

    def test_save_json_path_object_serialized(self, tmp_path):
        """Path objects embedded in data must be serialized as strings."""
        target = tmp_path / "paths.json"
        save_json({"output_dir": tmp_path / "output"}, target)

        assert isinstance(json.loads(target.read_text())["output_dir"], str)

    def test_save_json_atomic_no_partial_write(self, tmp_path, monkeypatch):
        """On rename failure, the temp file must be cleaned up (no orphaned temps)."""
        target = tmp_path / "output.json"

        def failing_replace(src, dst):
            raise OSError("Disk full")

        monkeypatch.setattr(os, "replace", failing_replace)

        with pytest.raises(OSError):
            save_json({"key": "value"}, target)

        assert list(tmp_path.iterdir()) == []

    def test_save_json_accepts_string_path(self, tmp_path):
        target = str(tmp_path / "string_path.json")

        assert save_json({"key": "ok"}, target) == Path(target)
        assert Path(target).exists()


# ── load_json ─────────────────────────────────────────────────────────────────────

class TestLoadJson:
    def test_load_json_happy_path(self, tmp_path):
        target = tmp_path / "data.json"
        target.write_text('{"status": "complete", "nodes": 4}', encoding="utf-8")

        assert load_json(target) == {"status": "complete", "nodes": 4}

    def test_load_json_missing_file_returns_none(self, tmp_path):
        assert load_json(tmp_path / "does_not_exist.json") is None

    def test_load_json_invalid_json_returns_none(self, tmp_path):
        target = tmp_path / "bad.json"
        target.write_text("{this is not valid json}", encoding="utf-8")

        assert load_json(target) is None

    def test_load_json_roundtrip_with_save(self, tmp_path):
        """A saved model must load back as its serialized dict."""
        target = tmp_path / "model.json"
        model = UnifiedModel(datacenters={"dc1": ["10.0.0.1"]})

        save_json(model, target)

        assert load_json(target) == model.to_dict()

from datetime import datetime
from pathlib import Path

from src.utils import file_io


def test_ensure_dir_creates_nested(tmp_path: Path):
    target = tmp_path / "nested" / "config"
    out = file_io.ensure_dir(target)
    assert out == target
    assert target.is_dir()


def test_write_read_json_roundtrip(tmp_path: Path):
    data = {"variance": {"high_noise_threshold": 2.0}, "coaching": {"default_provider": "openai"}}
    path = tmp_path / "sub" / "clarvoy.json"
    file_io.write_json(data, path)
    assert file_io.read_json(path) == data


def test_read_missing_returns_empty(tmp_path: Path):
    assert file_io.read_json(tmp_path / "absent.json") == {}


def test_write_json_stringifies_unknown_types(tmp_path: Path):
    path = tmp_path / "data.json"
    file_io.write_json({"at": datetime(2026, 1, 2, 3, 4, 5)}, path)
    assert file_io.read_json(path) == {"at": "2026-01-02 03:04:05"}

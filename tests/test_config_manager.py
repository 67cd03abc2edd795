import pytest

from src.data.config_manager import ConfigManager


def test_config_manager_init_data():
    cfg = ConfigManager(data={"a": 1})
    assert cfg.get("a") == 1


def test_config_manager_get_nested():
    cfg = ConfigManager(data={"a": {"b": 2}})
    assert cfg.get("a.b") == 2
    assert cfg.get("a.c", 3) == 3


def test_config_manager_get_through_non_dict():
    cfg = ConfigManager(data={"a": 5})
    assert cfg.get("a.b", "fallback") == "fallback"


def test_config_manager_set_nested():
    cfg = ConfigManager(data={})
    cfg.set("x.y", 10)
    assert cfg.get("x.y") == 10


def test_config_manager_load_and_save(tmp_json, tmp_path):
    path = tmp_json({"variance": {"high_noise_threshold": 1.5}}, name="clarvoy.json")
    cfg = ConfigManager(path=path)
    assert cfg.get("variance.high_noise_threshold") == 1.5

    cfg.set("coaching.default_provider", "claude")
    target = tmp_path / "out" / "saved.json"
    cfg.save(target)

    reloaded = ConfigManager(path=target)
    assert reloaded.as_dict() == {
        "variance": {"high_noise_threshold": 1.5},
        "coaching": {"default_provider": "claude"},
    }


def test_config_manager_missing_file(tmp_path):
    cfg = ConfigManager(path=tmp_path / "absent.json")
    assert cfg.as_dict() == {}
    assert cfg.get("anything") is None

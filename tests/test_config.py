from __future__ import annotations

from pathlib import Path

import pytest

from media_bridge.core.config import AppConfig, load_config
from media_bridge.core.errors import ConfigError


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "media.yaml"
    p.write_text(text.lstrip(), encoding="utf-8")
    return p


def test_load_config_expands_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIA_BRIDGE_SERVICE", "Audio")

    p = _write(
        tmp_path,
        """
media:
  service: ${MEDIA_BRIDGE_SERVICE}
  evict_on_release: false
logging:
  level: debug
""",
    )

    cfg = load_config(p)
    assert cfg.media.service == "Audio"
    assert cfg.media.evict_on_release is False
    assert cfg.media.log_ignored is True
    assert cfg.logging.level == "DEBUG"


def test_load_config_missing_env_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MEDIA_BRIDGE_SERVICE", raising=False)

    p = _write(
        tmp_path,
        """
media:
  service: ${MEDIA_BRIDGE_SERVICE}
""",
    )

    with pytest.raises(ConfigError) as ei:
        load_config(p)

    msg = str(ei.value)
    assert "MEDIA_BRIDGE_SERVICE" in msg
    assert "missing" in msg
    assert ei.value.path == "media.service"


def test_load_config_empty_env_raises(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIA_BRIDGE_SERVICE", "")

    p = _write(
        tmp_path,
        """
media:
  service: ${MEDIA_BRIDGE_SERVICE}
""",
    )

    with pytest.raises(ConfigError) as ei:
        load_config(p)

    assert "empty" in str(ei.value)


def test_empty_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(_write(tmp_path, ""))
    assert cfg == AppConfig.default()
    assert cfg.media.service == "Media"
    assert cfg.media.evict_on_release is True


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as ei:
        load_config(tmp_path / "nope.yaml")
    assert "does not exist" in str(ei.value)


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(_write(tmp_path, "- a\n- b\n"))


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError) as ei:
        load_config(_write(tmp_path, "media: [unclosed\n"))
    assert "invalid YAML" in str(ei.value)


@pytest.mark.parametrize(
    ("text", "path"),
    [
        ("media:\n  service: ''\n", "media.service"),
        ("media:\n  evict_on_release: maybe\n", "media.evict_on_release"),
        ("media: 3\n", "media"),
        ("logging:\n  level: LOUD\n", "logging.level"),
    ],
)
def test_invalid_values_name_the_key(tmp_path: Path, text: str, path: str) -> None:
    with pytest.raises(ConfigError) as ei:
        load_config(_write(tmp_path, text))
    assert ei.value.path == path


def test_repo_config_loadable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MEDIA_BRIDGE_SERVICE", "Media")

    cfg = load_config(Path(__file__).resolve().parents[1] / "configs" / "media.yaml")
    assert cfg.media.service == "Media"

from __future__ import annotations

import importlib
import logging

import pytest

import letter_avatar.config as config
from letter_avatar import AvatarBuilder, UnsupportedBackendError


@pytest.fixture
def reload_config(monkeypatch: pytest.MonkeyPatch):
    def _reload(**env: str):
        for key, value in env.items():
            monkeypatch.setenv(key, value)
        return importlib.reload(config)

    yield _reload

    monkeypatch.undo()
    importlib.reload(config)


def test_settings_defaults(reload_config, monkeypatch: pytest.MonkeyPatch):
    for key in ("AVATAR_RENDER_BACKEND", "AVATAR_FONT_PATH", "LOG_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    reloaded = reload_config()
    assert reloaded.settings.render_backend == "pillow"
    assert reloaded.settings.font_path == str(reloaded.DEFAULT_FONT_PATH)
    assert reloaded.settings.log_level == "WARNING"
    assert reloaded.DEFAULT_FONT_PATH.is_file()


def test_settings_read_environment(reload_config):
    reloaded = reload_config(AVATAR_RENDER_BACKEND="svg", AVATAR_FONT_PATH="/fonts/Custom.ttf")
    assert reloaded.settings.render_backend == "svg"
    assert reloaded.settings.font_path == "/fonts/Custom.ttf"


def test_builder_uses_configured_font(reload_config):
    reload_config(AVATAR_FONT_PATH="/fonts/Custom.ttf")
    assert AvatarBuilder().get_config().font_family == "/fonts/Custom.ttf"


def test_builder_rejects_unsupported_configured_backend(reload_config):
    reload_config(AVATAR_RENDER_BACKEND="imagick")
    with pytest.raises(UnsupportedBackendError):
        AvatarBuilder()


def test_explicit_backend_overrides_configuration(reload_config):
    reload_config(AVATAR_RENDER_BACKEND="imagick")
    assert AvatarBuilder(backend="pillow").get_config().render_backend == "pillow"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("debug", logging.DEBUG),
        (" INFO ", logging.INFO),
        ("WARNING", logging.WARNING),
        ("verbose", logging.WARNING),
        ("", logging.WARNING),
    ],
)
def test_resolve_log_level(name, expected):
    assert config.resolve_log_level(name) == expected


def test_unknown_log_level_does_not_break_import(reload_config):
    import letter_avatar

    reload_config(LOG_LEVEL="verbose")
    reloaded = importlib.reload(letter_avatar)
    assert logging.getLogger("letter_avatar").level == logging.WARNING
    assert reloaded.AvatarBuilder is not None

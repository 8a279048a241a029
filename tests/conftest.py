import pytest

from boxdialog import config as config_mod
from boxdialog.screen import ShadowScreen

_ENV_VARS = (
    "BOXDIALOG_CONFIG",
    "BOXDIALOG_APP_CONFIG",
    "BOXDIALOG_LOG_LEVEL",
    "BOXDIALOG_LOG_FILE",
    "BOXDIALOG_OVERLAY",
    "BOXDIALOG_FILL",
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's real configuration files."""
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(config_mod, "_override_global_config_path", None)
    monkeypatch.setattr(config_mod, "_override_app_config_path", None)
    config_mod.get_config.cache_clear()
    yield
    config_mod.get_config.cache_clear()


@pytest.fixture
def screen():
    return ShadowScreen(80, 24)

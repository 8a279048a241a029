from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Optional

from .errors import DialogConfigError


_DEFAULT_LOG_LEVEL_ENVVAR = "BOXDIALOG_LOG_LEVEL"
_DEFAULT_LOG_FILE_ENVVAR = "BOXDIALOG_LOG_FILE"
_DEFAULT_OVERLAY_ENVVAR = "BOXDIALOG_OVERLAY"
_DEFAULT_FILL_ENVVAR = "BOXDIALOG_FILL"

_GLOBAL_CONFIG_ENVVAR = "BOXDIALOG_CONFIG"
_APP_CONFIG_ENVVAR = "BOXDIALOG_APP_CONFIG"

_BORDER_STYLES = ("single", "double")
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


_override_global_config_path: Optional[Path] = None
_override_app_config_path: Optional[Path] = None


def _bool_from_env(var_name: str, default: bool) -> bool:
    raw = os.getenv(var_name)
    if raw is None:
        return default
    val = str(raw).strip().lower()
    return val in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class BorderConfig:
    top: str = "double"
    left: str = "double"
    right: str = "double"
    bottom: str = "double"
    split: str = "single"


@dataclass(frozen=True)
class DialogColorConfig:
    border: str = "bright white on blue"
    fill: str = "white on blue"
    overlay: str = "blue on black"
    label: str = "white on blue"
    input: str = "bright white on black"
    input_indicator: str = "bright yellow on black"
    button: str = "white on blue"
    button_focus: str = "bright white on red"


@dataclass(frozen=True)
class DialogConfig:
    margin_x: int = 2
    margin_y: int = 1
    overlay: bool = False
    fill: bool = True
    pad_char: str = "_"
    left_indicator: str = "<"
    right_indicator: str = ">"
    borders: BorderConfig = BorderConfig()
    colors: DialogColorConfig = DialogColorConfig()


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    file: Optional[str] = None


@dataclass(frozen=True)
class BoxDialogConfig:
    dialog: DialogConfig = DialogConfig()
    logging: LoggingConfig = LoggingConfig()


def _default_global_config_path() -> Optional[Path]:
    p = os.getenv(_GLOBAL_CONFIG_ENVVAR)
    if p:
        return Path(p)

    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "boxdialog" / "config.toml"

    home = Path.home()
    return home / ".config" / "boxdialog" / "config.toml"


def _default_app_config_path() -> Optional[Path]:
    p = os.getenv(_APP_CONFIG_ENVVAR)
    if p:
        return Path(p)

    cwd_cfg = Path.cwd() / "boxdialog.toml"
    if cwd_cfg.exists() and cwd_cfg.is_file():
        return cwd_cfg

    return None


def _load_toml(path: Path) -> dict:
    try:
        import tomllib  # py3.11+
    except ModuleNotFoundError as e:
        raise RuntimeError("tomllib is required to read boxdialog TOML config") from e

    raw = path.read_bytes()
    try:
        data = tomllib.loads(raw.decode("utf-8", errors="replace"))
    except tomllib.TOMLDecodeError as e:
        raise DialogConfigError(f"Invalid TOML in {path}: {e}") from e
    if not isinstance(data, dict):
        return {}
    return data


def _single_char(value: object, key: str) -> str:
    s = "" if value is None else str(value)
    if len(s) != 1:
        raise DialogConfigError(f"dialog.{key} must be a single character, got {s!r}")
    return s


def _non_negative_int(value: object, key: str) -> int:
    try:
        n = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as e:
        raise DialogConfigError(f"dialog.{key} must be an integer, got {value!r}") from e
    if n < 0:
        raise DialogConfigError(f"dialog.{key} must not be negative, got {n}")
    return n


def _config_from_dict(base: BoxDialogConfig, data: dict) -> BoxDialogConfig:
    if not isinstance(data, dict):
        return base

    dialog = base.dialog
    dialog_data = data.get("dialog")
    if isinstance(dialog_data, dict):
        for k in ("margin_x", "margin_y"):
            if k in dialog_data:
                dialog = replace(dialog, **{k: _non_negative_int(dialog_data.get(k), k)})
        for k in ("overlay", "fill"):
            if k in dialog_data:
                dialog = replace(dialog, **{k: bool(dialog_data.get(k))})
        for k in ("pad_char", "left_indicator", "right_indicator"):
            if k in dialog_data:
                dialog = replace(dialog, **{k: _single_char(dialog_data.get(k), k)})

        borders = dialog.borders
        borders_data = dialog_data.get("borders")
        if isinstance(borders_data, dict):
            for k in ("top", "left", "right", "bottom", "split"):
                if k in borders_data:
                    v = str(borders_data.get(k) or "").strip().lower()
                    if v not in _BORDER_STYLES:
                        raise DialogConfigError(f"dialog.borders.{k} must be one of {_BORDER_STYLES}, got {v!r}")
                    borders = replace(borders, **{k: v})

        colors = dialog.colors
        colors_data = dialog_data.get("colors")
        if isinstance(colors_data, dict):
            for k in (
                "border",
                "fill",
                "overlay",
                "label",
                "input",
                "input_indicator",
                "button",
                "button_focus",
            ):
                if k in colors_data:
                    v = colors_data.get(k)
                    colors = replace(colors, **{k: "" if v is None else str(v)})

        dialog = replace(dialog, borders=borders, colors=colors)

    logging_cfg = base.logging
    logging_data = data.get("logging")
    if isinstance(logging_data, dict):
        if "level" in logging_data:
            logging_cfg = replace(logging_cfg, level=_log_level(logging_data.get("level")))
        if "file" in logging_data:
            v = logging_data.get("file")
            logging_cfg = replace(logging_cfg, file=(str(v) if v else None))

    return replace(base, dialog=dialog, logging=logging_cfg)


def _log_level(value: object) -> str:
    level = str(value or "").strip().upper()
    if level not in _LOG_LEVELS:
        raise DialogConfigError(f"logging.level must be one of {_LOG_LEVELS}, got {value!r}")
    return level


def _apply_env_overrides(cfg: BoxDialogConfig) -> BoxDialogConfig:
    dialog = cfg.dialog
    logging_cfg = cfg.logging

    if os.getenv(_DEFAULT_OVERLAY_ENVVAR) is not None:
        dialog = replace(dialog, overlay=_bool_from_env(_DEFAULT_OVERLAY_ENVVAR, dialog.overlay))
    if os.getenv(_DEFAULT_FILL_ENVVAR) is not None:
        dialog = replace(dialog, fill=_bool_from_env(_DEFAULT_FILL_ENVVAR, dialog.fill))

    if os.getenv(_DEFAULT_LOG_LEVEL_ENVVAR) is not None:
        logging_cfg = replace(logging_cfg, level=_log_level(os.getenv(_DEFAULT_LOG_LEVEL_ENVVAR)))
    if os.getenv(_DEFAULT_LOG_FILE_ENVVAR) is not None:
        raw = str(os.getenv(_DEFAULT_LOG_FILE_ENVVAR) or "")
        logging_cfg = replace(logging_cfg, file=(raw if raw else None))

    return replace(cfg, dialog=dialog, logging=logging_cfg)


def load_config(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> BoxDialogConfig:
    cfg = BoxDialogConfig()

    gpath = Path(global_config_path) if global_config_path is not None else _default_global_config_path()
    if gpath is not None and gpath.exists() and gpath.is_file():
        cfg = _config_from_dict(cfg, _load_toml(gpath))

    apath = Path(app_config_path) if app_config_path is not None else _default_app_config_path()
    if apath is not None and apath.exists() and apath.is_file():
        cfg = _config_from_dict(cfg, _load_toml(apath))

    cfg = _apply_env_overrides(cfg)
    return cfg


def configure(
    *,
    global_config_path: Optional[str | Path] = None,
    app_config_path: Optional[str | Path] = None,
) -> BoxDialogConfig:
    global _override_global_config_path
    global _override_app_config_path

    _override_global_config_path = Path(global_config_path) if global_config_path is not None else None
    _override_app_config_path = Path(app_config_path) if app_config_path is not None else None

    get_config.cache_clear()
    return get_config()


@lru_cache(maxsize=1)
def get_config() -> BoxDialogConfig:
    return load_config(
        global_config_path=_override_global_config_path,
        app_config_path=_override_app_config_path,
    )

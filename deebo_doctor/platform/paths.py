"""Platform-aware user directories.

Functions taking an explicit environment mapping are pure so that checks
can compute host-application paths for any platform in tests.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from .detection import Platform, is_windows

__all__ = [
    "appdata_dir",
    "home",
    "user_config_dir",
]

APP_NAME = "deebo-doctor"


def home() -> Path:
    """Get user's home directory.

    Uses USERPROFILE on Windows, HOME on Unix.
    Falls back to Path.home() which handles edge cases.
    """
    # Check env vars first for CI/container scenarios
    if is_windows():
        userprofile = os.environ.get("USERPROFILE")
        if userprofile:
            return Path(userprofile)
    else:
        home_env = os.environ.get("HOME")
        if home_env:
            return Path(home_env)

    return Path.home()


def appdata_dir(env: Mapping[str, str], home_dir: Path) -> Path:
    """Roaming application data directory on Windows.

    Falls back to ~/AppData/Roaming when APPDATA is unset.
    """
    app_data = env.get("APPDATA")
    if app_data:
        return Path(app_data)
    return home_dir / "AppData" / "Roaming"


def app_support_dir(platform: Platform, env: Mapping[str, str], home_dir: Path) -> Path:
    """Per-user directory where desktop applications keep their settings.

    APPDATA on Windows, ~/Library/Application Support on macOS and
    XDG_CONFIG_HOME (or ~/.config) everywhere else.
    """
    match platform:
        case Platform.WINDOWS:
            return appdata_dir(env, home_dir)
        case Platform.MACOS:
            return home_dir / "Library" / "Application Support"
        case _:
            xdg_config = env.get("XDG_CONFIG_HOME")
            if xdg_config:
                return Path(xdg_config)
            return home_dir / ".config"


def user_config_dir() -> Path:
    """Directory holding the doctor's own settings file.

    Location: ~/.config/deebo-doctor/ (Linux/macOS) or
    %APPDATA%/deebo-doctor/ (Windows).
    """
    if is_windows():
        return appdata_dir(os.environ, home()) / APP_NAME

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME
    return home() / ".config" / APP_NAME

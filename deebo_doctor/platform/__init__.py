"""Platform abstraction layer."""

from .detection import Platform, detect_platform, is_windows
from .paths import app_support_dir, appdata_dir, home, user_config_dir
from .process import AsyncCommandRunner, CommandRunner, ProcessError

__all__ = [
    # detection
    "Platform",
    "detect_platform",
    "is_windows",
    # paths
    "app_support_dir",
    "appdata_dir",
    "home",
    "user_config_dir",
    # process
    "AsyncCommandRunner",
    "CommandRunner",
    "ProcessError",
]

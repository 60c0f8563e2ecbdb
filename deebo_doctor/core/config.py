"""Doctor settings loading and resolution.

Settings come from four layers, highest precedence first:
command-line options, environment variables (DEEBO_PATH,
DEEBO_DOCTOR_TIMEOUT), the TOML settings file and built-in defaults.

Example settings file:
    [doctor]
    deebo_path = "~/deebo-prototype"
    timeout = 45
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_float, get_str, get_table

__all__ = [
    "DEFAULT_TIMEOUT",
    "ConfigError",
    "Settings",
    "load_settings",
    "load_settings_or_default",
    "resolve_settings",
]

DEFAULT_TIMEOUT = 30.0

ENV_DEEBO_PATH = "DEEBO_PATH"
ENV_TIMEOUT = "DEEBO_DOCTOR_TIMEOUT"


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when settings cannot be loaded, parsed or resolved."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class Settings:
    """Resolved doctor settings.

    Attributes:
        deebo_path: Installation root; None until resolved (then cwd by default)
        timeout: Seconds allowed for every external process invocation
    """

    deebo_path: Path | None = None
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Settings:
        """Create Settings from a mapping (parsed TOML)."""
        doctor: StrDict = get_table(data, "doctor") or {}

        raw_path = get_str(doctor, "deebo_path")
        timeout = get_float(doctor, "timeout")
        if timeout is not None and timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        return cls(
            deebo_path=Path(raw_path).expanduser() if raw_path else None,
            timeout=timeout if timeout is not None else DEFAULT_TIMEOUT,
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("Settings root must be a TOML table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Settings file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading settings: {e}", path=path))


def load_settings(path: Path) -> Result[Settings, ConfigError]:
    """Load and parse settings from a TOML file.

    Args:
        path: Path to the settings file

    Returns:
        Ok(Settings) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Settings.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid settings structure: {e}", path=path))


def load_settings_or_default(path: Path) -> Result[Settings, ConfigError]:
    """Load settings, treating a missing file as default settings.

    A file that exists but cannot be parsed is still an error.
    """
    if not path.exists():
        return Ok(Settings())
    return load_settings(path)


def resolve_settings(
    settings: Settings,
    env: Mapping[str, str],
    *,
    deebo_path: Path | None = None,
    timeout: float | None = None,
    cwd: Path | None = None,
) -> Result[Settings, ConfigError]:
    """Apply environment and command-line overrides on top of file settings.

    The returned settings always carry a deebo_path.
    """
    resolved = settings

    env_path = env.get(ENV_DEEBO_PATH, "").strip()
    if env_path:
        resolved = replace(resolved, deebo_path=Path(env_path).expanduser())

    env_timeout = env.get(ENV_TIMEOUT, "").strip()
    if env_timeout:
        try:
            value = float(env_timeout)
        except ValueError:
            return Err(ConfigError(f"{ENV_TIMEOUT} must be a number, got {env_timeout!r}"))
        if value <= 0:
            return Err(ConfigError(f"{ENV_TIMEOUT} must be positive, got {env_timeout}"))
        resolved = replace(resolved, timeout=value)

    if deebo_path is not None:
        resolved = replace(resolved, deebo_path=deebo_path.expanduser())

    if timeout is not None:
        if timeout <= 0:
            return Err(ConfigError(f"--timeout must be positive, got {timeout}"))
        resolved = replace(resolved, timeout=timeout)

    if resolved.deebo_path is None:
        resolved = replace(resolved, deebo_path=cwd if cwd is not None else Path.cwd())

    return Ok(resolved)

"""Typed loading of ``roller.toml``.

The file is optional. Every value has a default, and CLI options override
whatever the file sets. Provider tokens are never read from here.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_bool, get_str, get_table

__all__ = [
    "CONFIG_FILENAME",
    "ClientType",
    "Config",
    "ConfigError",
    "DescribeConfig",
    "ReleaseConfig",
    "load_config",
    "load_config_or_default",
]

CONFIG_FILENAME = "roller.toml"

ClientType = Literal["github", "gitlab"]
CLIENT_TYPES: tuple[ClientType, ...] = ("github", "gitlab")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    client: ClientType = "github"
    remote: str = "origin"


@dataclass(frozen=True, slots=True)
class DescribeConfig:
    match: str | None = None
    include_merged_tags: bool = False


@dataclass(frozen=True, slots=True)
class Config:
    release: ReleaseConfig = field(default_factory=ReleaseConfig)
    describe: DescribeConfig = field(default_factory=DescribeConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> Config:
        """Create Config from a mapping (parsed TOML).

        Raises:
            ValueError: If ``release.client`` names an unknown provider.
        """
        release: StrDict = get_table(data, "release") or {}
        describe: StrDict = get_table(data, "describe") or {}

        client = get_str(release, "client") or "github"
        if client not in CLIENT_TYPES:
            raise ValueError(
                f"release.client must be one of {', '.join(CLIENT_TYPES)} (got {client!r})"
            )

        include_merged = get_bool(describe, "include_merged_tags")
        return cls(
            release=ReleaseConfig(
                client=client,  # pyright: ignore[reportArgumentType]
                remote=get_str(release, "remote") or "origin",
            ),
            describe=DescribeConfig(
                match=get_str(describe, "match"),
                include_merged_tags=include_merged if include_merged is not None else False,
            ),
        )


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    import tomllib

    try:
        data_obj: object = tomllib.loads(path.read_bytes().decode("utf-8"))
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))

    data = as_str_dict(data_obj)
    if data is None:
        return Err(ConfigError("Config root must be a TOML table", path=path))
    return Ok(data)


def load_config(path: Path) -> Result[Config, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to roller.toml

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(Config.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config: {e}", path=path))


def load_config_or_default(root: Path) -> Result[Config, ConfigError]:
    """Load ``roller.toml`` from ``root``; defaults when the file is absent.

    A present but invalid file is still an error.
    """
    path = root / CONFIG_FILENAME
    if not path.exists():
        return Ok(Config())
    return load_config(path)

"""
Configuration parameters for relfetch.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class Software(str, Enum):
    """
    Software whose releases relfetch knows how to name.
    """

    JDK = "jdk"
    REDIS = "redis"
    POSTGRESQL = "postgresql"

    def __str__(self) -> str:
        return self.value


class Platform(str, Enum):
    """
    Operating systems that release archives are published for.
    """

    LINUX = "linux"
    WINDOWS = "windows"

    def __str__(self) -> str:
        return self.value


DEFAULT_DOWNLOAD_PREFIXES: Mapping[str, str] = MappingProxyType(
    {
        Software.JDK.value: "https://github.com/shenxinli/java-release/releases/download",
        Software.REDIS.value: "https://github.com/shenxinli/redis-release/releases/download",
        Software.POSTGRESQL.value: "https://github.com/shenxinli/postgresql-release/releases/download",
    }
)


@dataclass(frozen=True)
class Target:
    """
    A platform and architecture pair that one installation pass downloads for.
    """

    platform: str
    arch: str

    @classmethod
    def parse(cls, value: str) -> "Target":
        """
        Parse a target written as ``platform/arch``, e.g. ``linux/amd64``.
        """
        platform, sep, arch = value.partition("/")
        if not sep or not platform or not arch:
            raise ValueError(f"Invalid target {value!r}, expected PLATFORM/ARCH")
        return cls(platform=platform.strip().lower(), arch=arch.strip())

    def __str__(self) -> str:
        return f"{self.platform}/{self.arch}"


DEFAULT_TARGETS: Tuple[Target, ...] = (
    Target(Platform.LINUX.value, "amd64"),
    Target(Platform.LINUX.value, "arm64"),
    Target(Platform.WINDOWS.value, "x64"),
)


@dataclass(frozen=True)
class RelfetchConfig:
    """
    Configuration parameters for one relfetch run.
    """

    root_dir: Path
    config_path: Path
    targets: Tuple[Target, ...] = DEFAULT_TARGETS
    download_prefixes: Mapping[str, str] = field(default_factory=lambda: DEFAULT_DOWNLOAD_PREFIXES)
    http_timeout_seconds: Optional[float] = None
    max_redirects: int = 5
    progress_step_percent: int = 5
    chunk_size: int = 64 * 1024

    def __post_init__(self):
        # the prefix table must not change once a run has started
        object.__setattr__(
            self, "download_prefixes", MappingProxyType(dict(self.download_prefixes))
        )

    @classmethod
    def from_dict(cls, env: Dict[str, Any]) -> "RelfetchConfig":
        """
        Create a RelfetchConfig instance from a dictionary. Extra prefixes are layered over the defaults.
        """
        root_dir = Path(env.get("root_dir") or os.getcwd())
        config_path = Path(env["config_path"]) if env.get("config_path") else root_dir / "config.json"

        targets = env.get("targets") or DEFAULT_TARGETS
        targets = tuple(
            Target.parse(t) if isinstance(t, str) else t for t in targets
        )

        prefixes = dict(DEFAULT_DOWNLOAD_PREFIXES)
        prefixes.update(env.get("download_prefixes") or {})

        kwargs = {}
        for key in ("http_timeout_seconds", "max_redirects", "progress_step_percent", "chunk_size"):
            if env.get(key) is not None:
                kwargs[key] = env[key]

        return cls(
            root_dir=root_dir,
            config_path=config_path,
            targets=targets,
            download_prefixes=prefixes,
            **kwargs,
        )

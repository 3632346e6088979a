"""
relfetch downloads versioned release archives (JDK, Redis, PostgreSQL) for several
platforms and caches them on disk.
"""

from relfetch.relfetch_config import RelfetchConfig, Target
from relfetch.installer import ArtifactInstaller

__all__ = ["RelfetchConfig", "Target", "ArtifactInstaller"]

"""
Artifact models for relfetch.

This package provides Pydantic data models for the artifacts configuration file,
resolved download links and the download jobs built from them.
"""

from .artifacts import (
    ArtifactsConfig,
    DownloadJob,
    ResolvedLink,
)

__all__ = [
    "ArtifactsConfig",
    "DownloadJob",
    "ResolvedLink",
]

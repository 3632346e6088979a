"""
Artifacts configuration management.

This package handles:
1. Loading and parsing the artifacts JSON file
2. Resolving every declared component into a download plan
3. Tracking which plans completed or failed
"""

from .config_manager import (
    ArtifactConfigManager,
    DownloadPlan,
    DownloadStatus,
    read_config,
)

__all__ = ["ArtifactConfigManager", "DownloadPlan", "DownloadStatus", "read_config"]

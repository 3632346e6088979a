"""
Artifact downloader.

This package handles:
1. Streaming artifacts from their download URLs
2. Following redirects up to a fixed number of hops
3. Skipping artifacts already present on disk
4. Updating download plan states
"""

from .downloader import ArtifactDownloader

__all__ = ["ArtifactDownloader"]

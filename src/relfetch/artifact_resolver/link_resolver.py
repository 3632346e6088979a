"""
Builds download links for release archives.

Each known software publishes one archive per (version, platform, arch) under
``<prefix>/v<version>/<filename>``.
"""

import logging
import posixpath
from types import MappingProxyType
from typing import Dict, Mapping, Tuple
from urllib.parse import urlparse

from relfetch.artifact_models import ResolvedLink
from relfetch.relfetch_config import Platform, Software
from relfetch.relfetch_exceptions import UnsupportedPlatformError, UnsupportedSoftwareError
from relfetch.relfetch_logger import RelfetchLogger

# software -> (file stem, archive extension per platform)
FILENAME_RULES: Mapping[Software, Tuple[str, Dict[Platform, str]]] = MappingProxyType(
    {
        Software.POSTGRESQL: ("postgresql", {Platform.WINDOWS: "zip", Platform.LINUX: "tar.gz"}),
        Software.REDIS: ("redis", {Platform.WINDOWS: "zip", Platform.LINUX: "tar.gz"}),
        Software.JDK: ("openjdk", {Platform.WINDOWS: "zip", Platform.LINUX: "tar.gz"}),
    }
)

# Windows builds of redis are only published for this version
WINDOWS_REDIS_VERSION = "5"


class LinkResolver:
    """
    Maps (software, version, platform, arch) to a download URL using an injected prefix table.
    """

    def __init__(self, download_prefixes: Mapping[str, str], logger: RelfetchLogger):
        self.download_prefixes = MappingProxyType(dict(download_prefixes))
        self.logger = logger

    def resolve(self, software: str, version: str, platform: str, arch: str) -> ResolvedLink:
        """
        Resolve the download link of an artifact.

        Raises:
            UnsupportedSoftwareError: no download prefix is configured for the software
            UnsupportedPlatformError: the software is not published for the platform
        """
        if software == Software.REDIS.value and platform == Platform.WINDOWS.value:
            self.logger.log(
                f"Redis on Windows is pinned to v{WINDOWS_REDIS_VERSION}, ignoring configured version {version}",
                logging.WARNING,
            )
            version = WINDOWS_REDIS_VERSION

        prefix = self.download_prefixes.get(software)
        if not prefix:
            raise UnsupportedSoftwareError(software)

        filename = self.build_filename(software, version, platform, arch)
        url = f"{prefix.rstrip('/')}/v{version}/{filename}"
        return ResolvedLink(url=url, filename=filename, version=version)

    @staticmethod
    def build_filename(software: str, version: str, platform: str, arch: str) -> str:
        """
        Archive file name for the artifact. Software without a naming rule falls back to
        ``<software>-<version>-<platform>-<arch>.tar.gz`` for any platform.
        """
        try:
            known = Software(software)
        except ValueError:
            return f"{software}-{version}-{platform}-{arch}.tar.gz"

        stem, extensions = FILENAME_RULES[known]
        try:
            extension = extensions[Platform(platform)]
        except (ValueError, KeyError):
            raise UnsupportedPlatformError(software, platform) from None
        return f"{stem}-{version}-{platform}-{arch}.{extension}"

    @staticmethod
    def filename_from_url(url: str) -> str:
        return posixpath.basename(urlparse(url).path)

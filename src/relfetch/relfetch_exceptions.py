"""
This module contains the exceptions raised by relfetch.
"""

from typing import Optional


class RelfetchException(Exception):
    """
    Base class for all relfetch errors.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResolutionError(RelfetchException):
    """Raised when a download link cannot be built for a component."""


class UnsupportedSoftwareError(ResolutionError):
    def __init__(self, software: str):
        super().__init__(f"Unsupported software: {software}")
        self.software = software


class UnsupportedPlatformError(ResolutionError):
    def __init__(self, software: str, platform: str):
        super().__init__(f"Unsupported platform for {software}: {platform}")
        self.software = software
        self.platform = platform


class ConfigError(RelfetchException):
    """Raised when the artifacts configuration file cannot be loaded."""


class ConfigReadError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class DownloadError(RelfetchException):
    """Base class for failures while fetching an artifact."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class DownloadHTTPError(DownloadError):
    """
    Raised when the server answers with a status that is neither 200 nor a followable redirect.
    """

    def __init__(self, status_code: int, url: str, reason: str = ""):
        message = f"Download failed with status code {status_code}: {url}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, url)
        self.status_code = status_code


class NetworkError(DownloadError):
    pass


class TooManyRedirectsError(DownloadError):
    def __init__(self, url: str, max_redirects: int):
        super().__init__(f"Exceeded {max_redirects} redirects while fetching {url}", url)
        self.max_redirects = max_redirects


class RenameError(DownloadError):
    def __init__(self, tmp_path: str, destination_path: str, reason: str):
        super().__init__(f"Failed to move {tmp_path} to {destination_path}: {reason}")
        self.tmp_path = tmp_path
        self.destination_path = destination_path

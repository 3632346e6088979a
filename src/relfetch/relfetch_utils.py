"""
This file contains various utility functions like formatting byte counts and file cleanup.
"""

import logging
import math
import os
import re

from relfetch.relfetch_logger import RelfetchLogger

BYTE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

_VERSION_SUFFIX = re.compile(r"-version$")


class TextUtils:
    """
    Utilities for text operations.
    """

    @staticmethod
    def format_bytes(num_bytes: int, decimals: int = 2) -> str:
        """
        Format a byte count with base-1024 units, e.g. 1536 -> "1.5 KB".
        """
        if num_bytes <= 0:
            return "0 Bytes"

        digits = max(decimals, 0)
        index = min(int(math.floor(math.log(num_bytes) / math.log(1024))), len(BYTE_UNITS) - 1)
        # float error around exact powers of 1024
        if index > 0 and num_bytes < 1024 ** index:
            index -= 1
        elif index < len(BYTE_UNITS) - 1 and num_bytes >= 1024 ** (index + 1):
            index += 1
        value = f"{num_bytes / 1024 ** index:.{digits}f}"
        if "." in value:
            value = value.rstrip("0").rstrip(".")
        return f"{value} {BYTE_UNITS[index]}"

    @staticmethod
    def strip_version_suffix(component_key: str) -> str:
        """
        "jdk-version" -> "jdk"
        """
        return _VERSION_SUFFIX.sub("", component_key)


class FileUtils:
    """
    Utility functions for file operations.
    """

    @staticmethod
    def remove_quietly(logger: RelfetchLogger, path: str) -> bool:
        """
        Remove a file if it exists. Failures are logged at debug level and never raised.
        """
        try:
            os.remove(path)
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.log(f"Could not remove temporary file {path}: {e}", logging.DEBUG)
            return False

"""
Download link resolution for release archives.
"""

from .link_resolver import LinkResolver

__all__ = ["LinkResolver"]

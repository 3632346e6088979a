"""
Pydantic data models for the artifacts configuration file and the download jobs built from it.

The configuration file maps environment names to component-version declarations:

    {
      "prod": {"jdk-version": "17", "redis-version": "7"},
      "staging": {"postgresql-version": "16"}
    }
"""

from pathlib import Path
from typing import Any, Dict, Iterator, Tuple

from pydantic import BaseModel, ConfigDict, Field


class ResolvedLink(BaseModel):
    """
    The outcome of resolving a (software, version, platform, arch) tuple.

    ``version`` is the version actually used in the URL, which can differ from the requested one.
    """

    model_config = ConfigDict(frozen=True)

    url: str = Field(..., description="Download URL")
    filename: str = Field(..., description="Archive file name, the last segment of the URL")
    version: str = Field(..., description="Effective version")


class DownloadJob(BaseModel):
    """
    Everything needed to fetch one artifact. Jobs are never persisted.
    """

    model_config = ConfigDict(frozen=True)

    environment: str
    component_key: str
    software: str
    version: str
    platform: str
    arch: str
    url: str
    destination_path: Path


class ArtifactsConfig(BaseModel):
    """
    Environment -> component-version declarations.

    Only the top level is checked. Environment bodies are kept as loaded so that malformed
    entries surface as failed jobs instead of rejecting the whole file.
    """

    environments: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArtifactsConfig":
        return cls(environments=data)

    def environment_names(self) -> Tuple[str, ...]:
        return tuple(self.environments.keys())

    def iter_declarations(self, environment: str) -> Iterator[Tuple[str, str]]:
        """
        Yield (component_key, version) pairs of an environment.

        Raises:
            TypeError: if the environment body is not a JSON object
        """
        declarations = self.environments[environment]
        if not isinstance(declarations, dict):
            raise TypeError(
                f"Environment {environment!r} must map component keys to versions, "
                f"got {type(declarations).__name__}"
            )
        for component_key, version in declarations.items():
            yield component_key, str(version)

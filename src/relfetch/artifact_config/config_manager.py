"""
Artifacts configuration manager.

Loads the artifacts JSON file and turns its declarations into download plans
for one platform/architecture target.
"""

import json
import logging
import pathlib
from typing import Dict, List, Optional

from relfetch.artifact_models import ArtifactsConfig, DownloadJob
from relfetch.artifact_resolver import LinkResolver
from relfetch.relfetch_config import Target
from relfetch.relfetch_exceptions import ConfigParseError, ConfigReadError, ResolutionError
from relfetch.relfetch_logger import RelfetchLogger
from relfetch.relfetch_utils import TextUtils


def read_config(path: pathlib.Path, logger: RelfetchLogger) -> ArtifactsConfig:
    """
    Read the artifacts configuration file.

    Raises:
        ConfigReadError: the file is missing or unreadable
        ConfigParseError: the file is not valid JSON or its top level is not an object
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as e:
        logger.log(f"Failed to read config file {path}: {e}", logging.ERROR)
        raise ConfigReadError(f"Failed to read config file {path}: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.log(f"Failed to parse config file {path}: {e}", logging.ERROR)
        raise ConfigParseError(f"Failed to parse config file {path}: {e}") from e

    if not isinstance(data, dict):
        logger.log(f"Config file {path} must contain a JSON object", logging.ERROR)
        raise ConfigParseError(
            f"Config file {path} must contain a JSON object, got {type(data).__name__}"
        )

    return ArtifactsConfig.from_dict(data)


class DownloadStatus:
    """Enumeration of download statuses."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"


class DownloadPlan:
    """
    A plan to download one declared component.

    ``job`` is None when the declaration could not be resolved; such plans start out FAILED.
    """

    def __init__(
            self,
            environment: str,
            component_key: str,
            software: str,
            version: str,
            job: Optional[DownloadJob] = None,
            status: str = DownloadStatus.PENDING,
            error_message: Optional[str] = None,
    ):
        self.environment = environment
        self.component_key = component_key
        self.software = software
        self.version = version
        self.job = job
        self.status = status
        self.error_message = error_message

    @property
    def key(self) -> str:
        return f"{self.environment}.{self.software}"

    def __repr__(self) -> str:
        url = self.job.url if self.job else None
        return (
            f"DownloadPlan(key={self.key}, version={self.version}, "
            f"status={self.status}, url={url})"
        )


class ArtifactConfigManager:
    """
    Creates download plans from the artifacts configuration and tracks their outcome.
    """

    def __init__(
        self,
        artifacts_config: ArtifactsConfig,
        resolver: LinkResolver,
        root_dir: pathlib.Path,
        logger: RelfetchLogger,
    ):
        """
        Args:
            artifacts_config: Loaded artifacts configuration
            resolver: Resolver used to build download links
            root_dir: Directory the <arch>/<environment>/bin tree lives under
            logger: Logger for plan failures
        """
        self.artifacts_config = artifacts_config
        self.resolver = resolver
        self.root_dir = pathlib.Path(root_dir)
        self.logger = logger
        self.download_plans: List[DownloadPlan] = []

    def create_download_plan(self, target: Target) -> List[DownloadPlan]:
        """
        Create one plan per declared component for the target.

        Declarations that cannot be resolved become FAILED plans; they never stop the others.
        """
        self.download_plans = []
        for environment in self.artifacts_config.environment_names():
            try:
                declarations = list(self.artifacts_config.iter_declarations(environment))
            except TypeError as e:
                self.logger.log(f"Skipping environment {environment}: {e}", logging.ERROR)
                self.download_plans.append(
                    DownloadPlan(environment, "", "", "", status=DownloadStatus.FAILED, error_message=str(e))
                )
                continue

            for component_key, version in declarations:
                self.download_plans.append(
                    self._create_plan_for_component(environment, component_key, version, target)
                )

        return self.download_plans

    def _create_plan_for_component(
        self, environment: str, component_key: str, version: str, target: Target
    ) -> DownloadPlan:
        software = TextUtils.strip_version_suffix(component_key)
        plan = DownloadPlan(environment, component_key, software, version)

        try:
            link = self.resolver.resolve(software, version, target.platform, target.arch)
        except ResolutionError as e:
            self.logger.log(f"{software} v{version} failed to resolve: {e}", logging.ERROR)
            plan.status = DownloadStatus.FAILED
            plan.error_message = str(e)
            return plan

        plan.job = DownloadJob(
            environment=environment,
            component_key=component_key,
            software=software,
            version=link.version,
            platform=target.platform,
            arch=target.arch,
            url=link.url,
            destination_path=self.get_destination_path(environment, target, link.url),
        )
        return plan

    def get_destination_path(self, environment: str, target: Target, url: str) -> pathlib.Path:
        """
        <root>/<arch>/<environment>/bin/<basename of the URL>
        """
        return (
            self.root_dir / target.arch / environment / "bin" / LinkResolver.filename_from_url(url)
        )

    def get_pending_downloads(self) -> List[DownloadPlan]:
        return [p for p in self.download_plans if p.status == DownloadStatus.PENDING]

    def mark_download_completed(
        self, plan: DownloadPlan, success: bool = True, error_message: Optional[str] = None
    ) -> None:
        """
        Mark a download plan as completed or failed.
        """
        plan.status = DownloadStatus.COMPLETED if success else DownloadStatus.FAILED
        plan.error_message = None if success else (error_message or "Download failed")

    def get_failed_plans(self) -> List[DownloadPlan]:
        return [p for p in self.download_plans if p.status == DownloadStatus.FAILED]

    def get_download_summary(self) -> Dict[str, int]:
        """
        Counts of completed, failed and pending plans.
        """
        completed = sum(1 for p in self.download_plans if p.status == DownloadStatus.COMPLETED)
        failed = len(self.get_failed_plans())
        pending = len(self.get_pending_downloads())
        return {
            "completed": completed,
            "failed": failed,
            "pending": pending,
            "total": len(self.download_plans),
        }

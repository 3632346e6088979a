"""
Runs installation passes: one pass per target, one download per declared component.
"""

import logging
from typing import Dict, List, Optional

import httpx

from relfetch.artifact_config import ArtifactConfigManager, read_config
from relfetch.artifact_downloader import ArtifactDownloader
from relfetch.artifact_resolver import LinkResolver
from relfetch.relfetch_config import RelfetchConfig, Target
from relfetch.relfetch_logger import RelfetchLogger


def build_client(config: RelfetchConfig) -> httpx.AsyncClient:
    """
    HTTP client for a run. Redirects are followed by the downloader, not by httpx.
    """
    kwargs = {}
    if config.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(config.http_timeout_seconds)
    return httpx.AsyncClient(follow_redirects=False, **kwargs)


class ArtifactInstaller:
    """
    Downloads every artifact declared in the config file for each configured target.
    """

    def __init__(
        self,
        config: RelfetchConfig,
        logger: RelfetchLogger,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self.logger = logger
        self.client = client
        self.resolver = LinkResolver(config.download_prefixes, logger)

    async def install_all_targets(self) -> List[Dict[str, int]]:
        """
        Run one pass per configured target, sequentially.

        Raises:
            ConfigError: the config file could not be read or parsed
        """
        owns_client = self.client is None
        client = self.client or build_client(self.config)
        try:
            return [
                await self.install_all_software(target, client) for target in self.config.targets
            ]
        finally:
            if owns_client:
                await client.aclose()

    async def install_all_software(self, target: Target, client: httpx.AsyncClient) -> Dict[str, int]:
        """
        Download all declared components for one target. Individual failures are logged
        and counted, they do not stop the pass.

        Returns:
            The download summary of the pass
        """
        artifacts_config = read_config(self.config.config_path, self.logger)

        config_manager = ArtifactConfigManager(
            artifacts_config=artifacts_config,
            resolver=self.resolver,
            root_dir=self.config.root_dir,
            logger=self.logger,
        )
        plans = config_manager.create_download_plan(target)

        downloader = ArtifactDownloader(
            client,
            self.logger,
            max_redirects=self.config.max_redirects,
            progress_step_percent=self.config.progress_step_percent,
            chunk_size=self.config.chunk_size,
        )

        self.logger.log(f"Installing {len(plans)} components for {target}", logging.INFO)
        await downloader.download_all_pending(config_manager)

        summary = config_manager.get_download_summary()
        self.logger.log(
            f"Finished {target}: {summary['completed']} completed, "
            f"{summary['failed']} failed, {summary['pending']} pending of {len(plans)}",
            logging.INFO if summary["failed"] == 0 else logging.WARNING,
        )
        return summary

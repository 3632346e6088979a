"""
Artifact downloader implementation.

Handles streaming release archives to disk and updating download plan states.
"""

import logging
import os
import pathlib
from typing import Callable, Optional, Union

import httpx

from relfetch.artifact_config import ArtifactConfigManager, DownloadPlan, DownloadStatus
from relfetch.relfetch_exceptions import (
    DownloadError,
    DownloadHTTPError,
    NetworkError,
    RenameError,
    TooManyRedirectsError,
)
from relfetch.relfetch_logger import RelfetchLogger
from relfetch.relfetch_utils import FileUtils, TextUtils

REDIRECT_STATUS_CODES = (301, 302)

# (received_bytes, total_bytes or None, percent or None)
ProgressCallback = Callable[[int, Optional[int], Optional[int]], None]


class ArtifactDownloader:
    """
    Downloads artifacts into the local cache.

    A download is skipped when the destination already exists. Bodies are streamed to
    ``<destination>.tmp`` and moved into place only once complete.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        logger: RelfetchLogger,
        max_redirects: int = 5,
        progress_step_percent: int = 5,
        chunk_size: int = 64 * 1024,
        on_progress: Optional[ProgressCallback] = None,
    ):
        """
        Args:
            client: HTTP client, used without automatic redirect following
            logger: Logger for progress and error messages
            max_redirects: Redirect hops allowed per download
            progress_step_percent: Minimum progress advance between two notifications
            chunk_size: Size of the chunks read from the response body
            on_progress: Progress callback, defaults to logging the progress
        """
        self.client = client
        self.logger = logger
        self.max_redirects = max_redirects
        self.progress_step_percent = progress_step_percent
        self.chunk_size = chunk_size
        self.on_progress = on_progress or self._log_progress

    async def download(self, url: str, destination_path: Union[str, pathlib.Path]) -> pathlib.Path:
        """
        Download ``url`` to ``destination_path`` unless that file already exists.

        Returns:
            The destination path

        Raises:
            DownloadHTTPError: the server answered with an unexpected status
            TooManyRedirectsError: more than ``max_redirects`` redirects were followed
            NetworkError: the transfer failed at the transport level
            RenameError: the completed file could not be moved into place
            DownloadError: the URL is invalid or the response could not be read
        """
        destination = pathlib.Path(destination_path)
        if destination.exists():
            self.logger.log(f"File already exists: {destination}", logging.INFO)
            return destination

        destination.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = pathlib.Path(f"{destination}.tmp")

        self.logger.log(f"Starting download: {url}", logging.INFO)
        self.logger.log(f"Destination: {destination}", logging.INFO)

        try:
            await self._fetch(url, tmp_path)
        except Exception:
            FileUtils.remove_quietly(self.logger, str(tmp_path))
            raise

        try:
            os.replace(tmp_path, destination)
        except OSError as e:
            FileUtils.remove_quietly(self.logger, str(tmp_path))
            raise RenameError(str(tmp_path), str(destination), str(e)) from e

        self.logger.log(f"Download complete: {destination}", logging.INFO)
        return destination

    async def _fetch(self, url: str, tmp_path: pathlib.Path) -> None:
        try:
            current_url = httpx.URL(url)
        except httpx.InvalidURL as e:
            raise DownloadError(f"Invalid download URL {url!r}: {e}", url) from e

        for _ in range(self.max_redirects + 1):
            try:
                async with self.client.stream("GET", current_url) as response:
                    if response.status_code in REDIRECT_STATUS_CODES:
                        location = response.headers.get("location")
                        if not location:
                            raise DownloadHTTPError(
                                response.status_code, str(current_url), "redirect without Location header"
                            )
                        current_url = current_url.join(location)
                        self.logger.log(f"Redirected to: {current_url}", logging.INFO)
                        continue

                    if response.status_code != 200:
                        raise DownloadHTTPError(
                            response.status_code, str(current_url), response.reason_phrase
                        )

                    await self._stream_to_file(response, tmp_path)
                    return
            except httpx.TransportError as e:
                raise NetworkError(f"Network error while fetching {current_url}: {e}", str(current_url)) from e
            except (httpx.HTTPError, httpx.InvalidURL, httpx.StreamError) as e:
                raise DownloadError(f"Failed to fetch {current_url}: {e}", str(current_url)) from e

        raise TooManyRedirectsError(url, self.max_redirects)

    async def _stream_to_file(self, response: httpx.Response, tmp_path: pathlib.Path) -> None:
        content_length = response.headers.get("content-length")
        total_bytes = int(content_length) if content_length and content_length.isdigit() else None
        received_bytes = 0
        last_progress = 0

        with open(tmp_path, "wb") as f:
            async for chunk in response.aiter_bytes(self.chunk_size):
                f.write(chunk)
                received_bytes += len(chunk)

                if not total_bytes:
                    continue
                progress = received_bytes * 100 // total_bytes
                if progress - last_progress >= self.progress_step_percent:
                    self.on_progress(received_bytes, total_bytes, progress)
                    last_progress = progress

    def _log_progress(self, received_bytes: int, total_bytes: Optional[int], progress: Optional[int]) -> None:
        self.logger.log(
            f"Download progress: {progress}% "
            f"({TextUtils.format_bytes(received_bytes)}/{TextUtils.format_bytes(total_bytes or 0)})",
            logging.INFO,
        )

    async def download_all_pending(self, config_manager: ArtifactConfigManager) -> bool:
        """
        Download all pending plans of the config manager, one after another.

        Returns:
            True if every plan succeeded, False if any failed
        """
        pending = config_manager.get_pending_downloads()

        if not pending:
            self.logger.log("No pending downloads", logging.INFO)
            return not config_manager.get_failed_plans()

        all_succeeded = not config_manager.get_failed_plans()
        environment = None
        for plan in pending:
            if plan.environment != environment:
                environment = plan.environment
                self.logger.log(f"===== Checking software of environment {environment} =====", logging.INFO)
            success = await self.download_plan(config_manager, plan)
            if not success:
                all_succeeded = False

        return all_succeeded

    async def download_plan(self, config_manager: ArtifactConfigManager, plan: DownloadPlan) -> bool:
        """
        Download a single plan. Failures are logged and recorded on the plan, never raised.

        Returns:
            True if download succeeded, False otherwise
        """
        job = plan.job
        self.logger.log(f"Checking {plan.software} v{plan.version}...", logging.INFO)
        self.logger.log(f"Source: {job.url}", logging.INFO)

        plan.status = DownloadStatus.IN_PROGRESS
        try:
            await self.download(job.url, job.destination_path)
        except Exception as e:
            error_msg = f"{plan.software} v{plan.version} failed to install: {e}"
            self.logger.log(error_msg, logging.ERROR)
            config_manager.mark_download_completed(plan, success=False, error_message=error_msg)
            return False

        config_manager.mark_download_completed(plan, success=True)
        self.logger.log(f"{plan.software} v{plan.version} is ready", logging.INFO)
        return True

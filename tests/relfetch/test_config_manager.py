"""
Tests for reading the artifacts configuration and planning downloads.
"""

import pathlib

import pytest

from relfetch.artifact_config import ArtifactConfigManager, DownloadStatus, read_config
from relfetch.artifact_models import ArtifactsConfig
from relfetch.relfetch_config import Target
from relfetch.relfetch_exceptions import ConfigParseError, ConfigReadError


class TestReadConfig:
    """Tests for read_config."""

    def test_reads_environments(self, write_config, logger):
        path = write_config({"prod": {"jdk-version": "17"}, "staging": {"redis-version": "7"}})

        config = read_config(path, logger)

        assert config.environment_names() == ("prod", "staging")
        assert list(config.iter_declarations("prod")) == [("jdk-version", "17")]

    def test_missing_file(self, tmp_path, logger):
        with pytest.raises(ConfigReadError):
            read_config(tmp_path / "missing.json", logger)

    def test_invalid_json(self, tmp_path, logger):
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigParseError):
            read_config(path, logger)

    def test_top_level_must_be_object(self, write_config, logger):
        with pytest.raises(ConfigParseError):
            read_config(write_config(["jdk-version"]), logger)

    def test_numeric_versions_are_stringified(self, write_config, logger):
        config = read_config(write_config({"prod": {"jdk-version": 17}}), logger)
        assert list(config.iter_declarations("prod")) == [("jdk-version", "17")]


class TestArtifactConfigManager:
    """Tests for ArtifactConfigManager."""

    def _manager(self, data, resolver, logger, root=pathlib.Path("/cache")):
        return ArtifactConfigManager(ArtifactsConfig.from_dict(data), resolver, root, logger)

    def test_plan_for_jdk(self, resolver, logger, tmp_path):
        manager = self._manager({"prod": {"jdk-version": "17"}}, resolver, logger, tmp_path)

        plans = manager.create_download_plan(Target("linux", "amd64"))

        assert len(plans) == 1
        job = plans[0].job
        assert plans[0].status == DownloadStatus.PENDING
        assert job.software == "jdk"
        assert job.url.endswith("/java-release/releases/download/v17/openjdk-17-linux-amd64.tar.gz")
        assert job.destination_path == tmp_path / "amd64" / "prod" / "bin" / "openjdk-17-linux-amd64.tar.gz"

    def test_unresolvable_components_fail_without_stopping_others(self, resolver, logger):
        manager = self._manager(
            {"prod": {"nginx-version": "1.25", "postgresql-version": "16"}}, resolver, logger
        )

        plans = manager.create_download_plan(Target("linux", "arm64"))

        assert [p.status for p in plans] == [DownloadStatus.FAILED, DownloadStatus.PENDING]
        assert "nginx" in plans[0].error_message
        assert plans[0].job is None
        assert manager.get_pending_downloads() == [plans[1]]

    def test_unsupported_platform_fails_plan(self, resolver, logger):
        manager = self._manager({"prod": {"jdk-version": "17"}}, resolver, logger)

        plans = manager.create_download_plan(Target("darwin", "arm64"))

        assert plans[0].status == DownloadStatus.FAILED

    def test_malformed_environment_is_a_failed_plan(self, resolver, logger):
        manager = self._manager({"broken": "17", "prod": {"redis-version": "7"}}, resolver, logger)

        plans = manager.create_download_plan(Target("linux", "amd64"))

        assert plans[0].environment == "broken"
        assert plans[0].status == DownloadStatus.FAILED
        assert plans[1].status == DownloadStatus.PENDING

    def test_redis_windows_plan_uses_pinned_version(self, resolver, logger):
        manager = self._manager({"prod": {"redis-version": "7"}}, resolver, logger, pathlib.Path("/c"))

        job = manager.create_download_plan(Target("windows", "x64"))[0].job

        assert job.version == "5"
        assert job.destination_path == pathlib.Path("/c/x64/prod/bin/redis-5-windows-x64.zip")

    def test_key_without_suffix_is_used_as_is(self, resolver, logger):
        manager = self._manager({"prod": {"jdk": "17"}}, resolver, logger)

        plans = manager.create_download_plan(Target("linux", "amd64"))

        assert plans[0].software == "jdk"
        assert plans[0].status == DownloadStatus.PENDING

    def test_summary(self, resolver, logger):
        manager = self._manager(
            {"prod": {"jdk-version": "17", "redis-version": "7", "nginx-version": "1"}}, resolver, logger
        )
        plans = manager.create_download_plan(Target("linux", "amd64"))
        manager.mark_download_completed(plans[0], success=True)

        assert manager.get_download_summary() == {"completed": 1, "failed": 1, "pending": 1, "total": 3}

        manager.mark_download_completed(plans[1], success=False)
        assert plans[1].error_message == "Download failed"
        assert manager.get_download_summary()["failed"] == 2

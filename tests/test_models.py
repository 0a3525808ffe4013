"""Tests for i4tow models."""
import pytest
from i4tow.models import (
    AlbumResult,
    ProgressEvent,
    PublishConfig,
    PublishMode,
    PublishStatus,
    RepoCreationOutcome,
    SecretProvisionOutcome,
)


class TestAlbumResult:
    def test_ok_result(self):
        result = AlbumResult.ok(
            name="i4tow-Trip",
            repo_url="https://github.com/octocat/i4tow-Trip",
            album_url="https://rathnasorg.github.io/i4tow/a/i4tow-Trip",
            photo_count=4,
        )
        assert result.success is True
        assert result.status == PublishStatus.SUCCESS
        assert result.error is None
        assert result.photo_count == 4
        assert result.warnings == ()

    def test_fail_result_has_empty_urls(self):
        result = AlbumResult.fail(name="i4tow-Trip", error="boom", photo_count=3)
        assert result.success is False
        assert result.status == PublishStatus.FAILED
        assert result.repo_url == ""
        assert result.album_url == ""
        assert result.photo_count == 3
        assert result.error == "boom"

    def test_warnings_are_a_tuple(self):
        result = AlbumResult.ok("n", "r", "a", 1, warnings=["secret failed"])
        assert result.warnings == ("secret failed",)

    def test_immutable(self):
        result = AlbumResult.ok("n", "r", "a", 1)
        with pytest.raises(Exception):
            result.name = "other"


class TestOutcomes:
    def test_repo_outcomes(self):
        assert RepoCreationOutcome.created().already_existed is False
        existing = RepoCreationOutcome.existing()
        assert existing.success is True
        assert existing.already_existed is True
        failed = RepoCreationOutcome.failed("nope")
        assert failed.success is False
        assert failed.error == "nope"

    def test_secret_outcomes(self):
        assert SecretProvisionOutcome.ok().success is True
        assert SecretProvisionOutcome.failed("x").error == "x"


class TestPublishMode:
    def test_labels(self):
        assert PublishMode().label == "auto"
        assert PublishMode(force_single=True).label == "single"
        assert PublishMode(force_batch=True).label == "batch"
        assert PublishMode(force_single=True, force_batch=True).label == "single"


class TestPublishConfig:
    def test_defaults(self):
        config = PublishConfig()
        assert config.repo_prefix == "i4tow-"
        assert config.photos_subpath == "public/photos/raw2"
        assert config.max_push_attempts == 3
        assert config.secret_name == "DEPLOY_TOKEN"

    def test_template_label(self):
        assert PublishConfig().template_label == "rathnasorg/i4tow-album"
        config = PublishConfig(template_url="https://example.com/acme/gallery/")
        assert config.template_label == "acme/gallery"


def test_progress_event_str():
    assert str(ProgressEvent("Copying photos", "2 files")) == "Copying photos: 2 files"
    assert str(ProgressEvent("Done")) == "Done"

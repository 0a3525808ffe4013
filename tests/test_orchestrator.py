"""End-to-end tests for AlbumOrchestrator with fake GitHub and git."""
import base64
import json
from pathlib import Path
from unittest.mock import AsyncMock

import httpx
import pytest
from nacl.public import PrivateKey

from i4tow.models import GitHubCredentials, PublishConfig, PublishMode
from i4tow.orchestrator import AlbumOrchestrator

CREDENTIALS = GitHubCredentials(token="tok", username="octocat")


class FakeGit:
    """Records git calls and writes a tiny template on clone."""

    def __init__(self, push_failures=0):
        self.push_failures = push_failures
        self.pushes = 0
        self.workspaces = []

    async def shallow_clone(self, url, dest):
        dest = Path(dest)
        self.workspaces.append(dest)
        (dest / ".git").mkdir(parents=True, exist_ok=True)
        (dest / "index.html").write_text("<html></html>")

    async def init_repository(self, path, remote_url, branch):
        pass

    async def commit_all(self, path, message):
        pass

    async def push(self, path, branch):
        self.pushes += 1
        if self.pushes <= self.push_failures:
            raise RuntimeError("remote: Repository not found.")


def _github(calls):
    public_key = base64.b64encode(bytes(PrivateKey.generate().public_key)).decode("ascii")

    def handler(request):
        calls.append((request.method, request.url.path))
        path = request.url.path
        if path == "/user":
            return httpx.Response(200, json={"login": "octocat"})
        if request.method == "POST" and path == "/user/repos":
            name = json.loads(request.content)["name"]
            return httpx.Response(201, json={"full_name": f"octocat/{name}"})
        if path.endswith("/public-key"):
            return httpx.Response(200, json={"key": public_key, "key_id": "k1"})
        if request.method == "PUT":
            return httpx.Response(201, json={})
        return httpx.Response(404, json={"message": "Not Found"})

    return httpx.MockTransport(handler)


def _config(tmp_path):
    return PublishConfig(workspace_root=tmp_path / "workspaces")


@pytest.fixture
def root(tmp_path):
    root = tmp_path / "Photos"
    (root / "Album1").mkdir(parents=True)
    (root / "Album1" / "one.jpg").write_bytes(b"1")
    (root / "Album2").mkdir()
    (root / "Album2" / "two.heic").write_bytes(b"2")
    (root / "Album2" / "three.webp").write_bytes(b"3")
    (root / "EmptyAlbum").mkdir()
    return root


@pytest.mark.asyncio
async def test_batch_publishes_each_album_sequentially(tmp_path, root):
    calls = []
    git = FakeGit()
    sleep = AsyncMock()
    started, completed, progress = [], [], []

    async with AlbumOrchestrator(_config(tmp_path), transport=_github(calls), git=git, sleep=sleep) as orchestrator:
        orchestrator.on("album_start", started.append)
        orchestrator.on("album_complete", completed.append)
        orchestrator.on("progress", progress.append)
        results = await orchestrator.process_directory(root, CREDENTIALS, PublishMode(force_batch=True))

    assert [r.name for r in results] == ["i4tow-Album1", "i4tow-Album2"]
    assert all(r.success for r in results)
    assert [r.photo_count for r in results] == [1, 2]
    assert [r.repo_name_hint for r in started] == ["Album1", "Album2"]
    assert completed == results
    assert git.pushes == 2
    assert [e.step for e in progress].count("Done") == 2

    # one fresh workspace per album, removed afterwards
    assert len(git.workspaces) == 2
    assert git.workspaces[0] != git.workspaces[1]
    assert all(not ws.exists() for ws in git.workspaces)

    posts = [c for c in calls if c[0] == "POST"]
    assert len(posts) == 2


@pytest.mark.asyncio
async def test_failed_album_does_not_stop_batch(tmp_path, root):
    calls = []
    git = FakeGit(push_failures=3)  # first album exhausts its attempts

    async with AlbumOrchestrator(_config(tmp_path), transport=_github(calls), git=git, sleep=AsyncMock()) as orchestrator:
        results = await orchestrator.process_directory(root, CREDENTIALS, PublishMode(force_batch=True))

    assert [r.success for r in results] == [False, True]
    assert results[0].error.startswith("Repository not found")
    assert git.pushes == 4


@pytest.mark.asyncio
async def test_dry_run_makes_no_network_calls(tmp_path):
    album = tmp_path / "Trip"
    album.mkdir()
    (album / "a.jpg").write_bytes(b"a")
    (album / "b.png").write_bytes(b"b")

    def refuse(request):
        raise AssertionError(f"unexpected request {request.method} {request.url}")

    git = FakeGit()
    async with AlbumOrchestrator(
        _config(tmp_path), transport=httpx.MockTransport(refuse), git=git
    ) as orchestrator:
        results = await orchestrator.process_directory(album, CREDENTIALS, PublishMode(dry_run=True))

    assert len(results) == 1
    assert results[0].success is True
    assert results[0].name == "i4tow-Trip"
    assert results[0].photo_count == 2
    assert results[0].repo_url == "https://github.com/octocat/i4tow-Trip"
    assert git.workspaces == []


@pytest.mark.asyncio
async def test_create_album_single_folder(tmp_path):
    album = tmp_path / "Trip"
    album.mkdir()
    (album / "a.jpg").write_bytes(b"a")
    calls = []

    async with AlbumOrchestrator(
        _config(tmp_path), transport=_github(calls), git=FakeGit(), sleep=AsyncMock()
    ) as orchestrator:
        result = await orchestrator.create_album(album, "Trip", CREDENTIALS)

    assert result.success is True
    assert result.album_url.endswith("/i4tow-Trip")
    assert ("PUT", "/repos/octocat/i4tow-Trip/actions/secrets/DEPLOY_TOKEN") in calls

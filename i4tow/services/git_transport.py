"""
Git transport - clone, commit and push through GitPython.

GitPython calls block, so each one runs in a worker thread.
"""
import asyncio
import logging
from pathlib import Path
from typing import Optional

from git import Git, Repo
from git.exc import CommandError

from ..protocols import IGitTransport

logger = logging.getLogger(__name__)


class GitTransport(IGitTransport):
    """Version-control operations used to publish an album."""

    async def shallow_clone(self, url: str, dest: Path) -> None:
        logger.debug("Cloning %s into %s", url, dest)
        await asyncio.to_thread(Repo.clone_from, url, str(dest), depth=1)

    async def init_repository(self, path: Path, remote_url: str, branch: str) -> None:
        def _init():
            repo = Repo.init(str(path), initial_branch=branch)
            repo.create_remote("origin", remote_url)

        await asyncio.to_thread(_init)

    async def commit_all(self, path: Path, message: str) -> None:
        def _commit():
            repo = Repo(str(path))
            repo.git.add(A=True)
            repo.index.commit(message)

        await asyncio.to_thread(_commit)

    async def push(self, path: Path, branch: str) -> None:
        """Force-push branch to origin and track it."""
        def _push():
            repo = Repo(str(path))
            results = repo.remote("origin").push(
                refspec=branch, force=True, set_upstream=True
            )
            results.raise_if_error()

        await asyncio.to_thread(_push)

    @staticmethod
    def configured_username() -> Optional[str]:
        """`git config user.name`, or None when unset or git is missing."""
        try:
            name = Git().config("user.name").strip()
        except (CommandError, OSError):
            return None
        return name or None

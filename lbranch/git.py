"""Async git subprocess wrapper."""

import asyncio
import logging
from pathlib import Path

from lbranch.errors import SubprocessError

logger = logging.getLogger(__name__)


class Git:
    def __init__(self, cwd: Path | None = None) -> None:
        self.cwd = cwd

    async def _exec(self, *args: str) -> str:
        logger.debug("git %s", " ".join(args))
        try:
            proc = await asyncio.create_subprocess_exec(
                "git",
                *args,
                cwd=self.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise SubprocessError(f"git {args[0]} failed: {exc}") from exc
        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            raise SubprocessError(f"git {args[0]} failed: {stderr.decode(errors='replace').strip()}")
        return stdout.decode(errors="replace").strip()

    async def current_branch(self) -> str:
        return await self._exec("symbolic-ref", "--short", "HEAD")

    async def root(self) -> Path | None:
        """Return the repository root, or None outside a work tree."""
        try:
            return Path(await self._exec("rev-parse", "--show-toplevel"))
        except SubprocessError:
            return None

    async def user_name(self) -> str | None:
        try:
            return await self._exec("config", "user.name") or None
        except SubprocessError:
            return None

    async def pull(self, branch: str, remote: str = "origin") -> None:
        await self._exec("pull", remote, branch, "--quiet")

    async def create_branch(self, name: str) -> None:
        await self._exec("checkout", "-b", name)

    async def rename_branch(self, name: str) -> None:
        await self._exec("branch", "-m", name)

"""External processes the generator drives: git, the package manager and the dev server.

Each collaborator is a thin wrapper around ``run_command``.  The transaction
only depends on their method signatures, so tests substitute ``AsyncMock``
instances.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from create_viant.config import DEFAULT_COMMIT_MESSAGE
from create_viant.errors import ErrorKind, ProjectGenerationError
from create_viant.options.models import PackageManager
from create_viant.utils import run_command


class GitInitializer:
    """Creates a repository with a single initial commit."""

    def __init__(
        self,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
        env: Optional[dict[str, str]] = None,
        timeout: float = 60.0,
    ) -> None:
        self.commit_message = commit_message
        self.env = env or {}
        self.timeout = timeout

    async def init(self, cwd: str | Path) -> None:
        """Run ``git init``, ``git add .`` and the initial commit in *cwd*.

        Raises:
            ProjectGenerationError: ``GIT_FAILED`` if git is missing or any
                step exits non-zero.
        """
        steps = [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", self.commit_message],
        ]
        for cmd in steps:
            try:
                rc, _, stderr = await run_command(
                    cmd, cwd=cwd, timeout=self.timeout, env=self.env
                )
            except OSError as exc:
                raise ProjectGenerationError(
                    f"git is not available: {exc}", ErrorKind.GIT_FAILED, recoverable=True
                ) from exc
            if rc != 0:
                raise ProjectGenerationError(
                    f"Git command failed (exit {rc}): {' '.join(cmd)}\n{stderr}",
                    ErrorKind.GIT_FAILED,
                    recoverable=True,
                )


class PackageInstaller:
    """Runs ``<pm> install`` and reports the exit code."""

    def __init__(self, timeout: Optional[float] = 600) -> None:
        self.timeout = timeout

    async def install(self, manager: PackageManager, cwd: str | Path) -> int:
        try:
            rc, _, _ = await run_command(
                [manager.value, "install"], cwd=cwd, timeout=self.timeout
            )
        except OSError:
            return 127
        return rc


class DevServer:
    """Starts ``<pm> run dev`` with inherited stdio and waits for it to exit."""

    async def run(self, manager: PackageManager, cwd: str | Path) -> int:
        try:
            rc, _, _ = await run_command(
                [manager.value, "run", "dev"], cwd=cwd, timeout=None, capture=False
            )
        except OSError:
            return 127
        return rc

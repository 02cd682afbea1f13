"""Tests for the git / install / dev-server wrappers.

``run_command`` is patched, so no real processes are spawned.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from create_viant.errors import ErrorKind, ProjectGenerationError
from create_viant.options.models import PackageManager
from create_viant.scaffolder.collaborators import DevServer, GitInitializer, PackageInstaller


_RUN = "create_viant.scaffolder.collaborators.run_command"


class TestGitInitializer:

    async def test_runs_init_add_commit(self, tmp_path: Path):
        mock = AsyncMock(return_value=(0, "", ""))
        git = GitInitializer(commit_message="first", env={"GIT_AUTHOR_NAME": "Dev"})
        with patch(_RUN, mock):
            await git.init(tmp_path)

        commands = [call.args[0] for call in mock.call_args_list]
        assert commands == [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", "first"],
        ]
        assert mock.call_args_list[-1].kwargs["env"] == {"GIT_AUTHOR_NAME": "Dev"}
        assert mock.call_args_list[0].kwargs["cwd"] == tmp_path

    async def test_non_zero_exit_stops_and_raises(self, tmp_path: Path):
        mock = AsyncMock(side_effect=[(0, "", ""), (128, "", "fatal: bad")])
        with patch(_RUN, mock):
            with pytest.raises(ProjectGenerationError) as exc_info:
                await GitInitializer().init(tmp_path)

        assert exc_info.value.kind is ErrorKind.GIT_FAILED
        assert exc_info.value.recoverable is True
        assert "fatal: bad" in str(exc_info.value)
        assert mock.call_count == 2

    async def test_missing_git(self, tmp_path: Path):
        with patch(_RUN, AsyncMock(side_effect=FileNotFoundError("git"))):
            with pytest.raises(ProjectGenerationError) as exc_info:
                await GitInitializer().init(tmp_path)
        assert exc_info.value.kind is ErrorKind.GIT_FAILED


class TestPackageInstaller:

    async def test_returns_exit_code(self, tmp_path: Path):
        mock = AsyncMock(return_value=(1, "", "ERR"))
        with patch(_RUN, mock):
            rc = await PackageInstaller(timeout=30).install(PackageManager.PNPM, tmp_path)
        assert rc == 1
        assert mock.call_args.args[0] == ["pnpm", "install"]
        assert mock.call_args.kwargs["timeout"] == 30

    async def test_missing_manager(self, tmp_path: Path):
        with patch(_RUN, AsyncMock(side_effect=FileNotFoundError("bun"))):
            assert await PackageInstaller().install(PackageManager.BUN, tmp_path) == 127


class TestDevServer:

    async def test_inherits_stdio_without_timeout(self, tmp_path: Path):
        mock = AsyncMock(return_value=(0, "", ""))
        with patch(_RUN, mock):
            assert await DevServer().run(PackageManager.YARN, tmp_path) == 0
        assert mock.call_args.args[0] == ["yarn", "run", "dev"]
        assert mock.call_args.kwargs["capture"] is False
        assert mock.call_args.kwargs["timeout"] is None

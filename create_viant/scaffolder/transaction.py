"""The generation transaction: directory, template, files, git, install.

State machine::

    IDLE -> DIRECTORY_CREATED -> TEMPLATE_COPIED -> FILES_CUSTOMIZED
         -> [GIT_INITIALIZED] -> [DEPENDENCIES_INSTALLED] -> COMPLETED

``FAILED`` is reachable from every state before ``FILES_CUSTOMIZED``.  Any
failure after the project directory was created removes it again; a failure
while still ``IDLE`` leaves the filesystem untouched.  Git and install
failures are warnings and never roll back.  The dev server is started
separately, through ``start_dev_server``, once the result has been reported.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from create_viant.config import Config
from create_viant.errors import (
    CleanupResult,
    ErrorKind,
    ProjectGenerationError,
    cleanup_project,
    wrap_error,
)
from create_viant.manifest.builder import ManifestBuilder
from create_viant.manifest.models import ProjectFiles
from create_viant.options.models import Selection, Styling
from create_viant.scaffolder.collaborators import DevServer, GitInitializer, PackageInstaller
from create_viant.scaffolder.template_store import TemplateStore
from create_viant.utils import create_progress, load_json, print_step, print_warning


# ---------------------------------------------------------------------------
# States and result
# ---------------------------------------------------------------------------

class GenerationState(str, Enum):
    IDLE = "idle"
    DIRECTORY_CREATED = "directory_created"
    TEMPLATE_COPIED = "template_copied"
    FILES_CUSTOMIZED = "files_customized"
    GIT_INITIALIZED = "git_initialized"
    DEPENDENCIES_INSTALLED = "dependencies_installed"
    COMPLETED = "completed"
    FAILED = "failed"


class GenerationStatus(str, Enum):
    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class GenerationResult:
    """Outcome of one transaction, returned to the CLI for display and exit status."""

    success: bool
    project_path: Path
    status: GenerationStatus
    error: Optional[ProjectGenerationError] = None
    cleanup: Optional[CleanupResult] = None
    warnings: list[str] = field(default_factory=list)
    install_failed: bool = False
    dev_server_ready: bool = False

    @property
    def exit_code(self) -> int:
        if self.status is GenerationStatus.FAILED:
            return 1
        if self.status is GenerationStatus.PARTIAL and self.install_failed:
            return 1
        return 0


# ---------------------------------------------------------------------------
# Transaction
# ---------------------------------------------------------------------------

class GenerationTransaction:
    """Turns a ``Selection`` into a project directory, all or nothing.

    Collaborators default to the real implementations; tests pass fakes.
    A transaction runs once.
    """

    def __init__(
        self,
        selection: Selection,
        config: Optional[Config] = None,
        store: Optional[TemplateStore] = None,
        builder: Optional[ManifestBuilder] = None,
        git: Optional[GitInitializer] = None,
        installer: Optional[PackageInstaller] = None,
        dev_server: Optional[DevServer] = None,
    ) -> None:
        self.selection = selection
        self.config = config or Config()
        self.store = store or TemplateStore(self.config.templates_dir)
        self.builder = builder or ManifestBuilder()
        self.git = git or GitInitializer(
            commit_message=self.config.git_commit_message, env=self.config.git_env()
        )
        self.installer = installer or PackageInstaller(timeout=self.config.install_timeout)
        self.dev_server = dev_server or DevServer()

        self.project_path = self.config.project_path(selection.name)
        self.state = GenerationState.IDLE
        self.history: list[GenerationState] = [GenerationState.IDLE]
        self.warnings: list[str] = []
        self.files: Optional[ProjectFiles] = None

    def _enter(self, state: GenerationState) -> None:
        self.state = state
        self.history.append(state)

    # -- Public API --------------------------------------------------------

    async def run(self) -> GenerationResult:
        """Execute every step and return the result.

        Never raises for generation failures; they are reported through the
        returned ``GenerationResult``.
        """
        if self.state is not GenerationState.IDLE:
            raise RuntimeError("GenerationTransaction.run() can only be called once")

        try:
            await self._create_directory()
        except ProjectGenerationError as exc:
            # Nothing was created, so there is nothing to clean up.
            self._enter(GenerationState.FAILED)
            return self._failure(exc, cleanup=None)

        try:
            await self._copy_template()
            await self._customize_files()
        except Exception as exc:
            error = wrap_error(exc, context=f"Generation failed in state '{self.state.value}'")
            self._enter(GenerationState.FAILED)
            cleanup = await asyncio.to_thread(cleanup_project, self.project_path)
            return self._failure(error, cleanup=cleanup)
        except BaseException:
            # Interrupted: remove the partial tree, then re-raise.
            self._enter(GenerationState.FAILED)
            cleanup_project(self.project_path)
            raise

        install_failed = False
        if self.selection.init_git:
            await self._init_git()
        if self.selection.install:
            install_failed = not await self._install()

        self._enter(GenerationState.COMPLETED)
        status = GenerationStatus.PARTIAL if self.warnings else GenerationStatus.COMPLETED
        return GenerationResult(
            success=True,
            project_path=self.project_path,
            status=status,
            warnings=list(self.warnings),
            install_failed=install_failed,
            dev_server_ready=(
                self.selection.run_dev and self.selection.install and not install_failed
            ),
        )

    async def start_dev_server(self) -> int:
        """Run ``<pm> run dev`` in the finished project and wait for it to exit.

        Raises:
            RuntimeError: If generation has not completed.
        """
        if self.state is not GenerationState.COMPLETED:
            raise RuntimeError("The dev server can only start after a completed generation")
        manager = self.selection.package_manager
        print_step(f"Starting development server with {manager.value}")
        return await self.dev_server.run(manager, self.project_path)

    def _failure(
        self, error: ProjectGenerationError, cleanup: Optional[CleanupResult]
    ) -> GenerationResult:
        return GenerationResult(
            success=False,
            project_path=self.project_path,
            status=GenerationStatus.FAILED,
            error=error,
            cleanup=cleanup,
            warnings=list(self.warnings),
        )

    # -- Steps -------------------------------------------------------------

    async def _create_directory(self) -> None:
        if self.project_path.exists():
            raise ProjectGenerationError(
                f"Directory {self.project_path} already exists", ErrorKind.DIR_EXISTS
            )
        try:
            await asyncio.to_thread(self.project_path.mkdir, parents=True, exist_ok=False)
        except FileExistsError as exc:
            raise ProjectGenerationError(
                f"Directory {self.project_path} already exists", ErrorKind.DIR_EXISTS
            ) from exc
        except OSError as exc:
            raise wrap_error(exc, context=f"Could not create {self.project_path}") from exc
        self._enter(GenerationState.DIRECTORY_CREATED)
        print_step(f"Created {self.project_path}")

    async def _copy_template(self) -> None:
        template_id = self.selection.template_id
        if not self.store.exists(template_id):
            available = ", ".join(self.store.available()) or "none"
            raise ProjectGenerationError(
                f"Template '{template_id}' not found (available: {available})",
                ErrorKind.TEMPLATE_NOT_FOUND,
            )
        try:
            await asyncio.to_thread(self.store.copy_into, template_id, self.project_path)
            if self.selection.styling is not Styling.NONE:
                await asyncio.to_thread(
                    self.store.copy_styling, self.selection.styling.value, self.project_path
                )
        except OSError as exc:
            raise ProjectGenerationError(
                f"Failed to copy template '{template_id}': {exc}", ErrorKind.COPY_FAILED
            ) from exc
        self._enter(GenerationState.TEMPLATE_COPIED)
        print_step(f"Copied template {template_id}")

    async def _customize_files(self) -> None:
        base_manifest = await asyncio.to_thread(
            self._read_template_json, "package.json", ErrorKind.PACKAGE_JSON_INVALID
        )
        base_tsconfig = None
        if self.selection.typescript:
            base_tsconfig = await asyncio.to_thread(
                self._read_template_json, "tsconfig.json", ErrorKind.CONFIG_FAILED
            )
        has_gitignore = (self.project_path / ".gitignore").exists()

        files = self.builder.build(
            self.selection,
            base_manifest=base_manifest,
            base_tsconfig=base_tsconfig,
            has_gitignore=has_gitignore,
        )
        await asyncio.to_thread(self._write_files, files)
        self.files = files
        self._enter(GenerationState.FILES_CUSTOMIZED)
        print_step(f"Wrote package.json and {len(files.documents)} config files")

    def _read_template_json(self, name: str, kind: ErrorKind) -> Optional[dict[str, Any]]:
        path = self.project_path / name
        if not path.exists():
            return None
        try:
            return load_json(path)
        except (json.JSONDecodeError, ValueError) as exc:
            raise ProjectGenerationError(f"Template {name} is malformed: {exc}", kind) from exc

    def _write_files(self, files: ProjectFiles) -> None:
        (self.project_path / "package.json").write_text(
            files.manifest.to_json(), encoding="utf-8"
        )
        for relpath, content in files.documents.items():
            target = self.project_path / relpath
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")

    async def _init_git(self) -> None:
        try:
            await self.git.init(self.project_path)
        except ProjectGenerationError as exc:
            message = f"Git initialization failed: {exc}"
            self.warnings.append(message)
            print_warning(message)
            return
        self._enter(GenerationState.GIT_INITIALIZED)
        print_step("Initialized git repository")

    async def _install(self) -> bool:
        manager = self.selection.package_manager
        with create_progress() as progress:
            progress.add_task(f"Installing dependencies with {manager.value}...", total=None)
            returncode = await self.installer.install(manager, self.project_path)
        if returncode != 0:
            message = (
                f"Dependency installation failed (exit {returncode}). "
                f"Run manually: cd {self.selection.name} && {manager.value} install"
            )
            self.warnings.append(message)
            print_warning(message)
            return False
        self._enter(GenerationState.DEPENDENCIES_INSTALLED)
        print_step(f"Installed dependencies with {manager.value}")
        return True

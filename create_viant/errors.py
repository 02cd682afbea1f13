"""Error taxonomy and cleanup for project generation.

Every failure the generator can report maps onto one ``ErrorKind``.  Each
kind has a stable identifier, a default explanation, and a remediation hint.
Generic exceptions are categorised by inspecting their message (and, for
``OSError``, their errno), so categorisation always yields exactly one kind.
"""

from __future__ import annotations

import errno
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


# ---------------------------------------------------------------------------
# Error kinds
# ---------------------------------------------------------------------------

class ErrorKind(str, Enum):
    """Closed set of generation failure categories."""
    INVALID_NAME = "INVALID_NAME"
    DIR_EXISTS = "DIR_EXISTS"
    TEMPLATE_NOT_FOUND = "TEMPLATE_NOT_FOUND"
    COPY_FAILED = "COPY_FAILED"
    INSTALL_FAILED = "INSTALL_FAILED"
    GIT_FAILED = "GIT_FAILED"
    PACKAGE_JSON_INVALID = "PACKAGE_JSON_INVALID"
    CONFIG_FAILED = "CONFIG_FAILED"
    PERMISSION_DENIED = "PERMISSION_DENIED"
    DISK_FULL = "DISK_FULL"
    UNKNOWN = "UNKNOWN"


ERROR_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.INVALID_NAME: "The project name is invalid.",
    ErrorKind.DIR_EXISTS: "A directory with this name already exists.",
    ErrorKind.TEMPLATE_NOT_FOUND: "The specified template could not be found.",
    ErrorKind.COPY_FAILED: "Failed to copy template files.",
    ErrorKind.INSTALL_FAILED: "Failed to install dependencies.",
    ErrorKind.GIT_FAILED: "Failed to initialize git repository.",
    ErrorKind.PACKAGE_JSON_INVALID: "Failed to generate a valid package.json file.",
    ErrorKind.CONFIG_FAILED: "Failed to generate configuration files.",
    ErrorKind.PERMISSION_DENIED: "Permission denied.",
    ErrorKind.DISK_FULL: "Disk is full.",
    ErrorKind.UNKNOWN: "An unexpected error occurred.",
}

ERROR_HINTS: dict[ErrorKind, str] = {
    ErrorKind.INVALID_NAME: "Use a valid npm package name: lowercase letters, digits and hyphens.",
    ErrorKind.DIR_EXISTS: "Choose a different name or remove the existing directory.",
    ErrorKind.TEMPLATE_NOT_FOUND: "Check the template name with --list-templates.",
    ErrorKind.COPY_FAILED: "Check file permissions and available disk space.",
    ErrorKind.INSTALL_FAILED: "Run the install command manually inside the project directory.",
    ErrorKind.GIT_FAILED: "Ensure git is installed and configured (user.name / user.email).",
    ErrorKind.PACKAGE_JSON_INVALID: "Check the template's package.json for syntax errors.",
    ErrorKind.CONFIG_FAILED: "Check the template's configuration files for syntax errors.",
    ErrorKind.PERMISSION_DENIED: "Check your file system permissions for the target directory.",
    ErrorKind.DISK_FULL: "Free up some disk space and try again.",
    ErrorKind.UNKNOWN: "Re-run the command; if it keeps failing, report the full error.",
}

_RECOVERABLE_KINDS = frozenset({ErrorKind.INSTALL_FAILED, ErrorKind.GIT_FAILED})


def get_error_message(kind: ErrorKind) -> str:
    """Return the default human-readable explanation for *kind*."""
    return ERROR_MESSAGES.get(kind, ERROR_MESSAGES[ErrorKind.UNKNOWN])


# ---------------------------------------------------------------------------
# Exception
# ---------------------------------------------------------------------------

class ProjectGenerationError(Exception):
    """Raised when project generation fails with a categorised cause."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind,
        *,
        recoverable: bool = False,
        hint: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.recoverable = recoverable
        self.hint = hint if hint is not None else ERROR_HINTS.get(kind)
        super().__init__(message)

    @property
    def explanation(self) -> str:
        return get_error_message(self.kind)


# ---------------------------------------------------------------------------
# Categorisation
# ---------------------------------------------------------------------------

_ERRNO_KINDS: dict[int, ErrorKind] = {
    errno.EEXIST: ErrorKind.DIR_EXISTS,
    errno.ENOENT: ErrorKind.TEMPLATE_NOT_FOUND,
    errno.EACCES: ErrorKind.PERMISSION_DENIED,
    errno.EPERM: ErrorKind.PERMISSION_DENIED,
    errno.ENOSPC: ErrorKind.DISK_FULL,
}

# Checked in order; the first kind with a matching substring wins.
_MESSAGE_RULES: list[tuple[ErrorKind, tuple[str, ...]]] = [
    (ErrorKind.DIR_EXISTS, ("eexist", "already exists")),
    (ErrorKind.TEMPLATE_NOT_FOUND, ("enoent", "not found", "no such file")),
    (ErrorKind.PERMISSION_DENIED, ("eacces", "permission denied")),
    (ErrorKind.DISK_FULL, ("enospc", "no space left", "disk full")),
    (ErrorKind.COPY_FAILED, ("copy",)),
    (ErrorKind.INSTALL_FAILED, ("install", "npm", "yarn", "pnpm")),
    (ErrorKind.GIT_FAILED, ("git",)),
    (ErrorKind.PACKAGE_JSON_INVALID, ("package.json", "json")),
    (ErrorKind.CONFIG_FAILED, ("config",)),
]


def categorize_error(error: BaseException) -> ErrorKind:
    """Map an arbitrary exception onto exactly one ``ErrorKind``.

    ``ProjectGenerationError`` keeps its own kind.  ``OSError`` instances with
    a known errno are mapped directly; everything else is matched on its
    lower-cased message, falling back to ``UNKNOWN``.
    """
    if isinstance(error, ProjectGenerationError):
        return error.kind
    if isinstance(error, OSError) and error.errno in _ERRNO_KINDS:
        return _ERRNO_KINDS[error.errno]

    message = str(error).lower()
    for kind, needles in _MESSAGE_RULES:
        if any(needle in message for needle in needles):
            return kind
    return ErrorKind.UNKNOWN


def wrap_error(error: BaseException, context: Optional[str] = None) -> ProjectGenerationError:
    """Wrap *error* in a categorised ``ProjectGenerationError``.

    The wrapped error's ``__cause__`` is set to *error*.
    """
    if isinstance(error, ProjectGenerationError):
        return error
    kind = categorize_error(error)
    message = f"{context}: {error}" if context else str(error)
    wrapped = ProjectGenerationError(
        message,
        kind,
        recoverable=kind in _RECOVERABLE_KINDS,
        hint=ERROR_HINTS[kind],
    )
    wrapped.__cause__ = error
    return wrapped


def format_error(error: BaseException) -> str:
    """Render an error as Rich markup for the console."""
    if not isinstance(error, ProjectGenerationError):
        return f"[bold red]Error:[/bold red] {error}"

    lines = [
        f"[bold red]Error [{error.kind.value}]:[/bold red] {error}",
        f"  {error.explanation}",
    ]
    if error.hint:
        lines.append(f"[yellow]Hint:[/yellow] {error.hint}")
    if error.recoverable:
        lines.append("[dim]This error may be recoverable. Please try again.[/dim]")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Cleanup
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CleanupResult:
    """Outcome of removing a partially generated project directory."""

    success: bool
    path: Path
    existed: bool
    error: Optional[str] = None


def cleanup_project(project_path: str | Path) -> CleanupResult:
    """Remove *project_path* and everything beneath it.

    Idempotent: a missing path succeeds with ``existed=False``.  Success is
    only reported once the path is verified to be gone.
    """
    path = Path(project_path)
    if not path.exists() and not path.is_symlink():
        return CleanupResult(success=True, path=path, existed=False)

    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        return CleanupResult(success=False, path=path, existed=True, error=str(exc))

    if path.exists():
        return CleanupResult(
            success=False,
            path=path,
            existed=True,
            error="Directory still exists after cleanup attempt",
        )
    return CleanupResult(success=True, path=path, existed=True)

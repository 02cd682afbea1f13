"""create-viant configuration.

Typed settings for a generation run.  Every value has a sensible default so
the CLI works with no configuration at all; ``from_env`` lets CI jobs and
scripted callers override them without extra flags.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


BUNDLED_TEMPLATES_DIR = Path(__file__).parent / "scaffolder" / "projects"
DEFAULT_COMMIT_MESSAGE = "Initial commit from Viant CLI"


class Config(BaseModel):
    """Settings shared by the CLI, the template store and the collaborators."""

    output_dir: Path = Field(default_factory=Path.cwd, description="Parent of the new project")
    templates_dir: Path = Field(default=BUNDLED_TEMPLATES_DIR)
    git_commit_message: str = Field(default=DEFAULT_COMMIT_MESSAGE)
    git_author_name: Optional[str] = Field(default=None)
    git_author_email: Optional[str] = Field(default=None)
    install_timeout: int = Field(
        default=600, ge=1, description="Package install timeout in seconds"
    )
    quiet: bool = Field(default=False)

    def project_path(self, name: str) -> Path:
        """Absolute path of the project directory for *name*."""
        return (self.output_dir / name).resolve()

    def git_env(self) -> dict[str, str]:
        """Author/committer overrides for the initial commit."""
        env: dict[str, str] = {}
        if self.git_author_name:
            env["GIT_AUTHOR_NAME"] = self.git_author_name
            env["GIT_COMMITTER_NAME"] = self.git_author_name
        if self.git_author_email:
            env["GIT_AUTHOR_EMAIL"] = self.git_author_email
            env["GIT_COMMITTER_EMAIL"] = self.git_author_email
        return env

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            VIANT_OUTPUT_DIR, VIANT_TEMPLATES_DIR, VIANT_INSTALL_TIMEOUT,
            VIANT_GIT_AUTHOR_NAME, VIANT_GIT_AUTHOR_EMAIL.

        Raises:
            pydantic.ValidationError: If a value does not validate, e.g. a
                non-numeric VIANT_INSTALL_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("VIANT_OUTPUT_DIR"):
            kwargs["output_dir"] = Path(os.environ["VIANT_OUTPUT_DIR"])
        if os.environ.get("VIANT_TEMPLATES_DIR"):
            kwargs["templates_dir"] = Path(os.environ["VIANT_TEMPLATES_DIR"])
        if os.environ.get("VIANT_INSTALL_TIMEOUT"):
            kwargs["install_timeout"] = os.environ["VIANT_INSTALL_TIMEOUT"]
        if os.environ.get("VIANT_GIT_AUTHOR_NAME"):
            kwargs["git_author_name"] = os.environ["VIANT_GIT_AUTHOR_NAME"]
        if os.environ.get("VIANT_GIT_AUTHOR_EMAIL"):
            kwargs["git_author_email"] = os.environ["VIANT_GIT_AUTHOR_EMAIL"]
        return cls(**kwargs)

"""Directory-backed store of starter templates.

Layout::

    <root>/
        react-ts/            one directory per template id
        vue-js/
        ...
        styles/<styling>/    optional overlay copied on top for a styling choice
"""

from __future__ import annotations

import re
import shutil
from pathlib import Path

from create_viant.errors import ErrorKind, ProjectGenerationError


_TEMPLATE_ID = re.compile(r"^[a-z]+-(ts|js)$")
STYLES_DIR = "styles"


class TemplateStore:
    """Looks up and copies template directory trees."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root)

    def path_for(self, template_id: str) -> Path:
        return self.root / template_id

    def exists(self, template_id: str) -> bool:
        return self.path_for(template_id).is_dir()

    def available(self) -> list[str]:
        """Return every template id in the store, sorted."""
        if not self.root.is_dir():
            return []
        return sorted(
            p.name for p in self.root.iterdir()
            if p.is_dir() and _TEMPLATE_ID.match(p.name)
        )

    def copy_into(self, template_id: str, dest: str | Path) -> None:
        """Copy the template tree into the existing directory *dest*.

        Raises:
            ProjectGenerationError: ``TEMPLATE_NOT_FOUND`` for an unknown id.
            OSError: Propagated from the copy for the caller to categorise.
        """
        source = self.path_for(template_id)
        if not source.is_dir():
            raise ProjectGenerationError(
                f"Template '{template_id}' not found in {self.root}",
                ErrorKind.TEMPLATE_NOT_FOUND,
            )
        shutil.copytree(source, dest, dirs_exist_ok=True)

    def copy_styling(self, styling: str, dest: str | Path) -> bool:
        """Overlay ``styles/<styling>/`` onto *dest* if the store has one."""
        source = self.root / STYLES_DIR / styling
        if not source.is_dir():
            return False
        shutil.copytree(source, dest, dirs_exist_ok=True)
        return True

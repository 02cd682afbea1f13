"""Pydantic v2 models for derived project output.

``Manifest`` is the typed view of ``package.json``.  ``Contribution`` is the
small record each selectable variant adds to a project, and ``ProjectFiles``
bundles the manifest with every auxiliary document to be written.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from create_viant.errors import ErrorKind, ProjectGenerationError
from create_viant.utils import dump_json
from create_viant.manifest.vite_config import ViteImport


MODULE_TYPE = "module"
DEFAULT_VERSION = "1.0.0"
REQUIRED_SCRIPTS: tuple[str, ...] = ("dev", "build", "preview")

_NAMED_KEYS = (
    "name", "version", "description", "type", "license",
    "scripts", "dependencies", "devDependencies",
)


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

class Manifest(BaseModel):
    """The generated ``package.json``.

    Required sections are named, typed fields.  Keys a template carries that
    the generator does not manage (``keywords``, ``author``, ...) live in
    ``extra`` and are written back after the managed keys.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str
    version: str = Field(default=DEFAULT_VERSION)
    description: Optional[str] = Field(default=None)
    module_type: str = Field(default=MODULE_TYPE, alias="type")
    license: Optional[str] = Field(default=None)
    scripts: dict[str, str] = Field(default_factory=dict)
    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict, alias="devDependencies")
    extra: dict[str, Any] = Field(default_factory=dict)

    # -- Construction ------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, name: Optional[str] = None) -> "Manifest":
        """Build a manifest from a parsed ``package.json`` object.

        Raises:
            ProjectGenerationError: ``PACKAGE_JSON_INVALID`` when a managed key
                has the wrong shape.
        """
        if not isinstance(data, dict):
            raise ProjectGenerationError(
                f"package.json must contain a JSON object, got {type(data).__name__}",
                ErrorKind.PACKAGE_JSON_INVALID,
            )
        fields = {key: data[key] for key in _NAMED_KEYS if key in data}
        if name is not None:
            fields["name"] = name
        fields.setdefault("name", "")
        if fields.get("version") in (None, ""):
            fields["version"] = DEFAULT_VERSION
        extra = {key: value for key, value in data.items() if key not in _NAMED_KEYS}
        try:
            return cls.model_validate({**fields, "extra": extra})
        except ValidationError as exc:
            raise ProjectGenerationError(
                f"Invalid package.json: {exc.errors()[0]['msg']} "
                f"at '{'.'.join(str(p) for p in exc.errors()[0]['loc'])}'",
                ErrorKind.PACKAGE_JSON_INVALID,
            ) from exc

    @classmethod
    def from_json(cls, text: str) -> "Manifest":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise ProjectGenerationError(
                f"Invalid package.json: {exc}", ErrorKind.PACKAGE_JSON_INVALID
            ) from exc
        return cls.from_dict(data)

    # -- Serialisation -----------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        """Return the ``package.json`` object with a stable key order.

        Dependency maps are sorted by package name, as npm writes them.
        """
        data: dict[str, Any] = {"name": self.name, "version": self.version}
        if self.description is not None:
            data["description"] = self.description
        data["type"] = self.module_type
        if self.license is not None:
            data["license"] = self.license
        data["scripts"] = dict(self.scripts)
        data["dependencies"] = dict(sorted(self.dependencies.items()))
        data["devDependencies"] = dict(sorted(self.dev_dependencies.items()))
        for key, value in self.extra.items():
            data[key] = value
        return data

    def to_json(self) -> str:
        return dump_json(self.to_dict())

    # -- Invariants --------------------------------------------------------

    def validate_invariants(self) -> list[str]:
        """Return every violated manifest invariant (empty when valid)."""
        problems: list[str] = []
        if not self.name.strip():
            problems.append("name must be a non-empty string")
        if not self.version:
            problems.append("version must be a non-empty string")
        if self.module_type != MODULE_TYPE:
            problems.append(f'type must be "{MODULE_TYPE}", got "{self.module_type}"')
        for script in REQUIRED_SCRIPTS:
            if not self.scripts.get(script):
                problems.append(f"scripts.{script} is required")
        for section, mapping in (
            ("dependencies", self.dependencies),
            ("devDependencies", self.dev_dependencies),
        ):
            for package, version_range in mapping.items():
                if not package or not version_range:
                    problems.append(f"{section}.{package or '<empty>'} has no version range")
        return problems


# ---------------------------------------------------------------------------
# Contribution
# ---------------------------------------------------------------------------

class Contribution(BaseModel):
    """What one selected variant adds to the project.

    Contributions are folded left to right; on a key collision the later
    contribution wins outright.
    """

    model_config = ConfigDict(frozen=True)

    dependencies: dict[str, str] = Field(default_factory=dict)
    dev_dependencies: dict[str, str] = Field(default_factory=dict)
    scripts: dict[str, str] = Field(default_factory=dict)
    vite_imports: tuple[ViteImport, ...] = Field(default=())
    vite_plugins: tuple[str, ...] = Field(default=())
    compiler_options: dict[str, Any] = Field(default_factory=dict)
    documents: dict[str, str] = Field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return not any((
            self.dependencies,
            self.dev_dependencies,
            self.scripts,
            self.vite_imports,
            self.vite_plugins,
            self.compiler_options,
            self.documents,
        ))


EMPTY = Contribution()


# ---------------------------------------------------------------------------
# Builder output
# ---------------------------------------------------------------------------

class ProjectFiles(BaseModel):
    """Everything the builder derived for one selection."""

    manifest: Manifest
    documents: dict[str, str] = Field(
        default_factory=dict,
        description="Relative POSIX path -> full file content (full-file overwrite)",
    )
    layers: list[str] = Field(
        default_factory=list,
        description="Labels of the contribution layers, in the order they were applied",
    )

    def paths(self) -> list[str]:
        return ["package.json", *self.documents]

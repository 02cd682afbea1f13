"""Derive the package manifest and auxiliary documents from a ``Selection``.

The builder is a pure function of its inputs: the selection, the injected
``VersionRegistry``, and whatever the template already ships (its parsed
``package.json`` and ``tsconfig.json``).  Contributions are folded in a fixed
order::

    template -> language -> framework -> styling -> features -> state -> api

and on any key collision the later layer wins outright.
"""

from __future__ import annotations

import json
from typing import Any, Optional

from create_viant.errors import ErrorKind, ProjectGenerationError
from create_viant.manifest.contributions import (
    API_CLIENT_CONTRIBUTIONS,
    FEATURE_CONTRIBUTIONS,
    FRAMEWORK_CONTRIBUTIONS,
    STATE_MANAGEMENT_CONTRIBUTIONS,
    STYLING_CONTRIBUTIONS,
    BuildContext,
    ContributionFactory,
    language_contribution,
)
from create_viant.manifest.documents import (
    build_tsconfig,
    render_gitignore,
    render_vite_config,
    vite_config_filename,
)
from create_viant.manifest.models import MODULE_TYPE, Contribution, Manifest, ProjectFiles
from create_viant.manifest.templates import TemplateRenderer
from create_viant.manifest.vite_config import ViteConfig
from create_viant.options.models import Selection
from create_viant.utils import dump_json
from create_viant.versions import DEFAULT_REGISTRY, VersionRegistry


DESCRIPTION_TEMPLATE = "Modern {framework} app built with Viant CLI"
DEFAULT_LICENSE = "MIT"


def _description(selection: Selection) -> str:
    return DESCRIPTION_TEMPLATE.format(framework=selection.framework.value.capitalize())


def apply_contribution(manifest: Manifest, contribution: Contribution) -> None:
    """Fold *contribution* into *manifest* in place.

    A package lives in exactly one of ``dependencies`` / ``devDependencies``:
    adding it to one section removes it from the other.
    """
    for package, version_range in contribution.dependencies.items():
        manifest.dev_dependencies.pop(package, None)
        manifest.dependencies[package] = version_range
    for package, version_range in contribution.dev_dependencies.items():
        manifest.dependencies.pop(package, None)
        manifest.dev_dependencies[package] = version_range
    manifest.scripts.update(contribution.scripts)


class ManifestBuilder:
    """Builds ``ProjectFiles`` for a selection.

    Args:
        registry: Version ranges for every package the builder may add.
        renderer: Jinja2 renderer for text documents; defaults to the
            bundled templates.
    """

    def __init__(
        self,
        registry: VersionRegistry = DEFAULT_REGISTRY,
        renderer: Optional[TemplateRenderer] = None,
    ) -> None:
        self.registry = registry
        self.renderer = renderer or TemplateRenderer()

    # -- Layers ------------------------------------------------------------

    def layers(self, selection: Selection) -> list[tuple[str, ContributionFactory]]:
        """Return ``(label, factory)`` pairs in application order."""
        layers: list[tuple[str, ContributionFactory]] = [
            (f"language:{selection.language.value}", language_contribution),
            (f"framework:{selection.framework.value}", FRAMEWORK_CONTRIBUTIONS[selection.framework]),
            (f"styling:{selection.styling.value}", STYLING_CONTRIBUTIONS[selection.styling]),
        ]
        for feature in selection.ordered_features:
            layers.append((f"feature:{feature.value}", FEATURE_CONTRIBUTIONS[feature]))
        if selection.state_management is not None:
            layers.append((
                f"state:{selection.state_management.value}",
                STATE_MANAGEMENT_CONTRIBUTIONS[selection.state_management],
            ))
        if selection.api_client is not None:
            layers.append((
                f"api:{selection.api_client.value}",
                API_CLIENT_CONTRIBUTIONS[selection.api_client],
            ))
        return layers

    def contributions(self, selection: Selection) -> list[tuple[str, Contribution]]:
        ctx = BuildContext(selection=selection, registry=self.registry, renderer=self.renderer)
        return [(label, factory(ctx)) for label, factory in self.layers(selection)]

    # -- Manifest ----------------------------------------------------------

    def base_manifest(
        self, selection: Selection, base: Optional[dict[str, Any]] = None
    ) -> Manifest:
        """Start from the template's manifest (if any) with the project name applied."""
        if base is None:
            manifest = Manifest(name=selection.name)
        else:
            manifest = Manifest.from_dict(base, name=selection.name)
        if manifest.description is None:
            manifest.description = _description(selection)
        if manifest.license is None:
            manifest.license = DEFAULT_LICENSE
        manifest.module_type = MODULE_TYPE
        return manifest

    def build_manifest(
        self, selection: Selection, base_manifest: Optional[dict[str, Any]] = None
    ) -> Manifest:
        """Return only the folded manifest."""
        return self.build(selection, base_manifest=base_manifest).manifest

    # -- Full build --------------------------------------------------------

    def build(
        self,
        selection: Selection,
        base_manifest: Optional[dict[str, Any]] = None,
        base_tsconfig: Optional[dict[str, Any]] = None,
        has_gitignore: bool = False,
    ) -> ProjectFiles:
        """Fold every layer and return the manifest plus auxiliary documents.

        Raises:
            ProjectGenerationError: ``PACKAGE_JSON_INVALID`` if the manifest
                violates an invariant, ``CONFIG_FAILED`` if a JSON document
                does not parse or the template tsconfig is malformed.
        """
        manifest = self.base_manifest(selection, base_manifest)
        vite = ViteConfig()
        compiler_options: dict[str, Any] = {}
        documents: dict[str, str] = {}
        labels: list[str] = []

        for label, contribution in self.contributions(selection):
            labels.append(label)
            apply_contribution(manifest, contribution)
            for statement in contribution.vite_imports:
                vite.add_import(statement)
            for plugin in contribution.vite_plugins:
                vite.add_plugin(plugin)
            compiler_options.update(contribution.compiler_options)
            documents.update(contribution.documents)

        if selection.typescript:
            tsconfig = build_tsconfig(selection, compiler_options, base_tsconfig)
            documents["tsconfig.json"] = dump_json(tsconfig)
        if not has_gitignore:
            documents[".gitignore"] = render_gitignore(self.renderer)
        documents[vite_config_filename(selection)] = render_vite_config(self.renderer, vite)

        self._verify(manifest, documents)
        return ProjectFiles(manifest=manifest, documents=documents, layers=labels)

    # -- Validation --------------------------------------------------------

    @staticmethod
    def _verify(manifest: Manifest, documents: dict[str, str]) -> None:
        problems = manifest.validate_invariants()
        if problems:
            raise ProjectGenerationError(
                "Generated package.json is invalid: " + "; ".join(problems),
                ErrorKind.PACKAGE_JSON_INVALID,
            )
        for path, content in documents.items():
            if not path.endswith(".json"):
                continue
            try:
                json.loads(content)
            except json.JSONDecodeError as exc:
                raise ProjectGenerationError(
                    f"Generated {path} is not valid JSON: {exc}", ErrorKind.CONFIG_FAILED
                ) from exc

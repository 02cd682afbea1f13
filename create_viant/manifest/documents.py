"""Auxiliary configuration documents: tsconfig, .gitignore and vite config."""

from __future__ import annotations

import copy
from typing import Any, Optional

from create_viant.errors import ErrorKind, ProjectGenerationError
from create_viant.options.models import Framework, Selection
from create_viant.manifest.templates import TemplateRenderer
from create_viant.manifest.vite_config import ViteConfig


PATH_ALIAS = "@/*"
PATH_ALIAS_TARGET = ["./src/*"]

_BASE_COMPILER_OPTIONS: dict[str, Any] = {
    "target": "ES2020",
    "useDefineForClassFields": True,
    "module": "ESNext",
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "skipLibCheck": True,
    "moduleResolution": "bundler",
    "allowImportingTsExtensions": True,
    "isolatedModules": True,
    "moduleDetection": "force",
    "noEmit": True,
    "strict": True,
    "noUnusedLocals": True,
    "noUnusedParameters": True,
    "noFallthroughCasesInSwitch": True,
}

_SOURCE_GLOBS: dict[Framework, list[str]] = {
    Framework.VUE: ["src/**/*.ts", "src/**/*.tsx", "src/**/*.vue"],
    Framework.SVELTE: ["src/**/*.ts", "src/**/*.js", "src/**/*.svelte"],
}


# ---------------------------------------------------------------------------
# tsconfig.json
# ---------------------------------------------------------------------------

def default_tsconfig(selection: Selection) -> dict[str, Any]:
    """Return the tsconfig written when the template ships none."""
    tsconfig: dict[str, Any] = {}
    if selection.framework is Framework.SVELTE:
        tsconfig["extends"] = "@tsconfig/svelte/tsconfig.json"
    tsconfig["compilerOptions"] = dict(_BASE_COMPILER_OPTIONS)
    tsconfig["include"] = [*_SOURCE_GLOBS.get(selection.framework, ["src"]), "vite.config.ts"]
    return tsconfig


def build_tsconfig(
    selection: Selection,
    extra_options: dict[str, Any],
    base: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Merge *extra_options* into *base* and enforce strict mode plus the ``@`` alias.

    Extra options are applied first, so a contribution can never switch
    ``strict`` off or repoint the alias.

    Raises:
        ProjectGenerationError: ``CONFIG_FAILED`` when *base* is not shaped
            like a tsconfig document.
    """
    tsconfig = copy.deepcopy(base) if base is not None else default_tsconfig(selection)
    if not isinstance(tsconfig, dict):
        raise ProjectGenerationError(
            "tsconfig.json must contain a JSON object", ErrorKind.CONFIG_FAILED
        )

    options = tsconfig.setdefault("compilerOptions", {})
    if not isinstance(options, dict):
        raise ProjectGenerationError(
            "tsconfig.json compilerOptions must be an object", ErrorKind.CONFIG_FAILED
        )
    options.update(extra_options)
    options["strict"] = True
    options["baseUrl"] = "."

    paths = options.setdefault("paths", {})
    if not isinstance(paths, dict):
        raise ProjectGenerationError(
            "tsconfig.json compilerOptions.paths must be an object", ErrorKind.CONFIG_FAILED
        )
    paths[PATH_ALIAS] = list(PATH_ALIAS_TARGET)
    return tsconfig


# ---------------------------------------------------------------------------
# Rendered documents
# ---------------------------------------------------------------------------

def render_gitignore(renderer: TemplateRenderer) -> str:
    return renderer.render("gitignore.j2", {})


def vite_config_filename(selection: Selection) -> str:
    return "vite.config.ts" if selection.typescript else "vite.config.js"


def render_vite_config(renderer: TemplateRenderer, config: ViteConfig) -> str:
    return renderer.render(
        "vite.config.j2",
        {
            "import_lines": config.import_lines(),
            "plugins": config.plugins,
            "alias": config.alias,
        },
    )

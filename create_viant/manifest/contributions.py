"""Per-variant contributions for every selectable axis.

Each axis (language, framework, styling, feature, state management, API
client) is a table from variant to a factory ``(BuildContext) ->
Contribution``.  Factories only read the context; they never look at other
factories' output, so any subset of features yields the union of their
individual effects.

Documented script collision: ``github-actions`` contributes a placeholder
``lint`` script so the CI workflow can always call it; ``linting`` is applied
later and replaces it with the Biome command.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from create_viant.options.models import ApiClient, Feature, Framework, Selection, StateManagement, Styling
from create_viant.utils import dump_json
from create_viant.versions import VersionRegistry
from create_viant.manifest.models import EMPTY, Contribution
from create_viant.manifest.templates import TemplateRenderer
from create_viant.manifest.vite_config import ViteImport


LINT_PLACEHOLDER = 'echo "No linter configured"'
STRICT_TS_OPTIONS: dict[str, bool] = {
    "noUncheckedIndexedAccess": True,
    "exactOptionalPropertyTypes": True,
}


@dataclass(frozen=True)
class BuildContext:
    """Read-only inputs shared by every contribution factory."""

    selection: Selection
    registry: VersionRegistry
    renderer: TemplateRenderer

    def deps(self, *keys: str) -> dict[str, str]:
        """Return ``{package: range}`` for the given registry keys."""
        return dict(self.registry.pin(key) for key in keys)

    @property
    def script_ext(self) -> str:
        return "ts" if self.selection.typescript else "js"

    @property
    def framework(self) -> Framework:
        return self.selection.framework


ContributionFactory = Callable[[BuildContext], Contribution]


# ---------------------------------------------------------------------------
# Language
# ---------------------------------------------------------------------------

def language_contribution(ctx: BuildContext) -> Contribution:
    if not ctx.selection.typescript:
        return EMPTY
    return Contribution(dev_dependencies=ctx.deps("typescript", "types_node"))


# ---------------------------------------------------------------------------
# Framework
# ---------------------------------------------------------------------------

def _base_scripts(ctx: BuildContext, typed_build: str = "tsc && vite build") -> dict[str, str]:
    return {
        "dev": "vite",
        "build": typed_build if ctx.selection.typescript else "vite build",
        "preview": "vite preview",
    }


def _react(ctx: BuildContext) -> Contribution:
    dev = ctx.deps("vite", "vite_plugin_react")
    if ctx.selection.typescript:
        dev.update(ctx.deps("types_react", "types_react_dom"))
    return Contribution(
        dependencies=ctx.deps("react", "react_dom"),
        dev_dependencies=dev,
        scripts=_base_scripts(ctx),
        vite_imports=(ViteImport(module="@vitejs/plugin-react", default="react"),),
        vite_plugins=("react()",),
        compiler_options={"jsx": "react-jsx"},
    )


def _preact(ctx: BuildContext) -> Contribution:
    return Contribution(
        dependencies=ctx.deps("preact"),
        dev_dependencies=ctx.deps("vite", "preact_preset_vite"),
        scripts=_base_scripts(ctx),
        vite_imports=(ViteImport(module="@preact/preset-vite", default="preact"),),
        vite_plugins=("preact()",),
        compiler_options={"jsx": "react-jsx", "jsxImportSource": "preact"},
    )


def _vue(ctx: BuildContext) -> Contribution:
    dev = ctx.deps("vite", "vite_plugin_vue")
    if ctx.selection.typescript:
        dev.update(ctx.deps("vue_tsc"))
    return Contribution(
        dependencies=ctx.deps("vue"),
        dev_dependencies=dev,
        scripts=_base_scripts(ctx, typed_build="vue-tsc -b && vite build"),
        vite_imports=(ViteImport(module="@vitejs/plugin-vue", default="vue"),),
        vite_plugins=("vue()",),
    )


def _svelte(ctx: BuildContext) -> Contribution:
    dev = ctx.deps("vite", "vite_plugin_svelte")
    scripts = _base_scripts(ctx, typed_build="vite build")
    if ctx.selection.typescript:
        dev.update(ctx.deps("tsconfig_svelte", "tslib", "svelte_check"))
        scripts["check"] = "svelte-check --tsconfig ./tsconfig.json"
    return Contribution(
        dependencies=ctx.deps("svelte"),
        dev_dependencies=dev,
        scripts=scripts,
        vite_imports=(ViteImport(module="@sveltejs/vite-plugin-svelte", named=("svelte",)),),
        vite_plugins=("svelte()",),
    )


def _solid(ctx: BuildContext) -> Contribution:
    return Contribution(
        dependencies=ctx.deps("solid"),
        dev_dependencies=ctx.deps("vite", "vite_plugin_solid"),
        scripts=_base_scripts(ctx),
        vite_imports=(ViteImport(module="vite-plugin-solid", default="solid"),),
        vite_plugins=("solid()",),
        compiler_options={"jsx": "preserve", "jsxImportSource": "solid-js"},
    )


def _vanilla(ctx: BuildContext) -> Contribution:
    return Contribution(dev_dependencies=ctx.deps("vite"), scripts=_base_scripts(ctx))


FRAMEWORK_CONTRIBUTIONS: dict[Framework, ContributionFactory] = {
    Framework.REACT: _react,
    Framework.PREACT: _preact,
    Framework.VUE: _vue,
    Framework.SVELTE: _svelte,
    Framework.SOLID: _solid,
    Framework.VANILLA: _vanilla,
}


# ---------------------------------------------------------------------------
# Styling
# ---------------------------------------------------------------------------

def _tailwind(ctx: BuildContext) -> Contribution:
    return Contribution(
        dependencies=ctx.deps("clsx"),
        dev_dependencies=ctx.deps("tailwindcss", "tailwindcss_vite"),
        vite_imports=(ViteImport(module="@tailwindcss/vite", default="tailwindcss"),),
        vite_plugins=("tailwindcss()",),
        documents={"src/index.css": '@import "tailwindcss";\n'},
    )


def _styled_components(ctx: BuildContext) -> Contribution:
    return Contribution(dependencies=ctx.deps("styled_components"))


def _emotion(ctx: BuildContext) -> Contribution:
    dev = ctx.deps("emotion_babel_plugin") if ctx.framework is Framework.REACT else {}
    return Contribution(
        dependencies=ctx.deps("emotion_react", "emotion_styled"),
        dev_dependencies=dev,
    )


def _sass(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("sass"),
        documents={"src/styles/main.scss": ctx.renderer.render("main.scss.j2", {})},
    )


def _less(ctx: BuildContext) -> Contribution:
    return Contribution(dev_dependencies=ctx.deps("less"))


def _stylus(ctx: BuildContext) -> Contribution:
    return Contribution(dev_dependencies=ctx.deps("stylus"))


def _vanilla_extract(ctx: BuildContext) -> Contribution:
    return Contribution(
        dependencies=ctx.deps("vanilla_extract"),
        dev_dependencies=ctx.deps("vanilla_extract_vite_plugin"),
        vite_imports=(
            ViteImport(module="@vanilla-extract/vite-plugin", named=("vanillaExtractPlugin",)),
        ),
        vite_plugins=("vanillaExtractPlugin()",),
    )


def _unocss(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("unocss", "unocss_reset"),
        vite_imports=(ViteImport(module="unocss/vite", default="UnoCSS"),),
        vite_plugins=("UnoCSS()",),
        documents={f"uno.config.{ctx.script_ext}": ctx.renderer.render("uno.config.j2", {})},
    )


def _no_styling(ctx: BuildContext) -> Contribution:
    return EMPTY


STYLING_CONTRIBUTIONS: dict[Styling, ContributionFactory] = {
    Styling.TAILWIND: _tailwind,
    Styling.STYLED_COMPONENTS: _styled_components,
    Styling.EMOTION: _emotion,
    Styling.CSS_MODULES: _no_styling,
    Styling.SASS: _sass,
    Styling.LESS: _less,
    Styling.STYLUS: _stylus,
    Styling.VANILLA_EXTRACT: _vanilla_extract,
    Styling.UNOCSS: _unocss,
    Styling.NONE: _no_styling,
}


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

def _pwa(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("vite_plugin_pwa"),
        vite_imports=(ViteImport(module="vite-plugin-pwa", named=("VitePWA",)),),
        vite_plugins=("VitePWA({ registerType: 'autoUpdate' })",),
    )


def _analyzer(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("rollup_plugin_visualizer"),
        scripts={"analyze": "vite build && echo \"Bundle report written to stats.html\""},
        vite_imports=(ViteImport(module="rollup-plugin-visualizer", named=("visualizer",)),),
        vite_plugins=("visualizer({ filename: 'stats.html', gzipSize: true })",),
    )


def _github_actions(ctx: BuildContext) -> Contribution:
    workflow = ctx.renderer.render(
        "ci.yml.j2", {"package_manager": ctx.selection.package_manager.value}
    )
    return Contribution(
        scripts={"lint": LINT_PLACEHOLDER},
        documents={".github/workflows/ci.yml": workflow},
    )


def _docker(ctx: BuildContext) -> Contribution:
    context = {"package_manager": ctx.selection.package_manager.value}
    return Contribution(
        documents={
            "Dockerfile": ctx.renderer.render("Dockerfile.j2", context),
            ".dockerignore": ctx.renderer.render("dockerignore.j2", context),
        },
    )


_STORYBOOK_FRAMEWORK_KEYS: dict[Framework, str] = {
    Framework.REACT: "storybook_react_vite",
    Framework.PREACT: "storybook_preact_vite",
    Framework.VUE: "storybook_vue3_vite",
    Framework.SVELTE: "storybook_svelte_vite",
    Framework.SOLID: "storybook_solid_vite",
    Framework.VANILLA: "storybook_html_vite",
}


def _storybook(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps(
            "storybook",
            "storybook_addon_essentials",
            _STORYBOOK_FRAMEWORK_KEYS[ctx.framework],
        ),
        scripts={
            "storybook": "storybook dev -p 6006",
            "build-storybook": "storybook build",
        },
    )


def _husky(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("husky", "lint_staged"),
        scripts={"prepare": "husky"},
    )


def _vitest(ctx: BuildContext) -> Contribution:
    keys = ["vitest", "vitest_ui"]
    if ctx.framework is Framework.REACT:
        keys.append("testing_library_react")
    return Contribution(
        dev_dependencies=ctx.deps(*keys),
        scripts={"test": "vitest", "test:ui": "vitest --ui"},
    )


def _playwright(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("playwright"),
        scripts={"test:e2e": "playwright test"},
    )


def biome_config(ctx: BuildContext) -> dict[str, Any]:
    """The ``biome.json`` document, pinned to the registry's Biome version."""
    version = ctx.registry.range("biome").lstrip("^~")
    return {
        "$schema": f"https://biomejs.dev/schemas/{version}/schema.json",
        "vcs": {"enabled": True, "clientKind": "git", "useIgnoreFile": True},
        "files": {"ignore": ["dist", "node_modules", "coverage"]},
        "formatter": {"enabled": True, "indentStyle": "space", "indentWidth": 2},
        "organizeImports": {"enabled": True},
        "linter": {"enabled": True, "rules": {"recommended": True}},
        "javascript": {"formatter": {"quoteStyle": "single"}},
    }


def _linting(ctx: BuildContext) -> Contribution:
    return Contribution(
        dev_dependencies=ctx.deps("biome"),
        scripts={
            "lint": "biome check src",
            "lint:fix": "biome check --write src",
            "format": "biome format --write src",
        },
        documents={"biome.json": dump_json(biome_config(ctx))},
    )


def _strict_ts(ctx: BuildContext) -> Contribution:
    return Contribution(compiler_options=dict(STRICT_TS_OPTIONS))


def _component_lib(ctx: BuildContext) -> Contribution:
    return Contribution(scripts={"build:lib": "vite build --mode lib"})


def _i18n(ctx: BuildContext) -> Contribution:
    if ctx.framework in (Framework.REACT, Framework.PREACT):
        return Contribution(dependencies=ctx.deps("react_i18next", "i18next"))
    if ctx.framework is Framework.VUE:
        return Contribution(dependencies=ctx.deps("vue_i18n"))
    return Contribution(dependencies=ctx.deps("i18next"))


def _choice_flag(ctx: BuildContext) -> Contribution:
    # The concrete library is its own axis (state management / API client).
    return EMPTY


FEATURE_CONTRIBUTIONS: dict[Feature, ContributionFactory] = {
    Feature.PWA: _pwa,
    Feature.ANALYZER: _analyzer,
    Feature.GITHUB_ACTIONS: _github_actions,
    Feature.DOCKER: _docker,
    Feature.STORYBOOK: _storybook,
    Feature.HUSKY: _husky,
    Feature.VITEST: _vitest,
    Feature.PLAYWRIGHT: _playwright,
    Feature.LINTING: _linting,
    Feature.STRICT_TS: _strict_ts,
    Feature.COMPONENT_LIB: _component_lib,
    Feature.I18N: _i18n,
    Feature.STATE_MANAGEMENT: _choice_flag,
    Feature.API_CLIENT: _choice_flag,
}


# ---------------------------------------------------------------------------
# State management
# ---------------------------------------------------------------------------

def _deps_only(*keys: str) -> ContributionFactory:
    def factory(ctx: BuildContext) -> Contribution:
        return Contribution(dependencies=ctx.deps(*keys))
    return factory


STATE_MANAGEMENT_CONTRIBUTIONS: dict[StateManagement, ContributionFactory] = {
    StateManagement.REDUX_TOOLKIT: _deps_only("redux_toolkit", "react_redux"),
    StateManagement.ZUSTAND: _deps_only("zustand"),
    StateManagement.JOTAI: _deps_only("jotai"),
    StateManagement.VALTIO: _deps_only("valtio"),
    StateManagement.PINIA: _deps_only("pinia"),
    StateManagement.VUEX: _deps_only("vuex"),
    # Built into the framework runtime.
    StateManagement.SVELTE_STORES: _deps_only(),
    StateManagement.SOLID_STORE: _deps_only(),
}


# ---------------------------------------------------------------------------
# API client
# ---------------------------------------------------------------------------

_TANSTACK_KEYS: dict[Framework, str] = {
    Framework.REACT: "tanstack_react_query",
    Framework.PREACT: "tanstack_react_query",
    Framework.VUE: "tanstack_vue_query",
    Framework.SVELTE: "tanstack_svelte_query",
    Framework.SOLID: "tanstack_solid_query",
    Framework.VANILLA: "tanstack_query_core",
}


def _tanstack_query(ctx: BuildContext) -> Contribution:
    dev = ctx.deps("tanstack_query_devtools") if ctx.framework is Framework.REACT else {}
    return Contribution(
        dependencies=ctx.deps(_TANSTACK_KEYS[ctx.framework]),
        dev_dependencies=dev,
    )


def _trpc(ctx: BuildContext) -> Contribution:
    keys = ["trpc_client", "trpc_server"]
    if ctx.framework is Framework.REACT:
        keys.append("trpc_react_query")
    return Contribution(dependencies=ctx.deps(*keys))


API_CLIENT_CONTRIBUTIONS: dict[ApiClient, ContributionFactory] = {
    ApiClient.AXIOS: _deps_only("axios"),
    ApiClient.TANSTACK_QUERY: _tanstack_query,
    ApiClient.SWR: _deps_only("swr"),
    ApiClient.TRPC: _trpc,
    ApiClient.FETCH: _deps_only(),
}

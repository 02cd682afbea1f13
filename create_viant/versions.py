"""Version registry for every dependency written into generated projects.

The registry is the single source of truth for version ranges.  It is plain,
read-only data: the manifest builder receives a ``VersionRegistry`` instance
as an argument and never reaches for module state, so tests can inject a
registry with overridden ranges.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field


class VersionEntry(BaseModel):
    """An immutable ``package -> range`` pair looked up by logical key."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Logical key, e.g. 'vite_plugin_react'")
    package: str = Field(..., description="npm package name, e.g. '@vitejs/plugin-react'")
    range: str = Field(..., description="Semantic-version range, e.g. '^4.3.4'")


class VersionRegistry(Mapping[str, VersionEntry]):
    """Read-only mapping from logical dependency key to ``VersionEntry``."""

    def __init__(self, entries: Mapping[str, tuple[str, str]]) -> None:
        self._entries = MappingProxyType({
            key: VersionEntry(key=key, package=package, range=version_range)
            for key, (package, version_range) in entries.items()
        })

    def __getitem__(self, key: str) -> VersionEntry:
        try:
            return self._entries[key]
        except KeyError:
            raise KeyError(f"Unknown version registry key: {key!r}") from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def range(self, key: str) -> str:
        """Return the version range registered under *key*."""
        return self[key].range

    def pin(self, key: str) -> tuple[str, str]:
        """Return ``(package, range)`` for *key*."""
        entry = self[key]
        return entry.package, entry.range

    def override(self, **ranges: str) -> "VersionRegistry":
        """Return a new registry with the given keys set to new ranges.

        Raises:
            KeyError: If any key is not already registered.
        """
        merged = {key: (e.package, e.range) for key, e in self._entries.items()}
        for key, version_range in ranges.items():
            package = self[key].package
            merged[key] = (package, version_range)
        return VersionRegistry(merged)


_DEFAULT_VERSIONS: dict[str, tuple[str, str]] = {
    # Frameworks
    "react": ("react", "^19.0.0"),
    "react_dom": ("react-dom", "^19.0.0"),
    "vue": ("vue", "^3.5.13"),
    "svelte": ("svelte", "^5.16.0"),
    "solid": ("solid-js", "^1.9.4"),
    "preact": ("preact", "^10.25.4"),

    # Build tools
    "vite": ("vite", "^6.0.7"),
    "typescript": ("typescript", "^5.7.2"),

    # Vite plugins
    "vite_plugin_react": ("@vitejs/plugin-react", "^4.3.4"),
    "vite_plugin_vue": ("@vitejs/plugin-vue", "^5.2.1"),
    "vite_plugin_svelte": ("@sveltejs/vite-plugin-svelte", "^5.0.3"),
    "vite_plugin_solid": ("vite-plugin-solid", "^2.11.0"),
    "preact_preset_vite": ("@preact/preset-vite", "^2.9.4"),
    "vite_plugin_pwa": ("vite-plugin-pwa", "^0.21.1"),

    # Styling
    "tailwindcss": ("tailwindcss", "^4.0.0"),
    "tailwindcss_vite": ("@tailwindcss/vite", "^4.0.0"),
    "clsx": ("clsx", "^2.1.1"),
    "unocss": ("unocss", "^0.65.3"),
    "unocss_reset": ("@unocss/reset", "^0.65.3"),
    "vanilla_extract": ("@vanilla-extract/css", "^1.16.1"),
    "vanilla_extract_vite_plugin": ("@vanilla-extract/vite-plugin", "^4.0.19"),
    "sass": ("sass", "^1.83.1"),
    "less": ("less", "^4.2.1"),
    "stylus": ("stylus", "^0.64.0"),
    "styled_components": ("styled-components", "^6.1.14"),
    "emotion_react": ("@emotion/react", "^11.14.0"),
    "emotion_styled": ("@emotion/styled", "^11.14.0"),
    "emotion_babel_plugin": ("@emotion/babel-plugin", "^11.13.5"),

    # Testing
    "vitest": ("vitest", "^3.0.2"),
    "vitest_ui": ("@vitest/ui", "^3.0.2"),
    "playwright": ("@playwright/test", "^1.49.1"),
    "testing_library_react": ("@testing-library/react", "^16.2.0"),

    # Linting
    "biome": ("@biomejs/biome", "^1.9.4"),

    # State management
    "redux_toolkit": ("@reduxjs/toolkit", "^2.5.0"),
    "react_redux": ("react-redux", "^9.2.0"),
    "zustand": ("zustand", "^5.0.2"),
    "jotai": ("jotai", "^2.11.0"),
    "valtio": ("valtio", "^2.1.2"),
    "pinia": ("pinia", "^2.3.0"),
    "vuex": ("vuex", "^4.1.0"),

    # API clients
    "tanstack_react_query": ("@tanstack/react-query", "^5.64.1"),
    "tanstack_query_devtools": ("@tanstack/react-query-devtools", "^5.64.1"),
    "tanstack_vue_query": ("@tanstack/vue-query", "^5.64.1"),
    "tanstack_svelte_query": ("@tanstack/svelte-query", "^5.64.1"),
    "tanstack_solid_query": ("@tanstack/solid-query", "^5.64.1"),
    "tanstack_query_core": ("@tanstack/query-core", "^5.64.1"),
    "swr": ("swr", "^2.3.0"),
    "axios": ("axios", "^1.7.9"),
    "trpc_client": ("@trpc/client", "^11.0.0"),
    "trpc_server": ("@trpc/server", "^11.0.0"),
    "trpc_react_query": ("@trpc/react-query", "^11.0.0"),

    # Utilities
    "husky": ("husky", "^9.1.7"),
    "lint_staged": ("lint-staged", "^15.3.0"),
    "storybook": ("storybook", "^8.5.0"),
    "storybook_addon_essentials": ("@storybook/addon-essentials", "^8.5.0"),
    "storybook_react_vite": ("@storybook/react-vite", "^8.5.0"),
    "storybook_vue3_vite": ("@storybook/vue3-vite", "^8.5.0"),
    "storybook_svelte_vite": ("@storybook/svelte-vite", "^8.5.0"),
    "storybook_preact_vite": ("@storybook/preact-vite", "^8.5.0"),
    "storybook_html_vite": ("@storybook/html-vite", "^8.5.0"),
    "storybook_solid_vite": ("storybook-solidjs-vite", "^1.0.0-beta.2"),

    # Type definitions
    "types_react": ("@types/react", "^19.0.2"),
    "types_react_dom": ("@types/react-dom", "^19.0.2"),
    "types_node": ("@types/node", "^22.10.2"),

    # Vue / Svelte type tooling
    "vue_tsc": ("vue-tsc", "^2.2.0"),
    "tsconfig_svelte": ("@tsconfig/svelte", "^5.0.4"),
    "tslib": ("tslib", "^2.8.1"),
    "svelte_check": ("svelte-check", "^4.1.1"),

    # Bundle analyzer
    "rollup_plugin_visualizer": ("rollup-plugin-visualizer", "^5.14.0"),

    # i18n
    "react_i18next": ("react-i18next", "^15.1.3"),
    "i18next": ("i18next", "^24.2.0"),
    "vue_i18n": ("vue-i18n", "^10.0.5"),
}

DEFAULT_REGISTRY = VersionRegistry(_DEFAULT_VERSIONS)

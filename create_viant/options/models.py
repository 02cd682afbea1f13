"""Pydantic v2 models describing the user's project choices.

``RawOptions`` is what the CLI layer collects (every field optional, plain
strings).  ``Selection`` is the fully resolved, immutable result of
validation that drives manifest derivation and generation.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from create_viant.options.names import validate_project_name


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class Framework(str, Enum):
    """Supported UI frameworks."""
    REACT = "react"
    VUE = "vue"
    SVELTE = "svelte"
    SOLID = "solid"
    PREACT = "preact"
    VANILLA = "vanilla"


class Language(str, Enum):
    """Language variant of the generated project."""
    TS = "ts"
    JS = "js"


class Styling(str, Enum):
    """Styling solutions."""
    TAILWIND = "tailwind"
    STYLED_COMPONENTS = "styled-components"
    EMOTION = "emotion"
    CSS_MODULES = "css-modules"
    SASS = "sass"
    LESS = "less"
    STYLUS = "stylus"
    VANILLA_EXTRACT = "vanilla-extract"
    UNOCSS = "unocss"
    NONE = "none"


class PackageManager(str, Enum):
    """Package managers, declared in global preference order."""
    BUN = "bun"
    PNPM = "pnpm"
    YARN = "yarn"
    NPM = "npm"


class Feature(str, Enum):
    """Optional features, declared in the order they are applied."""
    PWA = "pwa"
    ANALYZER = "analyzer"
    GITHUB_ACTIONS = "github-actions"
    DOCKER = "docker"
    STORYBOOK = "storybook"
    HUSKY = "husky"
    VITEST = "vitest"
    PLAYWRIGHT = "playwright"
    LINTING = "linting"
    STRICT_TS = "strict-ts"
    COMPONENT_LIB = "component-lib"
    I18N = "i18n"
    STATE_MANAGEMENT = "state-management"
    API_CLIENT = "api-client"


class StateManagement(str, Enum):
    """State management libraries."""
    REDUX_TOOLKIT = "redux-toolkit"
    ZUSTAND = "zustand"
    JOTAI = "jotai"
    VALTIO = "valtio"
    PINIA = "pinia"
    VUEX = "vuex"
    SVELTE_STORES = "svelte-stores"
    SOLID_STORE = "solid-store"


class ApiClient(str, Enum):
    """API client libraries."""
    AXIOS = "axios"
    TANSTACK_QUERY = "tanstack-query"
    SWR = "swr"
    TRPC = "trpc"
    FETCH = "fetch"


FEATURE_ORDER: tuple[Feature, ...] = tuple(Feature)
PACKAGE_MANAGER_ORDER: tuple[PackageManager, ...] = tuple(PackageManager)

FEATURE_LABELS: dict[Feature, str] = {
    Feature.PWA: "PWA Support",
    Feature.ANALYZER: "Bundle Analyzer",
    Feature.GITHUB_ACTIONS: "GitHub Actions CI/CD",
    Feature.DOCKER: "Docker Configuration",
    Feature.STORYBOOK: "Storybook",
    Feature.HUSKY: "Husky Git Hooks",
    Feature.VITEST: "Vitest Testing",
    Feature.PLAYWRIGHT: "Playwright E2E Testing",
    Feature.LINTING: "Biome Linting + Formatting",
    Feature.STRICT_TS: "TypeScript Strict Mode",
    Feature.COMPONENT_LIB: "Component Library Setup",
    Feature.I18N: "Internationalization (i18n)",
    Feature.STATE_MANAGEMENT: "State Management",
    Feature.API_CLIENT: "API Client Setup",
}

STATE_MANAGEMENT_BY_FRAMEWORK: dict[Framework, tuple[StateManagement, ...]] = {
    Framework.REACT: (
        StateManagement.REDUX_TOOLKIT,
        StateManagement.ZUSTAND,
        StateManagement.JOTAI,
        StateManagement.VALTIO,
    ),
    Framework.VUE: (StateManagement.PINIA, StateManagement.VUEX),
    Framework.SVELTE: (StateManagement.SVELTE_STORES, StateManagement.ZUSTAND),
    Framework.SOLID: (StateManagement.SOLID_STORE, StateManagement.ZUSTAND),
    Framework.PREACT: (StateManagement.ZUSTAND, StateManagement.VALTIO),
    Framework.VANILLA: (),
}

# Styling choices that only make sense for a subset of frameworks.
STYLING_FRAMEWORKS: dict[Styling, frozenset[Framework]] = {
    Styling.STYLED_COMPONENTS: frozenset({Framework.REACT, Framework.PREACT}),
}


def template_id_for(framework: Framework, language: Language) -> str:
    """Return the template identifier, e.g. ``"react-ts"``."""
    return f"{framework.value}-{language.value}"


# ---------------------------------------------------------------------------
# Raw input
# ---------------------------------------------------------------------------

class RawOptions(BaseModel):
    """Unvalidated user input as collected by the CLI."""

    name: str = Field(default="", description="Project name as typed by the user")
    template: Optional[str] = Field(
        default=None, description="Template identifier such as 'react-ts'"
    )
    framework: Optional[str] = Field(default=None)
    typescript: Optional[bool] = Field(default=None)
    styling: Optional[str] = Field(default=None)
    package_manager: Optional[str] = Field(default=None)
    features: list[str] = Field(default_factory=list)
    state_management: Optional[str] = Field(default=None)
    api_client: Optional[str] = Field(default=None)
    install: bool = Field(default=True)
    init_git: bool = Field(default=True)
    run_dev: bool = Field(default=True)


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

class Selection(BaseModel):
    """Fully validated user choices.  Immutable once constructed."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    framework: Framework = Field(default=Framework.REACT)
    language: Language = Field(default=Language.TS)
    styling: Styling = Field(default=Styling.NONE)
    package_manager: PackageManager = Field(default=PackageManager.NPM)
    features: frozenset[Feature] = Field(default_factory=frozenset)
    state_management: Optional[StateManagement] = Field(default=None)
    api_client: Optional[ApiClient] = Field(default=None)
    install: bool = Field(default=True)
    init_git: bool = Field(default=True)
    run_dev: bool = Field(default=True)

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        problems = validate_project_name(value)
        if problems:
            raise ValueError(f"Invalid project name: {', '.join(problems)}")
        return value

    @model_validator(mode="after")
    def _check_flag_presence(self) -> "Selection":
        if self.state_management is not None and Feature.STATE_MANAGEMENT not in self.features:
            raise ValueError(
                "state_management requires the 'state-management' feature flag"
            )
        if self.api_client is not None and Feature.API_CLIENT not in self.features:
            raise ValueError("api_client requires the 'api-client' feature flag")
        return self

    @property
    def typescript(self) -> bool:
        return self.language is Language.TS

    @property
    def template_id(self) -> str:
        return template_id_for(self.framework, self.language)

    @property
    def ordered_features(self) -> list[Feature]:
        """Selected features in their fixed application order."""
        return [f for f in FEATURE_ORDER if f in self.features]

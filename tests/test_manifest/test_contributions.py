"""Tests for the per-variant contribution tables."""

from __future__ import annotations

import json
from typing import Callable

import pytest

from create_viant.manifest.contributions import (
    API_CLIENT_CONTRIBUTIONS,
    FEATURE_CONTRIBUTIONS,
    FRAMEWORK_CONTRIBUTIONS,
    LINT_PLACEHOLDER,
    STATE_MANAGEMENT_CONTRIBUTIONS,
    STRICT_TS_OPTIONS,
    STYLING_CONTRIBUTIONS,
    BuildContext,
    biome_config,
    language_contribution,
)
from create_viant.manifest.templates import TemplateRenderer
from create_viant.options.models import (
    ApiClient,
    Feature,
    Framework,
    Language,
    Selection,
    StateManagement,
    Styling,
)
from create_viant.versions import DEFAULT_REGISTRY


pytestmark = pytest.mark.unit


@pytest.fixture
def make_ctx(make_selection: Callable[..., Selection]) -> Callable[..., BuildContext]:
    renderer = TemplateRenderer()

    def _make(**overrides) -> BuildContext:
        return BuildContext(
            selection=make_selection(**overrides),
            registry=DEFAULT_REGISTRY,
            renderer=renderer,
        )

    return _make


class TestTablesAreComplete:

    def test_every_variant_has_a_factory(self):
        assert set(FRAMEWORK_CONTRIBUTIONS) == set(Framework)
        assert set(STYLING_CONTRIBUTIONS) == set(Styling)
        assert set(FEATURE_CONTRIBUTIONS) == set(Feature)
        assert set(STATE_MANAGEMENT_CONTRIBUTIONS) == set(StateManagement)
        assert set(API_CLIENT_CONTRIBUTIONS) == set(ApiClient)

    @pytest.mark.parametrize("framework", list(Framework))
    @pytest.mark.parametrize("language", list(Language))
    def test_every_feature_builds_for_every_framework(self, make_ctx, framework, language):
        ctx = make_ctx(framework=framework, language=language)
        for feature, factory in FEATURE_CONTRIBUTIONS.items():
            contribution = factory(ctx)
            for version_range in {**contribution.dependencies, **contribution.dev_dependencies}.values():
                assert version_range, feature


class TestLanguageAndFramework:

    def test_typescript_tooling_only_when_typed(self, make_ctx):
        typed = language_contribution(make_ctx(language=Language.TS))
        assert "typescript" in typed.dev_dependencies
        assert language_contribution(make_ctx(language=Language.JS)).is_empty

    def test_react_runtime_and_plugin(self, make_ctx):
        contribution = FRAMEWORK_CONTRIBUTIONS[Framework.REACT](make_ctx())
        assert contribution.dependencies == {
            "react": DEFAULT_REGISTRY.range("react"),
            "react-dom": DEFAULT_REGISTRY.range("react_dom"),
        }
        assert "@vitejs/plugin-react" in contribution.dev_dependencies
        assert "@types/react" in contribution.dev_dependencies
        assert contribution.vite_plugins == ("react()",)
        assert contribution.scripts["build"] == "tsc && vite build"

    def test_untyped_build_script(self, make_ctx):
        contribution = FRAMEWORK_CONTRIBUTIONS[Framework.REACT](make_ctx(language=Language.JS))
        assert contribution.scripts["build"] == "vite build"
        assert "@types/react" not in contribution.dev_dependencies

    def test_vue_typed_uses_vue_tsc(self, make_ctx):
        contribution = FRAMEWORK_CONTRIBUTIONS[Framework.VUE](make_ctx(framework=Framework.VUE))
        assert contribution.scripts["build"] == "vue-tsc -b && vite build"
        assert "vue-tsc" in contribution.dev_dependencies

    def test_svelte_named_plugin_import(self, make_ctx):
        contribution = FRAMEWORK_CONTRIBUTIONS[Framework.SVELTE](make_ctx(framework=Framework.SVELTE))
        assert contribution.vite_imports[0].named == ("svelte",)
        assert "check" in contribution.scripts
        assert "svelte-check" in contribution.dev_dependencies

    def test_jsx_compiler_options(self, make_ctx):
        solid = FRAMEWORK_CONTRIBUTIONS[Framework.SOLID](make_ctx(framework=Framework.SOLID))
        assert solid.compiler_options == {"jsx": "preserve", "jsxImportSource": "solid-js"}
        preact = FRAMEWORK_CONTRIBUTIONS[Framework.PREACT](make_ctx(framework=Framework.PREACT))
        assert preact.compiler_options["jsxImportSource"] == "preact"

    def test_vanilla_has_no_plugin(self, make_ctx):
        contribution = FRAMEWORK_CONTRIBUTIONS[Framework.VANILLA](make_ctx(framework=Framework.VANILLA))
        assert contribution.vite_plugins == ()
        assert contribution.dependencies == {}
        assert set(contribution.scripts) == {"dev", "build", "preview"}


class TestStyling:

    @pytest.mark.parametrize("styling", [Styling.NONE, Styling.CSS_MODULES])
    def test_no_dependencies(self, make_ctx, styling):
        assert STYLING_CONTRIBUTIONS[styling](make_ctx(styling=styling)).is_empty

    def test_tailwind(self, make_ctx):
        contribution = STYLING_CONTRIBUTIONS[Styling.TAILWIND](make_ctx(styling=Styling.TAILWIND))
        assert contribution.dev_dependencies["tailwindcss"] == DEFAULT_REGISTRY.range("tailwindcss")
        assert "@tailwindcss/vite" in contribution.dev_dependencies
        assert contribution.vite_plugins == ("tailwindcss()",)
        assert contribution.documents["src/index.css"] == '@import "tailwindcss";\n'

    def test_unocss_config_extension_follows_language(self, make_ctx):
        ts = STYLING_CONTRIBUTIONS[Styling.UNOCSS](make_ctx(styling=Styling.UNOCSS))
        js = STYLING_CONTRIBUTIONS[Styling.UNOCSS](make_ctx(styling=Styling.UNOCSS, language=Language.JS))
        assert "uno.config.ts" in ts.documents
        assert "uno.config.js" in js.documents

    def test_sass_writes_stylesheet(self, make_ctx):
        contribution = STYLING_CONTRIBUTIONS[Styling.SASS](make_ctx(styling=Styling.SASS))
        assert "sass" in contribution.dev_dependencies
        assert "$primary-color" in contribution.documents["src/styles/main.scss"]

    def test_emotion_babel_plugin_react_only(self, make_ctx):
        react = STYLING_CONTRIBUTIONS[Styling.EMOTION](make_ctx(styling=Styling.EMOTION))
        preact = STYLING_CONTRIBUTIONS[Styling.EMOTION](
            make_ctx(styling=Styling.EMOTION, framework=Framework.PREACT)
        )
        assert "@emotion/babel-plugin" in react.dev_dependencies
        assert preact.dev_dependencies == {}


class TestFeatures:

    def test_github_actions_lint_placeholder(self, make_ctx):
        contribution = FEATURE_CONTRIBUTIONS[Feature.GITHUB_ACTIONS](make_ctx())
        assert contribution.scripts == {"lint": LINT_PLACEHOLDER}
        assert ".github/workflows/ci.yml" in contribution.documents

    def test_linting(self, make_ctx):
        contribution = FEATURE_CONTRIBUTIONS[Feature.LINTING](make_ctx())
        assert contribution.scripts["lint"] == "biome check src"
        biome = json.loads(contribution.documents["biome.json"])
        assert biome["linter"]["enabled"] is True

    def test_biome_schema_tracks_registry(self, make_ctx):
        ctx = make_ctx()
        ctx = BuildContext(
            selection=ctx.selection,
            registry=DEFAULT_REGISTRY.override(biome="^2.0.5"),
            renderer=ctx.renderer,
        )
        assert biome_config(ctx)["$schema"] == "https://biomejs.dev/schemas/2.0.5/schema.json"

    def test_strict_ts_adds_two_options(self, make_ctx):
        contribution = FEATURE_CONTRIBUTIONS[Feature.STRICT_TS](make_ctx())
        assert contribution.compiler_options == STRICT_TS_OPTIONS
        assert len(STRICT_TS_OPTIONS) == 2

    @pytest.mark.parametrize(
        "framework, package",
        [
            (Framework.REACT, "@storybook/react-vite"),
            (Framework.VUE, "@storybook/vue3-vite"),
            (Framework.VANILLA, "@storybook/html-vite"),
        ],
    )
    def test_storybook_framework_package(self, make_ctx, framework, package):
        contribution = FEATURE_CONTRIBUTIONS[Feature.STORYBOOK](make_ctx(framework=framework))
        assert package in contribution.dev_dependencies
        assert contribution.scripts["build-storybook"] == "storybook build"

    @pytest.mark.parametrize(
        "framework, package",
        [
            (Framework.REACT, "react-i18next"),
            (Framework.PREACT, "react-i18next"),
            (Framework.VUE, "vue-i18n"),
            (Framework.SVELTE, "i18next"),
        ],
    )
    def test_i18n_is_framework_aware(self, make_ctx, framework, package):
        contribution = FEATURE_CONTRIBUTIONS[Feature.I18N](make_ctx(framework=framework))
        assert package in contribution.dependencies

    def test_vitest_testing_library_react_only(self, make_ctx):
        react = FEATURE_CONTRIBUTIONS[Feature.VITEST](make_ctx())
        vue = FEATURE_CONTRIBUTIONS[Feature.VITEST](make_ctx(framework=Framework.VUE))
        assert "@testing-library/react" in react.dev_dependencies
        assert "@testing-library/react" not in vue.dev_dependencies

    @pytest.mark.parametrize("feature", [Feature.STATE_MANAGEMENT, Feature.API_CLIENT])
    def test_choice_flags_contribute_nothing(self, make_ctx, feature):
        assert FEATURE_CONTRIBUTIONS[feature](make_ctx()).is_empty


class TestStateAndApi:

    def test_redux_toolkit(self, make_ctx):
        contribution = STATE_MANAGEMENT_CONTRIBUTIONS[StateManagement.REDUX_TOOLKIT](make_ctx())
        assert set(contribution.dependencies) == {"@reduxjs/toolkit", "react-redux"}

    @pytest.mark.parametrize("state", [StateManagement.SVELTE_STORES, StateManagement.SOLID_STORE])
    def test_builtin_stores_add_nothing(self, make_ctx, state):
        assert STATE_MANAGEMENT_CONTRIBUTIONS[state](make_ctx()).is_empty

    @pytest.mark.parametrize(
        "framework, package",
        [
            (Framework.REACT, "@tanstack/react-query"),
            (Framework.VUE, "@tanstack/vue-query"),
            (Framework.SOLID, "@tanstack/solid-query"),
            (Framework.VANILLA, "@tanstack/query-core"),
        ],
    )
    def test_tanstack_query_per_framework(self, make_ctx, framework, package):
        contribution = API_CLIENT_CONTRIBUTIONS[ApiClient.TANSTACK_QUERY](make_ctx(framework=framework))
        assert package in contribution.dependencies

    def test_trpc_react_adapter_react_only(self, make_ctx):
        react = API_CLIENT_CONTRIBUTIONS[ApiClient.TRPC](make_ctx())
        svelte = API_CLIENT_CONTRIBUTIONS[ApiClient.TRPC](make_ctx(framework=Framework.SVELTE))
        assert "@trpc/react-query" in react.dependencies
        assert set(svelte.dependencies) == {"@trpc/client", "@trpc/server"}

    def test_fetch_adds_nothing(self, make_ctx):
        assert API_CLIENT_CONTRIBUTIONS[ApiClient.FETCH](make_ctx()).is_empty

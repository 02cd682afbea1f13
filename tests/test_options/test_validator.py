"""Tests for project-name and option validation."""

from __future__ import annotations

import pytest

from create_viant.options.models import (
    ApiClient,
    Feature,
    Framework,
    Language,
    PackageManager,
    RawOptions,
    StateManagement,
    Styling,
)
from create_viant.options.validator import validate_options, validate_project_name


pytestmark = pytest.mark.unit


class TestValidateProjectName:

    @pytest.mark.parametrize("name", ["demo-app", "app", "my-app-2", "a1"])
    def test_valid_names(self, name: str):
        assert validate_project_name(name) == []

    def test_empty_name(self):
        assert validate_project_name("") == ["name is required"]

    def test_reports_every_violation(self):
        errors = validate_project_name("_My App")
        assert "name cannot start with an underscore" in errors
        assert "name can no longer contain capital letters" in errors
        assert "name can only contain lowercase letters, digits and hyphens" in errors
        assert len(errors) == 3

    def test_leading_period(self):
        assert "name cannot start with a period" in validate_project_name(".hidden")

    def test_surrounding_whitespace(self):
        assert "name cannot contain leading or trailing spaces" in validate_project_name(" app ")

    def test_too_long(self):
        errors = validate_project_name("a" * 215)
        assert any("214" in e for e in errors)

    @pytest.mark.parametrize("name", ["node_modules", "favicon.ico"])
    def test_blacklisted(self, name: str):
        assert f"{name} is a blacklisted name" in validate_project_name(name)

    @pytest.mark.parametrize("name", ["fs", "http", "path"])
    def test_core_module(self, name: str):
        assert f"{name} is a core module name" in validate_project_name(name)


class TestValidateOptionsDefaults:

    def test_defaults(self):
        result = validate_options(RawOptions(name="demo-app"))
        assert result.ok
        selection = result.selection
        assert selection.framework is Framework.REACT
        assert selection.language is Language.TS
        assert selection.styling is Styling.NONE
        assert selection.package_manager is PackageManager.NPM
        assert selection.features == frozenset()
        assert selection.install and selection.init_git and selection.run_dev
        assert result.warnings == []

    def test_template_is_split(self):
        result = validate_options(RawOptions(name="demo-app", template="vue-js"))
        assert result.selection.framework is Framework.VUE
        assert result.selection.language is Language.JS
        assert result.selection.template_id == "vue-js"

    def test_typescript_flag(self):
        result = validate_options(RawOptions(name="demo-app", framework="solid", typescript=False))
        assert result.selection.template_id == "solid-js"

    def test_features_deduplicated(self):
        raw = RawOptions(name="demo-app", features=["vitest", "pwa", "vitest"])
        selection = validate_options(raw).selection
        assert selection.features == frozenset({Feature.VITEST, Feature.PWA})
        assert selection.ordered_features == [Feature.PWA, Feature.VITEST]

    def test_values_are_case_insensitive(self):
        result = validate_options(RawOptions(name="demo-app", styling="Tailwind"))
        assert result.selection.styling is Styling.TAILWIND

    def test_directives_pass_through(self):
        raw = RawOptions(name="demo-app", install=False, init_git=False, run_dev=False)
        selection = validate_options(raw).selection
        assert not (selection.install or selection.init_git or selection.run_dev)


class TestValidateOptionsErrors:

    def test_collects_every_error(self):
        raw = RawOptions(
            name="Bad Name",
            framework="angular",
            styling="bootstrap",
            package_manager="pip",
            features=["telemetry"],
        )
        result = validate_options(raw)
        assert not result.ok
        assert result.selection is None
        assert len(result.errors) == 5
        assert result.errors[0].startswith("Invalid project name:")
        assert any("angular" in e and "react" in e for e in result.errors)

    def test_unknown_value_lists_allowed_values(self):
        result = validate_options(RawOptions(name="demo-app", package_manager="pip"))
        assert result.errors == [
            "Unknown package manager 'pip' (expected one of: bun, pnpm, yarn, npm)"
        ]

    def test_malformed_template(self):
        result = validate_options(RawOptions(name="demo-app", template="react"))
        assert any("Invalid template" in e for e in result.errors)

    def test_template_framework_conflict(self):
        raw = RawOptions(name="demo-app", template="react-ts", framework="vue")
        result = validate_options(raw)
        assert any("conflicts" in e for e in result.errors)

    def test_template_language_conflict(self):
        raw = RawOptions(name="demo-app", template="react-js", typescript=True)
        result = validate_options(raw)
        assert result.errors == ["--ts conflicts with template 'react-js'"]

    def test_matching_language_flag_is_accepted(self):
        raw = RawOptions(name="demo-app", template="react-js", typescript=False)
        assert validate_options(raw).selection.template_id == "react-js"

    def test_state_management_requires_flag(self):
        raw = RawOptions(name="demo-app", state_management="zustand")
        result = validate_options(raw)
        assert result.errors == [
            "--state-management requires the 'state-management' feature"
        ]

    def test_state_management_outside_framework_subset(self):
        raw = RawOptions(
            name="demo-app",
            framework="vue",
            features=["state-management"],
            state_management="redux-toolkit",
        )
        result = validate_options(raw)
        assert len(result.errors) == 1
        assert "not available for vue" in result.errors[0]
        assert "pinia" in result.errors[0]

    def test_vanilla_allows_no_state_management(self):
        raw = RawOptions(
            name="demo-app",
            framework="vanilla",
            features=["state-management"],
            state_management="zustand",
        )
        result = validate_options(raw)
        assert "available: none" in result.errors[0]

    def test_api_client_requires_flag(self):
        result = validate_options(RawOptions(name="demo-app", api_client="axios"))
        assert result.errors == ["--api-client requires the 'api-client' feature"]

    def test_valid_state_and_api_choices(self):
        raw = RawOptions(
            name="demo-app",
            framework="svelte",
            features=["state-management", "api-client"],
            state_management="svelte-stores",
            api_client="tanstack-query",
        )
        selection = validate_options(raw).selection
        assert selection.state_management is StateManagement.SVELTE_STORES
        assert selection.api_client is ApiClient.TANSTACK_QUERY


class TestStylingCompatibility:

    def test_incompatible_styling_is_a_warning(self):
        raw = RawOptions(name="demo-app", framework="vue", styling="styled-components")
        result = validate_options(raw)
        assert result.ok
        assert result.selection.styling is Styling.STYLED_COMPONENTS
        assert len(result.warnings) == 1
        assert "preact, react" in result.warnings[0]

    def test_compatible_styling_has_no_warning(self):
        raw = RawOptions(name="demo-app", framework="preact", styling="styled-components")
        assert validate_options(raw).warnings == []

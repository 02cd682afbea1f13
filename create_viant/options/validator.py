"""Validation of raw user input into a ``Selection``.

The validator never touches the filesystem.  It collects every problem it
finds instead of stopping at the first one, so the user can fix all of them
in a single round trip.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, TypeVar

from create_viant.options.models import (
    STATE_MANAGEMENT_BY_FRAMEWORK,
    STYLING_FRAMEWORKS,
    ApiClient,
    Feature,
    Framework,
    Language,
    PackageManager,
    RawOptions,
    Selection,
    StateManagement,
    Styling,
)
from create_viant.options.names import validate_project_name


E = TypeVar("E", bound=Enum)


@dataclass
class ValidationResult:
    """Result of ``validate_options``.

    ``selection`` is set only when ``errors`` is empty.  ``warnings`` hold
    accepted-but-questionable choices.
    """

    selection: Optional[Selection] = None
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.selection is not None and not self.errors


# ---------------------------------------------------------------------------
# Options
# ---------------------------------------------------------------------------

def _parse_enum(
    enum_cls: type[E], value: Optional[str], label: str, errors: list[str]
) -> Optional[E]:
    if value is None:
        return None
    try:
        return enum_cls(value.strip().lower())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        errors.append(f"Unknown {label} '{value}' (expected one of: {allowed})")
        return None


def _split_template(
    template: str, errors: list[str]
) -> tuple[Optional[Framework], Optional[Language]]:
    framework_part, sep, language_part = template.strip().lower().rpartition("-")
    if not sep:
        errors.append(f"Invalid template '{template}' (expected '<framework>-<ts|js>')")
        return None, None
    framework = _parse_enum(Framework, framework_part, "framework", errors)
    language = _parse_enum(Language, language_part, "language", errors)
    return framework, language


def validate_options(raw: RawOptions) -> ValidationResult:
    """Resolve *raw* into a ``Selection`` or a list of human-readable errors.

    Defaults: framework ``react``, TypeScript, styling ``none``, package
    manager ``npm``.  A styling choice that does not suit the framework is
    accepted with a warning.
    """
    result = ValidationResult()
    errors = result.errors

    name_errors = validate_project_name(raw.name)
    if name_errors:
        errors.append(f"Invalid project name: {', '.join(name_errors)}")

    framework: Optional[Framework] = None
    language: Optional[Language] = None
    if raw.template:
        framework, language = _split_template(raw.template, errors)
    if raw.framework is not None:
        explicit = _parse_enum(Framework, raw.framework, "framework", errors)
        if explicit is not None and framework is not None and explicit is not framework:
            errors.append(
                f"Framework '{explicit.value}' conflicts with template '{raw.template}'"
            )
        framework = framework or explicit
    if raw.typescript is not None:
        explicit_language = Language.TS if raw.typescript else Language.JS
        if language is not None and explicit_language is not language:
            errors.append(
                f"--{explicit_language.value} conflicts with template '{raw.template}'"
            )
        language = language or explicit_language

    framework = framework or Framework.REACT
    language = language or Language.TS

    styling = _parse_enum(Styling, raw.styling, "styling", errors) or Styling.NONE
    package_manager = (
        _parse_enum(PackageManager, raw.package_manager, "package manager", errors)
        or PackageManager.NPM
    )

    features: set[Feature] = set()
    for value in raw.features:
        feature = _parse_enum(Feature, value, "feature", errors)
        if feature is not None:
            features.add(feature)

    state = _parse_enum(StateManagement, raw.state_management, "state management", errors)
    if state is not None:
        if Feature.STATE_MANAGEMENT not in features:
            errors.append("--state-management requires the 'state-management' feature")
        allowed = STATE_MANAGEMENT_BY_FRAMEWORK[framework]
        if state not in allowed:
            choices = ", ".join(s.value for s in allowed) or "none"
            errors.append(
                f"State management '{state.value}' is not available for "
                f"{framework.value} (available: {choices})"
            )

    api_client = _parse_enum(ApiClient, raw.api_client, "API client", errors)
    if api_client is not None and Feature.API_CLIENT not in features:
        errors.append("--api-client requires the 'api-client' feature")

    supported = STYLING_FRAMEWORKS.get(styling)
    if supported is not None and framework not in supported:
        names = ", ".join(sorted(f.value for f in supported))
        result.warnings.append(
            f"Styling '{styling.value}' is intended for {names}; "
            f"continuing with {framework.value} anyway"
        )

    if errors:
        return result

    result.selection = Selection(
        name=raw.name,
        framework=framework,
        language=language,
        styling=styling,
        package_manager=package_manager,
        features=frozenset(features),
        state_management=state,
        api_client=api_client,
        install=raw.install,
        init_git=raw.init_git,
        run_dev=raw.run_dev,
    )
    return result

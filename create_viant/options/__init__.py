"""User choices: enumerations, the ``Selection`` model and its validator.

Usage::

    from create_viant.options import RawOptions, validate_options

    result = validate_options(RawOptions(name="demo-app", styling="tailwind"))
    if result.ok:
        print(result.selection.template_id)
"""

from create_viant.options.models import (
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
from create_viant.options.package_managers import (
    detect_package_managers,
    order_package_managers,
)
from create_viant.options.validator import (
    ValidationResult,
    validate_options,
    validate_project_name,
)

__all__ = [
    "ApiClient",
    "Feature",
    "Framework",
    "Language",
    "PackageManager",
    "RawOptions",
    "Selection",
    "StateManagement",
    "Styling",
    "ValidationResult",
    "detect_package_managers",
    "order_package_managers",
    "validate_options",
    "validate_project_name",
]

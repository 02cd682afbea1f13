"""Command-line entry point for ``create-viant``.

Usage::

    create-viant my-app --template react-ts --styling tailwind -f vitest -f linting
    create-viant my-app --framework vue --js --skip-install
    create-viant my-app --dry-run
    python -m create_viant --list-templates
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from create_viant import __version__
from create_viant.config import Config
from create_viant.errors import format_error
from create_viant.manifest.builder import ManifestBuilder
from create_viant.options.models import (
    FEATURE_LABELS,
    ApiClient,
    Feature,
    Framework,
    PackageManager,
    RawOptions,
    Selection,
    StateManagement,
    Styling,
)
from create_viant.options.package_managers import detect_package_managers
from create_viant.options.validator import validate_options
from create_viant.scaffolder.template_store import TemplateStore
from create_viant.scaffolder.transaction import GenerationResult, GenerationTransaction
from create_viant.utils import (
    console,
    error_console,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    set_quiet,
)


def _choices(enum_cls: type) -> str:
    return ", ".join(member.value for member in enum_cls)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="create-viant",
        description="Create a new Viant app with zero configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-viant my-app\n"
            "  create-viant my-app -t vue-ts -s tailwind -f vitest -f linting\n"
            "  create-viant my-app --framework svelte --js --skip-install\n"
        ),
    )
    parser.add_argument("project_name", nargs="?", default="", help="Project directory / package name")
    parser.add_argument("--template", "-t", help="Template id, e.g. react-ts")
    parser.add_argument("--framework", help=f"Framework ({_choices(Framework)})")

    language = parser.add_mutually_exclusive_group()
    language.add_argument("--ts", dest="typescript", action="store_true", default=None,
                          help="Use TypeScript (default)")
    language.add_argument("--js", dest="typescript", action="store_false",
                          help="Use JavaScript")

    parser.add_argument("--styling", "-s", help=f"Styling solution ({_choices(Styling)})")
    parser.add_argument("--package-manager", "-p",
                        help=f"Package manager ({_choices(PackageManager)}); detected if omitted")
    parser.add_argument("--feature", "-f", action="append", default=[],
                        help=f"Feature to enable, repeatable or comma-separated ({_choices(Feature)})")
    parser.add_argument("--state-management", help=f"State library ({_choices(StateManagement)})")
    parser.add_argument("--api-client", help=f"API client ({_choices(ApiClient)})")
    parser.add_argument("--skip-install", action="store_true", help="Do not install dependencies")
    parser.add_argument("--skip-git", action="store_true", help="Do not initialize a git repository")
    parser.add_argument("--skip-dev", action="store_true", help="Do not start the dev server")
    parser.add_argument("--templates-dir", type=Path, help="Use templates from this directory")
    parser.add_argument("--output", "-o", type=Path, help="Parent directory for the project")
    parser.add_argument("--list-templates", action="store_true", help="List available templates and exit")
    parser.add_argument("--dry-run", action="store_true",
                        help="Print the derived package.json and file list without writing anything")
    parser.add_argument("--quiet", "-q", action="store_true", help="Only print errors")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    parser.set_defaults(typescript=None)
    return parser


def _split_features(values: Sequence[str]) -> list[str]:
    features: list[str] = []
    for value in values:
        features.extend(part.strip() for part in value.split(",") if part.strip())
    return features


def _config_from_args(args: argparse.Namespace) -> Config:
    config = Config.from_env()
    if args.output is not None:
        config.output_dir = args.output
    if args.templates_dir is not None:
        config.templates_dir = args.templates_dir
    config.quiet = args.quiet
    return config


def _raw_options(args: argparse.Namespace, package_manager: Optional[str]) -> RawOptions:
    return RawOptions(
        name=args.project_name,
        template=args.template,
        framework=args.framework,
        typescript=args.typescript,
        styling=args.styling,
        package_manager=package_manager,
        features=_split_features(args.feature),
        state_management=args.state_management,
        api_client=args.api_client,
        install=not args.skip_install,
        init_git=not args.skip_git,
        run_dev=not args.skip_dev,
    )


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

def _print_selection(selection: Selection) -> None:
    features = ", ".join(FEATURE_LABELS[f] for f in selection.ordered_features) or "none"
    summary = {
        "Project": selection.name,
        "Template": selection.template_id,
        "Styling": selection.styling.value,
        "Package manager": selection.package_manager.value,
        "Features": features,
    }
    if selection.state_management is not None:
        summary["State management"] = selection.state_management.value
    if selection.api_client is not None:
        summary["API client"] = selection.api_client.value
    print_summary_table(summary, title="Creating Viant app")


def _print_dry_run(selection: Selection) -> None:
    files = ManifestBuilder().build(selection)
    console.print_json(files.manifest.to_json())
    console.print("[bold]Files:[/bold]")
    for path in files.paths():
        console.print(f"  {path}")


def _report(result: GenerationResult, selection: Selection) -> None:
    if not result.success:
        if result.error is not None:
            error_console.print(format_error(result.error))
        cleanup = result.cleanup
        if cleanup is not None and not cleanup.success:
            print_error(
                f"Cleanup failed: {cleanup.error}. "
                f"Please remove {cleanup.path} manually."
            )
        elif cleanup is not None and cleanup.existed:
            print_warning(f"Removed partially created directory {cleanup.path}")
        return

    print_success(f"Created {selection.name} at {result.project_path}")
    pm = selection.package_manager.value
    console.print("\nNext steps:")
    console.print(f"  cd {selection.name}")
    if not selection.install or result.install_failed:
        console.print(f"  {pm} install")
    console.print(f"  {pm} run dev\n")


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``create-viant`` and ``python -m create_viant``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = _config_from_args(args)
    except ValidationError as exc:
        for problem in exc.errors():
            field_name = ".".join(str(part) for part in problem["loc"])
            print_error(f"Invalid configuration for {field_name}: {problem['msg']}")
        sys.exit(1)
    set_quiet(config.quiet)

    if args.list_templates:
        store = TemplateStore(config.templates_dir)
        for template_id in store.available():
            console.print(template_id, soft_wrap=True, highlight=False)
        sys.exit(0)

    package_manager = args.package_manager
    if package_manager is None and not args.dry_run:
        package_manager = asyncio.run(detect_package_managers())[0].value

    validation = validate_options(_raw_options(args, package_manager))
    for warning in validation.warnings:
        print_warning(warning)
    if not validation.ok:
        for error in validation.errors:
            print_error(error)
        sys.exit(1)
    selection = validation.selection

    if args.dry_run:
        _print_dry_run(selection)
        sys.exit(0)

    _print_selection(selection)
    transaction = GenerationTransaction(selection, config)
    try:
        result = asyncio.run(transaction.run())
    except KeyboardInterrupt:
        console.print("\nStopped.")
        sys.exit(130)

    _report(result, selection)
    if result.dev_server_ready:
        try:
            asyncio.run(transaction.start_dev_server())
        except KeyboardInterrupt:
            console.print("\nDev server stopped.")
    sys.exit(result.exit_code)


if __name__ == "__main__":
    main()

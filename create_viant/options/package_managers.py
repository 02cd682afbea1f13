"""Package manager detection and preference ordering."""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from create_viant.utils import run_command
from create_viant.options.models import PACKAGE_MANAGER_ORDER, PackageManager


def order_package_managers(available: Iterable[str | PackageManager]) -> list[PackageManager]:
    """Filter the global preference order (bun > pnpm > yarn > npm) to *available*.

    Unknown names are ignored.  Falls back to ``[npm]`` when nothing remains.
    """
    names = {pm.value if isinstance(pm, PackageManager) else str(pm) for pm in available}
    ordered = [pm for pm in PACKAGE_MANAGER_ORDER if pm.value in names]
    return ordered or [PackageManager.NPM]


async def _is_installed(manager: PackageManager) -> bool:
    try:
        returncode, _, _ = await run_command([manager.value, "--version"], timeout=10)
    except OSError:
        return False
    return returncode == 0


async def detect_package_managers() -> list[PackageManager]:
    """Return the package managers installed on this machine, in preference order."""
    results = await asyncio.gather(*(_is_installed(pm) for pm in PACKAGE_MANAGER_ORDER))
    available = [pm for pm, ok in zip(PACKAGE_MANAGER_ORDER, results) if ok]
    return order_package_managers(available)

"""create-viant scaffolder -- materializes a project directory from a ``Selection``.

Quick usage::

    from create_viant.scaffolder import GenerationTransaction

    result = await GenerationTransaction(selection, config).run()
    if not result.success:
        print(result.error, result.cleanup)
"""

from create_viant.scaffolder.collaborators import DevServer, GitInitializer, PackageInstaller
from create_viant.scaffolder.template_store import TemplateStore
from create_viant.scaffolder.transaction import (
    GenerationResult,
    GenerationState,
    GenerationStatus,
    GenerationTransaction,
)

__all__ = [
    "DevServer",
    "GenerationResult",
    "GenerationState",
    "GenerationStatus",
    "GenerationTransaction",
    "GitInitializer",
    "PackageInstaller",
    "TemplateStore",
]

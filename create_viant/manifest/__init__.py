"""Manifest derivation -- turns a ``Selection`` into ``package.json`` plus config files.

Usage::

    from create_viant.manifest import ManifestBuilder

    files = ManifestBuilder().build(selection, base_manifest=template_package_json)
    print(files.manifest.to_json())
    for path, content in files.documents.items():
        ...
"""

from create_viant.manifest.builder import ManifestBuilder, apply_contribution
from create_viant.manifest.models import Contribution, Manifest, ProjectFiles
from create_viant.manifest.templates import TemplateRenderer
from create_viant.manifest.vite_config import ViteConfig, ViteImport

__all__ = [
    "Contribution",
    "Manifest",
    "ManifestBuilder",
    "ProjectFiles",
    "TemplateRenderer",
    "ViteConfig",
    "ViteImport",
    "apply_contribution",
]

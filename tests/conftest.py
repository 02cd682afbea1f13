"""Shared pytest fixtures for the create-viant test suite.

Provides reusable fixtures for:
- Selections with sensible test defaults
- A minimal on-disk template store and the bundled one
- Configs pointing at temporary output directories
- Fake git / installer / dev-server collaborators
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable
from unittest.mock import AsyncMock

import pytest

from create_viant.config import BUNDLED_TEMPLATES_DIR, Config
from create_viant.manifest.builder import ManifestBuilder
from create_viant.options.models import Selection
from create_viant.scaffolder.template_store import TemplateStore


# ---------------------------------------------------------------------------
# Selections
# ---------------------------------------------------------------------------

@pytest.fixture
def make_selection() -> Callable[..., Selection]:
    """Factory for ``Selection`` objects.

    Side-effecting steps (git, install, dev server) are off unless a test
    turns them on explicitly.
    """
    def _make(**overrides: Any) -> Selection:
        fields: dict[str, Any] = {
            "name": "demo-app",
            "install": False,
            "init_git": False,
            "run_dev": False,
        }
        fields.update(overrides)
        return Selection(**fields)

    return _make


@pytest.fixture
def builder() -> ManifestBuilder:
    return ManifestBuilder()


# ---------------------------------------------------------------------------
# Template stores
# ---------------------------------------------------------------------------

@pytest.fixture
def template_root(tmp_path: Path) -> Path:
    """A tiny store containing only ``react-ts`` plus a tailwind overlay."""
    root = tmp_path / "templates"
    react = root / "react-ts"
    (react / "src").mkdir(parents=True)
    (react / "package.json").write_text(
        json.dumps({
            "name": "starter",
            "version": "0.0.0",
            "private": True,
            "scripts": {"dev": "vite", "clean": "rm -rf dist"},
            "dependencies": {"react": "^18.0.0"},
            "devDependencies": {},
        }),
        encoding="utf-8",
    )
    (react / "index.html").write_text("<div id=\"root\"></div>\n", encoding="utf-8")
    (react / "src" / "main.tsx").write_text("import './index.css';\n", encoding="utf-8")

    overlay = root / "styles" / "tailwind" / "src"
    overlay.mkdir(parents=True)
    (overlay / "theme.css").write_text("/* theme */\n", encoding="utf-8")
    return root


@pytest.fixture
def template_store(template_root: Path) -> TemplateStore:
    return TemplateStore(template_root)


@pytest.fixture
def bundled_store() -> TemplateStore:
    return TemplateStore(BUNDLED_TEMPLATES_DIR)


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    out = tmp_path / "out"
    out.mkdir()
    return out


@pytest.fixture
def config(output_dir: Path, template_root: Path) -> Config:
    return Config(output_dir=output_dir, templates_dir=template_root)


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------

@pytest.fixture
def fake_git() -> AsyncMock:
    git = AsyncMock()
    git.init = AsyncMock(return_value=None)
    return git


@pytest.fixture
def fake_installer() -> AsyncMock:
    installer = AsyncMock()
    installer.install = AsyncMock(return_value=0)
    return installer


@pytest.fixture
def fake_dev_server() -> AsyncMock:
    server = AsyncMock()
    server.run = AsyncMock(return_value=0)
    return server

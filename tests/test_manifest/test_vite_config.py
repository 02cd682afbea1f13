"""Tests for the structured Vite config and its rendering."""

from __future__ import annotations

import pytest

from create_viant.manifest.documents import render_vite_config
from create_viant.manifest.templates import TemplateRenderer
from create_viant.manifest.vite_config import BASE_IMPORTS, ViteConfig, ViteImport


pytestmark = pytest.mark.unit


class TestViteImport:

    def test_default_import(self):
        statement = ViteImport(module="@vitejs/plugin-react", default="react")
        assert statement.render() == "import react from '@vitejs/plugin-react';"

    def test_named_import(self):
        statement = ViteImport(module="vite-plugin-pwa", named=("VitePWA",))
        assert statement.render() == "import { VitePWA } from 'vite-plugin-pwa';"

    def test_default_and_named(self):
        statement = ViteImport(module="m", default="d", named=("a", "b"))
        assert statement.render() == "import d, { a, b } from 'm';"

    def test_side_effect_import(self):
        assert ViteImport(module="./setup").render() == "import './setup';"


class TestViteConfig:

    def test_starts_with_base_imports(self):
        config = ViteConfig()
        assert config.imports == list(BASE_IMPORTS)
        assert config.plugins == []
        assert config.alias == {"@": "./src"}

    def test_same_module_imports_are_merged(self):
        config = ViteConfig()
        config.add_import(ViteImport(module="vite", named=("loadEnv",)))
        config.add_import(ViteImport(module="vite", named=("defineConfig",)))
        vite_imports = [i for i in config.imports if i.module == "vite"]
        assert len(vite_imports) == 1
        assert vite_imports[0].named == ("defineConfig", "loadEnv")

    def test_plugins_are_deduplicated_in_order(self):
        config = ViteConfig()
        for plugin in ("react()", "tailwindcss()", "react()"):
            config.add_plugin(plugin)
        assert config.plugins == ["react()", "tailwindcss()"]

    def test_instances_do_not_share_state(self):
        first, second = ViteConfig(), ViteConfig()
        first.add_plugin("react()")
        first.add_import(ViteImport(module="x", default="x"))
        assert second.plugins == []
        assert len(second.imports) == len(BASE_IMPORTS)


class TestRenderViteConfig:

    def test_rendered_output(self):
        config = ViteConfig()
        config.add_import(ViteImport(module="@vitejs/plugin-react", default="react"))
        config.add_plugin("react()")
        text = render_vite_config(TemplateRenderer(), config)

        lines = text.splitlines()
        assert lines[0] == "import { defineConfig } from 'vite';"
        assert lines[1] == "import { fileURLToPath, URL } from 'node:url';"
        assert lines[2] == "import react from '@vitejs/plugin-react';"
        assert "    react()," in lines
        assert "      '@': fileURLToPath(new URL('./src', import.meta.url))," in lines
        assert text.count("export default defineConfig") == 1

    def test_no_plugins(self):
        text = render_vite_config(TemplateRenderer(), ViteConfig())
        assert "plugins: [\n  ],\n" in text

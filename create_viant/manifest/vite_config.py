"""Structured model of a Vite config file.

The config is assembled from import statements and plugin call expressions
contributed by the framework, styling and feature layers, then rendered in
one pass through ``vite.config.j2``.  Nothing is ever spliced into existing
config text.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ViteImport(BaseModel):
    """A single ES import statement."""

    model_config = ConfigDict(frozen=True)

    module: str
    default: Optional[str] = Field(default=None, description="Default import binding")
    named: tuple[str, ...] = Field(default=(), description="Named import bindings")

    def render(self) -> str:
        parts: list[str] = []
        if self.default:
            parts.append(self.default)
        if self.named:
            parts.append("{ " + ", ".join(self.named) + " }")
        if not parts:
            return f"import '{self.module}';"
        return f"import {', '.join(parts)} from '{self.module}';"


BASE_IMPORTS: tuple[ViteImport, ...] = (
    ViteImport(module="vite", named=("defineConfig",)),
    ViteImport(module="node:url", named=("fileURLToPath", "URL")),
)


class ViteConfig(BaseModel):
    """Ordered imports plus an ordered plugin list."""

    imports: list[ViteImport] = Field(default_factory=lambda: list(BASE_IMPORTS))
    plugins: list[str] = Field(default_factory=list)
    alias: dict[str, str] = Field(default_factory=lambda: {"@": "./src"})

    def add_import(self, statement: ViteImport) -> None:
        """Add *statement*, merging named bindings into an existing import of the same module."""
        for index, existing in enumerate(self.imports):
            if existing.module != statement.module:
                continue
            default = existing.default or statement.default
            named = existing.named + tuple(n for n in statement.named if n not in existing.named)
            self.imports[index] = ViteImport(module=existing.module, default=default, named=named)
            return
        self.imports.append(statement)

    def add_plugin(self, expression: str) -> None:
        if expression not in self.plugins:
            self.plugins.append(expression)

    def import_lines(self) -> list[str]:
        return [statement.render() for statement in self.imports]

"""npm package-name rules for project names.

Every rule is checked independently so a caller can report all violations
at once.
"""

from __future__ import annotations

import re


MAX_NAME_LENGTH = 214

_BLACKLISTED_NAMES = frozenset({"node_modules", "favicon.ico"})

# Node.js built-in modules; a package may not shadow one of these.
_NODE_BUILTINS = frozenset({
    "assert", "async_hooks", "buffer", "child_process", "cluster", "console",
    "constants", "crypto", "dgram", "diagnostics_channel", "dns", "domain",
    "events", "fs", "http", "http2", "https", "inspector", "module", "net",
    "os", "path", "perf_hooks", "process", "punycode", "querystring",
    "readline", "repl", "stream", "string_decoder", "sys", "timers", "tls",
    "trace_events", "tty", "url", "util", "v8", "vm", "wasi",
    "worker_threads", "zlib",
})

_ALLOWED_CHARS = re.compile(r"^[a-z0-9-]+$")


def validate_project_name(name: str) -> list[str]:
    """Return every package-name rule that *name* violates.

    An empty list means the name is valid for a new npm package.
    """
    if not name:
        return ["name is required"]

    errors: list[str] = []
    if len(name) > MAX_NAME_LENGTH:
        errors.append(f"name can no longer contain more than {MAX_NAME_LENGTH} characters")
    if name != name.strip():
        errors.append("name cannot contain leading or trailing spaces")
    if name.startswith("."):
        errors.append("name cannot start with a period")
    if name.startswith("_"):
        errors.append("name cannot start with an underscore")
    if name.lower() != name:
        errors.append("name can no longer contain capital letters")
    if not _ALLOWED_CHARS.match(name.strip().lower() or "-"):
        errors.append("name can only contain lowercase letters, digits and hyphens")
    if name.lower() in _BLACKLISTED_NAMES:
        errors.append(f"{name} is a blacklisted name")
    if name.lower() in _NODE_BUILTINS:
        errors.append(f"{name} is a core module name")
    return errors

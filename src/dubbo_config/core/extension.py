"""
Registry of named extensions per capability.

The configuration engine only needs to know whether a plugin name exists
for a capability (``loadbalance``, ``filter``, ...); loading and
instantiating the plugin is the business of the RPC runtime. Names come
from three places:

- the built-in set below
- ``register`` calls made by the application
- installed distributions exposing entry points in the group
  ``dubbo_config.extensions.<kind>``
"""

from __future__ import annotations

from importlib.metadata import entry_points
from typing import Dict, Iterable, Optional, Set

from dubbo_config.core.utils.logger import log_debug

ENTRY_POINT_GROUP_PREFIX = "dubbo_config.extensions."

_BUILTIN_EXTENSIONS: Dict[str, Set[str]] = {
    "loadbalance": {"random", "roundrobin", "leastactive", "consistenthash"},
    "cluster": {
        "failover",
        "failfast",
        "failsafe",
        "failback",
        "forking",
        "available",
        "broadcast",
        "mergeable",
    },
    "filter": {
        "echo",
        "generic",
        "genericimpl",
        "token",
        "accesslog",
        "activelimit",
        "classloader",
        "context",
        "consumercontext",
        "exception",
        "executelimit",
        "deprecated",
        "compatible",
        "timeout",
        "trace",
        "future",
        "monitor",
        "validation",
        "cache",
    },
    "listener": {"deprecated"},
}


class ExtensionRegistry:
    """
    Set of known extension names, keyed by capability kind.

    Entry points are scanned lazily, once per kind, the first time that
    kind is queried.
    """

    def __init__(self, include_builtins: bool = True) -> None:
        self._names: Dict[str, Set[str]] = {}
        self._scanned: Set[str] = set()
        if include_builtins:
            for kind, names in _BUILTIN_EXTENSIONS.items():
                self._names[kind] = set(names)

    def register(self, kind: str, *names: str) -> None:
        """Register one or more extension names for ``kind``."""
        self._names.setdefault(kind, set()).update(names)

    def unregister(self, kind: str, name: str) -> None:
        self._names.get(kind, set()).discard(name)

    def has_extension(self, kind: str, name: str) -> bool:
        if not name:
            raise ValueError("Extension name == null")
        self._scan_entry_points(kind)
        return name in self._names.get(kind, set())

    def names(self, kind: str) -> Set[str]:
        self._scan_entry_points(kind)
        return set(self._names.get(kind, set()))

    def kinds(self) -> Iterable[str]:
        return sorted(self._names)

    def _scan_entry_points(self, kind: str) -> None:
        if kind in self._scanned:
            return
        self._scanned.add(kind)
        group = ENTRY_POINT_GROUP_PREFIX + kind
        found = [ep.name for ep in entry_points(group=group)]
        if found:
            log_debug("EXTENSION", f"Discovered {len(found)} '{kind}' extension(s)", group)
            self.register(kind, *found)


_registry: Optional[ExtensionRegistry] = None


def get_extension_registry() -> ExtensionRegistry:
    """Get the process-wide extension registry."""
    global _registry
    if _registry is None:
        _registry = ExtensionRegistry()
    return _registry


def set_extension_registry(registry: Optional[ExtensionRegistry]) -> None:
    """Replace the process-wide registry (``None`` resets to a fresh one on next use)."""
    global _registry
    _registry = registry

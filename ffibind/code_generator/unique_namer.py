import threading
from typing import Any, Dict, Iterable, Optional

from ffibind import logging as ffibind_logging

logger = ffibind_logging.get_logger(__name__)

DART_KEYWORDS = frozenset({
    "abstract", "as", "assert", "async", "await", "break", "case", "catch",
    "class", "const", "continue", "covariant", "default", "deferred", "do",
    "dynamic", "else", "enum", "export", "extends", "extension", "external",
    "factory", "false", "final", "finally", "for", "Function", "get", "hide",
    "if", "implements", "import", "in", "interface", "is", "late", "library",
    "mixin", "new", "null", "on", "operator", "part", "required", "rethrow",
    "return", "set", "show", "static", "super", "switch", "sync", "this",
    "throw", "true", "try", "typedef", "var", "void", "while", "with", "yield",
})


class NameCollisionError(RuntimeError):
    pass


class UniqueNamer:
    """Allocates collision-free identifiers for one output unit.

    A single namer must be shared by every binding rendered into the same
    unit. Allocation is deterministic: for a fixed sequence of requests the
    same identifiers are issued, so generated output is reproducible.
    """

    def __init__(self, reserved: Optional[Iterable[str]] = None):
        self._used: set[str] = set(reserved) if reserved is not None else set()
        self._issued: list[str] = []
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "UniqueNamer":
        generator_cfg: Dict[str, Any] = config.get("generator", {}) if config else {}
        reserved = set(generator_cfg.get("reserved_names", []))
        if generator_cfg.get("reserve_dart_keywords", True):
            reserved |= DART_KEYWORDS
        return cls(reserved)

    def is_used(self, name: str) -> bool:
        return name in self._used

    @property
    def issued(self) -> tuple[str, ...]:
        """Identifiers issued so far, in allocation order."""
        return tuple(self._issued)

    def allocate(self, base: str) -> str:
        """Return the first unused of `base`, `base2`, `base3`, ..."""
        with self._lock:
            candidate = base
            counter = 2
            while candidate in self._used:
                candidate = f"{base}{counter}"
                counter += 1
            if candidate != base:
                logger.debug("name %s already taken, using %s", base, candidate)
            self._claim(candidate)
            return candidate

    def reserve(self, name: str) -> str:
        """Claim exactly `name`; raises NameCollisionError if it is taken."""
        with self._lock:
            self._claim(name)
            return name

    def _claim(self, name: str) -> None:
        if name in self._used:
            raise NameCollisionError(f"identifier {name!r} was already issued in this unit")
        self._used.add(name)
        self._issued.append(name)

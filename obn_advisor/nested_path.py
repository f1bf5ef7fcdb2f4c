"""Dotted-path access into untyped configuration trees."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

ConfigTree = Mapping[str, Any]


class _Absent:
    """Marker for a path that does not resolve to anything."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


class PathState(Enum):
    """Outcome of resolving a dotted path."""
    PRESENT = "present"
    NULL = "null"
    ABSENT = "absent"


@dataclass(frozen=True)
class Resolution:
    """Result of a path lookup: the state plus the value found (if any)."""
    state: PathState
    value: Any = ABSENT

    @property
    def exists(self) -> bool:
        return self.state is PathState.PRESENT


def resolve(tree: Any, path: str) -> Resolution:
    """Walk ``path`` (e.g. ``"gateway.files.urlAllowlist"``) through ``tree``.

    Every intermediate value must be a mapping. An empty path, an empty
    segment, a missing key or a non-mapping intermediate all resolve to
    ``PathState.ABSENT``. A key that is present but holds ``None`` resolves
    to ``PathState.NULL``.
    """
    if not isinstance(path, str) or not path:
        return Resolution(PathState.ABSENT)

    current = tree
    for key in path.split('.'):
        if not key or not isinstance(current, Mapping) or key not in current:
            return Resolution(PathState.ABSENT)
        current = current[key]

    if current is None:
        return Resolution(PathState.NULL, None)
    return Resolution(PathState.PRESENT, current)


def get_nested_value(tree: Any, path: str, default: Any = ABSENT) -> Any:
    """Return the value at ``path``, ``None`` for a present null, else ``default``."""
    result = resolve(tree, path)
    if result.state is PathState.ABSENT:
        return default
    return result.value


def has_nested_key(tree: Any, path: str) -> bool:
    """True if ``path`` resolves to a non-null value (``False``/``0``/``[]`` count)."""
    return resolve(tree, path).exists

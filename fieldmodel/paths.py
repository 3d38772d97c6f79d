import logging
from collections.abc import Mapping, MutableMapping, Sequence
from typing import Any

logger = logging.getLogger(__name__)

_SCALARS = (str, bytes, bytearray, int, float, complex, bool)


class _Missing:
    """ Marker for a value that was never assigned, as opposed to None """

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


MISSING: Any = _Missing()


def split_path(mapping: str) -> tuple[str, ...]:
    """Split a dotted mapping into segments, dropping empty ones.

    `'.foo'` and `'foo..bar'` behave like `'foo'` and `'foo.bar'`.
    """
    return tuple(segment for segment in mapping.split('.') if segment)


def _step(value: Any, segment: str) -> Any:
    if isinstance(value, Mapping):
        return value.get(segment, MISSING)
    if isinstance(value, _SCALARS):
        return MISSING
    if isinstance(value, Sequence):
        try:
            return value[int(segment)] if segment.isascii() and segment.isdigit() else MISSING
        except IndexError:
            return MISSING
    return getattr(value, segment, MISSING)


def resolve_path(data: Any, path: Sequence[str]) -> Any:
    """Walk `path` into `data` one segment at a time.

    Mappings are indexed by key, sequences by integer segment and any other
    object by attribute; scalars and strings have nothing below them. Returns
    MISSING for an empty path, when a segment cannot be found, or as soon as
    a None or missing value is reached before the last segment. The terminal
    value itself is returned as is, even when it is None.
    """
    if not path:
        return MISSING
    value = data
    for segment in path:
        if value is None or value is MISSING:
            logger.debug(f"path '{'.'.join(path)}' stopped before '{segment}'")
            return MISSING
        value = _step(value, segment)
    return value


def assign_path(target: MutableMapping[str, Any], path: Sequence[str], value: Any) -> None:
    """Write `value` at `path` inside `target`, creating dict nodes as needed.

    Keys already present in an intermediate mapping are kept. That mapping is
    shallow-copied before being written to, so a value taken from the raw
    input is never modified through its nested path. Every node created here
    is a dict, so an integer segment such as `items.0.id` is rebuilt as
    `{"items": {"0": {"id": ...}}}` rather than as a list.
    """
    if not path:
        return
    node = target
    for segment in path[:-1]:
        child = node.get(segment)
        child = node[segment] = dict(child) if isinstance(child, Mapping) else {}
        node = child
    node[path[-1]] = value

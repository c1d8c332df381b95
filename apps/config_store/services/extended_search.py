"""
apps.config_store.services.extended_search
~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~~
Extended search over collections of configuration entries.

Two kinds of criteria are supported and combined with AND:

**Free text** (``?search=203.0.113``)
    An entry matches when any scalar value reachable from it, through nested
    mappings and sequences, contains the term as a case-insensitive
    substring.  Numbers are compared by their ``str()``; booleans as
    ``"true"`` / ``"false"``; ``None`` never matches.  Mapping keys are not
    searched.

**Per field** (``?descr=WAN``, ``?subnet_bits__gte=24``, ``?advanced.mtu=1500``)
    Every criterion must match.  The field path is dotted and may index
    sequences with digits.  An entry lacking the field is excluded.

    =============  ==========================================================
    Lookup         Matches when
    =============  ==========================================================
    ``exact``      scalar text equals the value (default, case-sensitive)
    ``iexact``     scalar text equals the value, ignoring case
    ``contains``   value is a case-insensitive substring, nested values too
    ``startswith`` scalar text starts with the value, ignoring case
    ``endswith``   scalar text ends with the value, ignoring case
    ``lt`` ...     both sides are numeric and compare accordingly
    =============  ==========================================================

The engine is **pure**: entries are never mutated, input order is preserved
and descent uses an explicit stack, visiting each value once.

Public API
----------
FieldCriterion     – One per-field criterion
SearchSpec         – Free text plus per-field criteria
filter_entries()   – Apply a SearchSpec to a list or a keyed mapping
"""
from __future__ import annotations

import operator
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable

from .config_tree import ConfigEntry, ConfigValue

#: Query parameters that never become per-field criteria.
RESERVED_PARAMS = frozenset({"search", "format", "client-id", "client-token"})

LOOKUP_SEPARATOR = "__"
FIELD_SEPARATOR = "."

_NUMERIC_LOOKUPS: dict[str, Callable[[float, float], bool]] = {
    "lt": operator.lt,
    "lte": operator.le,
    "gt": operator.gt,
    "gte": operator.ge,
}
LOOKUPS = frozenset({"exact", "iexact", "contains", "startswith", "endswith", *_NUMERIC_LOOKUPS})

_MISSING = object()


# ---------------------------------------------------------------------------
# Specification
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FieldCriterion:
    """
    A single per-field criterion.

    Attributes:
        path: Field path segments, e.g. ``("advanced", "mtu")``.
        value: Raw value supplied by the client.
        lookup: One of :data:`LOOKUPS`.
    """

    path: tuple[str, ...]
    value: str
    lookup: str = "exact"

    @classmethod
    def parse(cls, key: str, value: str) -> FieldCriterion:
        """Build a criterion from a ``field[.sub][__lookup]`` query key."""
        field_name, sep, lookup = key.rpartition(LOOKUP_SEPARATOR)
        if not sep or lookup not in LOOKUPS or not field_name:
            field_name, lookup = key, "exact"
        return cls(tuple(field_name.split(FIELD_SEPARATOR)), value, lookup)


@dataclass(frozen=True)
class SearchSpec:
    """
    Criteria supplied by the client.  An empty spec matches everything.

    Attributes:
        text: Free-text term, or ``None``.
        criteria: Per-field criteria, all of which must match.
    """

    text: str | None = None
    criteria: tuple[FieldCriterion, ...] = ()

    def __bool__(self) -> bool:
        return bool(self.text) or bool(self.criteria)

    @classmethod
    def from_query_params(cls, params: Mapping[str, str] | None) -> SearchSpec:
        """
        Build a spec from request query parameters.

        ``search`` becomes the free-text term (blank means no term); every
        other non-reserved parameter becomes a :class:`FieldCriterion`.
        """
        if not params:
            return cls()
        text = params.get("search") or None
        criteria = tuple(
            FieldCriterion.parse(key, value)
            for key, value in params.items()
            if key not in RESERVED_PARAMS
        )
        return cls(text=text, criteria=criteria)


# ---------------------------------------------------------------------------
# Value helpers
# ---------------------------------------------------------------------------

def _scalar_text(value: ConfigValue) -> str | None:
    """Return the searchable text of a scalar, ``None`` for anything else."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    return None


def _iter_scalar_texts(value: ConfigValue) -> Iterator[str]:
    """Yield the text of every scalar reachable from *value*."""
    stack: list[ConfigValue] = [value]
    while stack:
        node = stack.pop()
        if isinstance(node, Mapping):
            stack.extend(node.values())
        elif isinstance(node, Sequence) and not isinstance(node, str):
            stack.extend(node)
        else:
            text = _scalar_text(node)
            if text is not None:
                yield text


def _contains_text(value: ConfigValue, needle: str) -> bool:
    needle = needle.casefold()
    return any(needle in text.casefold() for text in _iter_scalar_texts(value))


def _as_number(value: ConfigValue) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _resolve_path(entry: ConfigValue, path: tuple[str, ...]) -> Any:
    node: Any = entry
    for segment in path:
        if isinstance(node, Mapping):
            if segment not in node:
                return _MISSING
            node = node[segment]
        elif isinstance(node, Sequence) and not isinstance(node, str):
            if not segment.isdigit() or int(segment) >= len(node):
                return _MISSING
            node = node[int(segment)]
        else:
            return _MISSING
    return node


# ---------------------------------------------------------------------------
# Matching
# ---------------------------------------------------------------------------

def _criterion_matches(entry: ConfigValue, criterion: FieldCriterion) -> bool:
    value = _resolve_path(entry, criterion.path)
    if value is _MISSING:
        return False

    lookup = criterion.lookup
    if lookup == "contains":
        return _contains_text(value, criterion.value)

    if lookup in _NUMERIC_LOOKUPS:
        left, right = _as_number(value), _as_number(criterion.value)
        if left is None or right is None:
            return False
        return _NUMERIC_LOOKUPS[lookup](left, right)

    text = _scalar_text(value)
    if text is None:
        return False
    if lookup == "exact":
        return text == criterion.value
    if lookup == "iexact":
        return text.casefold() == criterion.value.casefold()
    if lookup == "startswith":
        return text.casefold().startswith(criterion.value.casefold())
    if lookup == "endswith":
        return text.casefold().endswith(criterion.value.casefold())
    return False


def entry_matches(entry: ConfigValue, spec: SearchSpec) -> bool:
    """Return ``True`` if *entry* satisfies every part of *spec*."""
    if spec.text and not _contains_text(entry, spec.text):
        return False
    return all(_criterion_matches(entry, criterion) for criterion in spec.criteria)


def filter_entries(
    entries: Sequence[ConfigEntry] | Mapping[str, ConfigEntry],
    spec: SearchSpec | None = None,
) -> Sequence[ConfigEntry] | Mapping[str, ConfigEntry]:
    """
    Select the entries matching *spec*, preserving input order.

    Args:
        entries: A sequence of entries, or a keyed mapping ``name -> entry``
            (the shape of e.g. the interfaces section).
        spec: Criteria to apply.  ``None`` or an empty spec returns
            *entries* unchanged.

    Returns:
        A new ``list`` (sequence input) or ``dict`` (mapping input) holding
        the matching entries themselves, not copies.
    """
    if not spec:
        return entries
    if isinstance(entries, Mapping):
        return {key: entry for key, entry in entries.items() if entry_matches(entry, spec)}
    return [entry for entry in entries if entry_matches(entry, spec)]

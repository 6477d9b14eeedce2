"""Search domain normalization.

Odoo search methods take a domain as a list of ``[field, operator, value]``
triples. Callers of this library may describe a domain in three shapes:

    {"name": "john", "active": True}          # equality map
    ["name", "=like", "john%"]                # single filter triple
    [["name", "=", "john"], ["id", ">", 5]]   # list of triples

All three are ANDed and normalized to the list-of-triples form. The explicit
constructors ``EqualityMap``, ``SingleFilter`` and ``FilterList`` skip shape
detection entirely.
"""
from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, List, Sequence, Tuple, Union

from .exceptions import DomainError


@dataclass(frozen=True)
class EqualityMap:
    """Field → value pairs, each becoming an ``=`` filter."""
    values: Mapping[str, Any]

    def to_triples(self) -> List[list]:
        return [[key, "=", value] for key, value in self.values.items()]


@dataclass(frozen=True)
class SingleFilter:
    """One ``(field, operator, value)`` filter."""
    field: str
    operator: str
    value: Any

    def to_triples(self) -> List[list]:
        return [[self.field, self.operator, self.value]]


@dataclass(frozen=True)
class FilterList:
    """Several filters, implicitly ANDed."""
    filters: Tuple[Sequence[Any], ...]

    def __init__(self, filters: Sequence[Sequence[Any]]):
        object.__setattr__(self, "filters", tuple(filters))

    def to_triples(self) -> List[list]:
        return [list(item) for item in self.filters]


DomainInput = Union[None, Mapping[str, Any], Sequence[Any], EqualityMap, SingleFilter, FilterList]


LOGICAL_OPERATORS = frozenset({"&", "|", "!"})


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_domain_term(value: Any) -> bool:
    return _is_sequence(value) or (isinstance(value, str) and value in LOGICAL_OPERATORS)


def normalize_domain(domain: DomainInput = None) -> List[list]:
    """Return the canonical list-of-triples form of ``domain``.

    Args:
        domain: Mapping, single triple, list of triples, one of the explicit
            constructors, or None

    Returns:
        List of filter triples; empty means "match all"

    Raises:
        DomainError: If the input matches none of the accepted shapes
    """
    if isinstance(domain, (EqualityMap, SingleFilter, FilterList)):
        return domain.to_triples()

    if domain is None:
        return []

    if isinstance(domain, Mapping):
        return EqualityMap(domain).to_triples()

    if _is_sequence(domain):
        if not domain:
            return []
        # Single filter triple: ["name", "=", "john"]
        if isinstance(domain[0], str) and domain[0] not in LOGICAL_OPERATORS:
            if len(domain) != 3:
                raise DomainError(f"Filter {list(domain)!r} must have exactly 3 elements (field, operator, value)")
            return [list(domain)]
        # Already a list of filters, possibly with prefix operators
        if all(_is_domain_term(item) for item in domain):
            return list(domain)
        raise DomainError(f"Cannot mix filters and scalars in domain {list(domain)!r}")

    raise DomainError(f"Unsupported domain type: {type(domain).__name__}")

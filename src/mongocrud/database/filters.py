"""
Filter and index key builders

A ``Selector`` is an ordered list of field equality predicates that are
AND-combined. An ``IndexSpec`` is an ordered list of (field, direction)
pairs; for compound indexes the order is the column order.

Plain mappings are accepted wherever a builder is, in their iteration order.
"""

from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from pymongo import ASCENDING, DESCENDING

_DIRECTIONS = (ASCENDING, DESCENDING)


class Selector:
    """Ordered AND-combined equality filter"""

    def __init__(self, predicates: Optional[List[Tuple[str, Any]]] = None):
        self._predicates: List[Tuple[str, Any]] = []
        for field_name, value in predicates or []:
            self.eq(field_name, value)

    @classmethod
    def of(cls, mapping: Mapping[str, Any]) -> "Selector":
        return cls(list(mapping.items()))

    def eq(self, field_name: str, value: Any) -> "Selector":
        """Add ``field_name == value``; a repeated field replaces the earlier value"""
        if not isinstance(field_name, str) or not field_name:
            raise ValueError(f"Invalid field name: {field_name!r}")
        self._predicates = [(f, v) for f, v in self._predicates if f != field_name]
        self._predicates.append((field_name, value))
        return self

    def to_filter(self) -> Dict[str, Any]:
        return dict(self._predicates)

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        return iter(self._predicates)

    def __len__(self) -> int:
        return len(self._predicates)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selector):
            return NotImplemented
        return self._predicates == other._predicates

    def __repr__(self) -> str:
        return f"Selector({self._predicates!r})"


class IndexSpec:
    """Ordered index key specification"""

    def __init__(self, keys: Optional[List[Tuple[str, int]]] = None):
        self._keys: List[Tuple[str, int]] = []
        for field_name, direction in keys or []:
            self.add(field_name, direction)

    @classmethod
    def of(cls, mapping: Mapping[str, int]) -> "IndexSpec":
        return cls(list(mapping.items()))

    def add(self, field_name: str, direction: int) -> "IndexSpec":
        if not isinstance(field_name, str) or not field_name:
            raise ValueError(f"Invalid field name: {field_name!r}")
        if direction not in _DIRECTIONS:
            raise ValueError(f"Invalid index direction for {field_name!r}: {direction!r} (expected 1 or -1)")
        if any(f == field_name for f, _ in self._keys):
            raise ValueError(f"Field {field_name!r} already in index specification")
        self._keys.append((field_name, direction))
        return self

    def ascending(self, field_name: str) -> "IndexSpec":
        return self.add(field_name, ASCENDING)

    def descending(self, field_name: str) -> "IndexSpec":
        return self.add(field_name, DESCENDING)

    def to_keys(self) -> List[Tuple[str, int]]:
        return list(self._keys)

    def __iter__(self) -> Iterator[Tuple[str, int]]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"IndexSpec({self._keys!r})"


SelectorLike = Union[Selector, Mapping[str, Any], None]
IndexSpecLike = Union[IndexSpec, Mapping[str, int]]


def build_filter(selector: SelectorLike) -> Dict[str, Any]:
    """Filter document for ``selector``; ``None`` or empty matches everything"""
    if selector is None:
        return {}
    if isinstance(selector, Selector):
        return selector.to_filter()
    return Selector.of(selector).to_filter()


def build_index_keys(spec: IndexSpecLike) -> List[Tuple[str, int]]:
    """Key list for ``Collection.create_index``"""
    if isinstance(spec, IndexSpec):
        return spec.to_keys()
    return IndexSpec.of(spec).to_keys()

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Mapping, Optional, Tuple, TypeVar

from .filters import IndexSpecLike, SelectorLike

T = TypeVar("T")


class CRUDRepository(ABC, Generic[T]):
    """Abstract base class for generic record access.

    Record identifiers are set by the caller before ``create``; the
    repository never generates them.
    """

    @abstractmethod
    def create(self, item: T, *, session=None) -> None:
        """Insert a new record"""
        pass

    @abstractmethod
    def get(self, item_id: Any, *, session=None) -> T:
        """Get the record with ``item_id``; raises NotFoundError if missing"""
        pass

    @abstractmethod
    def find(self, selector: SelectorLike, *, session=None) -> T:
        """Find exactly one record matching ``selector`` (logical AND)"""
        pass

    @abstractmethod
    def exists(self, selector: SelectorLike, *, session=None) -> Tuple[Optional[T], bool]:
        """Return ``(record, True)`` if a match exists, else ``(None, False)``"""
        pass

    @abstractmethod
    def update(self, item_id: Any, item: T, *, session=None) -> None:
        """Replace the fields of the record identified by ``item_id``"""
        pass

    @abstractmethod
    def update_attributes(self, selector: SelectorLike, attrs: Mapping[str, Any], *, session=None) -> None:
        """Set ``attrs`` on every record matching ``selector``"""
        pass

    @abstractmethod
    def delete(self, item_id: Any, *, session=None) -> None:
        """Delete the record identified by ``item_id``"""
        pass

    @abstractmethod
    def delete_range(self, selector: SelectorLike, *, session=None) -> None:
        """Delete every record matching ``selector``"""
        pass

    @abstractmethod
    def list_all(self, *, session=None) -> List[T]:
        """Get every record in the collection"""
        pass

    @abstractmethod
    def list(self, selector: SelectorLike, *, session=None) -> List[T]:
        """Get every record matching ``selector``"""
        pass

    @abstractmethod
    def create_index(self, keys: IndexSpecLike, unique: bool = False, *, session=None) -> str:
        """Create an index and return its name"""
        pass

"""Shared list-screen behaviour: session gate, load, substring filter, confirmed delete."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable, Generic, Iterable, TypeVar

from bluemoon.domain.exceptions import APIError, SessionRequiredError, error_message
from bluemoon.logging import logger

if TYPE_CHECKING:
    from bluemoon.ui.api_client import BlueMoonClient

T = TypeVar("T")

Confirm = Callable[[str], bool]


def require_token(client: "BlueMoonClient") -> None:
    if not client.token:
        raise SessionRequiredError("Not logged in")


def matches(needle: str, haystack: Iterable[str | None]) -> bool:
    """Case-insensitive substring match against any non-empty field."""
    needle = needle.lower()
    return any(value and needle in value.lower() for value in haystack)


class ListScreen(ABC, Generic[T]):
    """State behind one list page.

    Subclasses name the fetch and the searchable fields; everything else
    (loading flag, error string, filtering, delete-then-refresh) lives here.
    """

    load_error = "Không thể tải danh sách"
    delete_prompt = "Bạn có chắc chắn muốn xóa mục này không?"
    delete_error = "Không thể xóa"

    def __init__(self, client: "BlueMoonClient") -> None:
        self._client = client
        self.items: list[T] = []
        self.loading = False
        self.error = ""
        self.search_term = ""

    # -- hooks ---------------------------------------------------------

    @abstractmethod
    def _fetch(self) -> list[T]:
        ...

    @abstractmethod
    def _search_fields(self, item: T) -> Iterable[str | None]:
        ...

    # Optional: screens without a delete endpoint (payments) leave this alone.
    def _delete(self, item_id: str) -> None:
        raise NotImplementedError

    # -- behaviour -----------------------------------------------------

    def load(self) -> list[T]:
        require_token(self._client)
        self.loading = True
        self.error = ""
        try:
            self.items = self._fetch()
        except APIError as exc:
            logger.error("%s load failed: %s", type(self).__name__, exc)
            self.error = error_message(exc, self.load_error)
        finally:
            self.loading = False
        return self.items

    def filtered(self) -> list[T]:
        if not self.search_term:
            return list(self.items)
        return [item for item in self.items if self._include(item)]

    def _include(self, item: T) -> bool:
        return matches(self.search_term, self._search_fields(item))

    def delete(self, item_id: str, confirm: Confirm) -> bool:
        """Ask *confirm*; on yes send one DELETE and reload the list.

        Returns whether the item was deleted. Backend errors propagate as
        ``APIError`` for the page to toast.
        """
        if not confirm(self.delete_prompt):
            return False
        require_token(self._client)
        self.loading = True
        try:
            self._delete(item_id)
        except APIError:
            self.loading = False
            raise
        logger.info("%s deleted %s", type(self).__name__, item_id)
        self.load()
        return True

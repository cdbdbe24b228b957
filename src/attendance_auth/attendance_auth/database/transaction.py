from __future__ import annotations

from typing import Any, ContextManager, Protocol


class TransactionManager(Protocol):
    """Unit-of-work boundary shared by every repository of one backend.

    Repository calls made inside ``transaction()`` join it; the block commits
    on success and rolls back on any exception. Nested calls join the outer
    transaction.
    """

    def transaction(self) -> ContextManager[Any]:
        raise NotImplementedError

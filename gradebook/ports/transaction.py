"""
Transaction port

Services open a scope around every write. The scope commits when the block
exits normally and rolls back on any exception. Nested scopes join the
outermost one.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ContextManager


class ITransactionScope(ABC):
    @abstractmethod
    def scope(self) -> ContextManager[None]:
        pass

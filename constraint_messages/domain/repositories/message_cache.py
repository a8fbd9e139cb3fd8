"""Message cache interface - domain layer abstraction."""

from abc import ABC, abstractmethod
from typing import Callable, Hashable


class IMessageCache(ABC):
    """
    Memoizes resolved violation messages by structural key.

    Entries expire a fixed time after they were written; reads do not
    extend their lifetime. There is no invalidation API.
    """

    @abstractmethod
    def get_or_compute(self, key: Hashable, compute: Callable[[], str]) -> str:
        """
        Return the cached message for `key`, computing it on a miss.

        `compute` must be pure for a given key: concurrent misses on the
        same key may call it more than once, and the last write wins.

        Args:
            key: Structural cache key
            compute: Zero-argument function producing the message

        Returns:
            The resolved message
        """
        pass

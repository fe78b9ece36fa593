"""
Change notifications raised by the collection service.

Each stream is an ObserverList. Listeners receive a CollectionChanged event
carrying only the affected collection id and must re-fetch any state they
need. Delivery is synchronous, in registration order, on the caller's
execution context.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionChanged:
    """Fired after a collection was added, edited, deleted or activated."""
    collection_id: str


CollectionListener = Callable[[CollectionChanged], None]


class ObserverList:
    """
    Ordered list of listeners for one event stream.

    A listener that raises is logged and skipped; it never prevents delivery
    to the listeners registered after it.
    """

    def __init__(self, name: str):
        self.name = name
        self._listeners: List[CollectionListener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def register(self, listener: CollectionListener) -> None:
        """Add a listener. Registering the same listener twice delivers twice."""
        self._listeners.append(listener)
        logger.debug(f"Registered listener on {self.name}: {listener}")

    def unregister(self, listener: CollectionListener) -> bool:
        """
        Remove the first registration of a listener.

        Returns True if the listener was found and removed.
        """
        try:
            self._listeners.remove(listener)
        except ValueError:
            return False
        logger.debug(f"Unregistered listener from {self.name}: {listener}")
        return True

    def notify(self, collection_id: str) -> int:
        """
        Deliver a CollectionChanged event to every registered listener.

        Returns:
            Number of listeners that handled the event without raising
        """
        event = CollectionChanged(collection_id=collection_id)
        delivered = 0

        # Snapshot so listeners may unregister themselves during delivery
        for listener in list(self._listeners):
            try:
                listener(event)
                delivered += 1
            except Exception as e:
                logger.exception(f"Error in {self.name} listener {listener}: {e}")

        return delivered

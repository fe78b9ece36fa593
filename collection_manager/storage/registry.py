"""
Provider registry for selecting the collection provider.
"""

import logging
from typing import Iterable, Tuple

from .providers.base import CollectionProvider

logger = logging.getLogger(__name__)


class ProviderConfigurationError(Exception):
    """Exception raised when no usable collection provider is configured."""
    pass


class ProviderRegistry:
    """
    Holds the candidate providers available at startup and exposes one.

    Candidates are captured once, in order, when the registry is built; the
    first one is the selected provider. There is no disambiguation by name,
    version or priority.
    """

    def __init__(self, candidates: Iterable[CollectionProvider]):
        self._candidates: Tuple[CollectionProvider, ...] = tuple(candidates)
        logger.info(
            f"Provider registry initialized with {len(self._candidates)} candidate(s): "
            f"{[c.provider_name for c in self._candidates]}"
        )

    @property
    def candidates(self) -> Tuple[CollectionProvider, ...]:
        return self._candidates

    def selected(self) -> CollectionProvider:
        """
        Get the selected collection provider.

        Raises:
            ProviderConfigurationError: If no provider candidates are available
        """
        if not self._candidates:
            logger.error("No collection provider available")
            raise ProviderConfigurationError("No collection provider available")
        return self._candidates[0]

"""Read-through cache in front of a ThingService.

Found things are stored for the lifetime of the cache instance. Misses are
never stored: every get() for an id the service does not know asks the
service again.
"""

import logging
from typing import Dict, List, Optional

from mockdrills.domain.interfaces.thing_service import ThingService
from mockdrills.domain.models.common import ThingId
from mockdrills.domain.models.thing import Thing

logger = logging.getLogger(__name__)


class ThingCache:
    """Caches things looked up through a ThingService."""

    def __init__(self, thing_service: ThingService):
        """Initializes an empty cache.

        Args:
            thing_service: The backing service queried on cache misses.
        """
        self._things: Dict[ThingId, Thing] = {}
        self.thing_service = thing_service

    def get(self, thing_id: ThingId) -> Optional[Thing]:
        """Returns the thing for an id, asking the service only on a miss.

        Exceptions raised by the service propagate unchanged.

        Args:
            thing_id: The id to look up.

        Returns:
            The thing, or None if the service does not know the id.
        """
        if thing_id in self._things:
            logger.debug(f"Thing cache hit for id: {thing_id}")
            return self._things[thing_id]

        result = self.thing_service.try_read(thing_id)
        if result.found:
            self._things[thing_id] = result.value
            logger.debug(f"Stored thing in cache: id={thing_id}")
            return result.value

        logger.debug(f"Thing service has no entry for id: {thing_id}")
        return None

    def cached_ids(self) -> List[ThingId]:
        """Returns the cached ids in insertion order."""
        return list(self._things)

    def __contains__(self, thing_id: object) -> bool:
        return thing_id in self._things

    def __len__(self) -> int:
        return len(self._things)

"""Interface for the backing source of truth behind ThingCache.

Implementations may be slow or unreliable; the cache treats them as opaque.
"""

import abc

from mockdrills.domain.models.common import ThingId
from mockdrills.domain.models.thing import LookupResult


class ThingService(abc.ABC):
    """Abstract Base Class for thing lookups."""

    @abc.abstractmethod
    def try_read(self, thing_id: ThingId) -> LookupResult:
        """Looks up a thing by its id.

        Args:
            thing_id: The key to look up.

        Returns:
            LookupResult.hit(thing) if the thing exists, otherwise
            LookupResult.miss().
        """
        pass

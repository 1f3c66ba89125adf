"""Domain models for the thing lookup context.

Includes the `Thing` entity and the `LookupResult` value object returned by
a ThingService.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from mockdrills.domain.models.common import ThingId


@dataclass
class Thing:
    """Entity representing an opaque payload known to a ThingService."""
    thing_id: ThingId
    attributes: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a single ThingService lookup.

    `value` is only meaningful when `found` is True. Use `hit` and `miss`
    rather than building instances by hand.
    """
    found: bool
    value: Optional[Thing] = None

    @classmethod
    def hit(cls, value: Thing) -> "LookupResult":
        return cls(found=True, value=value)

    @classmethod
    def miss(cls) -> "LookupResult":
        return cls(found=False)

"""mockdrills: a read-through thing cache and a validating file sender.

Both components are built around injected collaborators so that production
adapters and test doubles are interchangeable.
"""

from mockdrills.core.services.thing_cache import ThingCache
from mockdrills.core.services.file_sender import FileSender

__all__ = ["ThingCache", "FileSender"]

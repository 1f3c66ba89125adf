"""ThingService backed by an in-memory catalog, optionally loaded from YAML.

Catalog file layout (attributes may be null)::

    TheDress:
      colour: blue
    CoolBoots: null
"""

import logging
from pathlib import Path
from typing import Dict, Mapping, Union

import yaml

from mockdrills.domain.exceptions import CatalogError
from mockdrills.domain.interfaces.thing_service import ThingService
from mockdrills.domain.models.common import ThingId
from mockdrills.domain.models.thing import LookupResult, Thing

logger = logging.getLogger(__name__)


class CatalogThingService(ThingService):
    """Serves lookups from a fixed mapping of ids to things."""

    def __init__(self, things: Mapping[str, Thing]):
        self._things: Dict[ThingId, Thing] = {ThingId(k): v for k, v in things.items()}
        logger.info(f"CatalogThingService initialized with {len(self._things)} thing(s).")

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "CatalogThingService":
        """Loads a catalog file.

        Args:
            path: YAML file mapping thing ids to attribute mappings (or null).

        Raises:
            CatalogError: If the file cannot be read or has the wrong shape.
        """
        catalog_path = Path(path)
        try:
            with open(catalog_path, 'r', encoding='utf-8') as f:
                raw = yaml.safe_load(f)
        except OSError as e:
            raise CatalogError(f"Cannot read catalog {catalog_path}: {e}") from e
        except yaml.YAMLError as e:
            raise CatalogError(f"Catalog {catalog_path} is not valid YAML: {e}") from e

        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise CatalogError(f"Catalog {catalog_path} must be a mapping of thing ids.")

        things: Dict[str, Thing] = {}
        for key, attributes in raw.items():
            if attributes is None:
                attributes = {}
            if not isinstance(attributes, dict):
                raise CatalogError(f"Attributes of '{key}' in {catalog_path} must be a mapping.")
            thing_id = ThingId(str(key))
            things[thing_id] = Thing(thing_id=thing_id, attributes=dict(attributes))
        logger.debug(f"Loaded {len(things)} thing(s) from {catalog_path}")
        return cls(things)

    def try_read(self, thing_id: ThingId) -> LookupResult:
        thing = self._things.get(thing_id)
        if thing is None:
            logger.debug(f"Catalog miss for id: {thing_id}")
            return LookupResult.miss()
        logger.debug(f"Catalog hit for id: {thing_id}")
        return LookupResult.hit(thing)

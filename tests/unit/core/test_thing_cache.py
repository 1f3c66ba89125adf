import pytest
from unittest.mock import MagicMock, call

from mockdrills.core.services.thing_cache import ThingCache
from mockdrills.domain.interfaces.thing_service import ThingService
from mockdrills.domain.models.common import ThingId
from mockdrills.domain.models.thing import LookupResult, Thing

THING_ID_1 = ThingId("TheDress")
THING_1 = Thing(thing_id=THING_ID_1)

THING_ID_2 = ThingId("CoolBoots")
THING_2 = Thing(thing_id=THING_ID_2)


@pytest.fixture
def thing_service():
    mock = MagicMock(spec=ThingService)
    # Unconfigured ids are unknown to the service
    mock.try_read.return_value = LookupResult.miss()
    return mock


@pytest.fixture
def thing_cache(thing_service):
    """Fixture to create ThingCache over a mocked service."""
    return ThingCache(thing_service)


def serve(thing_service: MagicMock, *things: Thing) -> None:
    """Makes the mocked service know exactly the given things."""
    known = {t.thing_id: t for t in things}
    thing_service.try_read.side_effect = lambda thing_id: (
        LookupResult.hit(known[thing_id]) if thing_id in known else LookupResult.miss()
    )


def test_calls_service_when_id_not_cached(thing_cache: ThingCache, thing_service: MagicMock):
    thing_cache.get(THING_ID_1)
    thing_service.try_read.assert_called_once_with(THING_ID_1)


def test_does_not_call_service_when_id_cached(thing_cache: ThingCache, thing_service: MagicMock):
    serve(thing_service, THING_1)

    first = thing_cache.get(THING_ID_1)
    second = thing_cache.get(THING_ID_1)

    assert first is THING_1
    assert second is THING_1
    thing_service.try_read.assert_called_once_with(THING_ID_1)


def test_many_gets_of_found_id_read_service_once(thing_cache: ThingCache, thing_service: MagicMock):
    serve(thing_service, THING_1)

    results = [thing_cache.get(THING_ID_1) for _ in range(10)]

    assert all(r is THING_1 for r in results)
    assert thing_service.try_read.call_count == 1


def test_does_not_read_other_ids(thing_cache: ThingCache, thing_service: MagicMock):
    serve(thing_service, THING_1, THING_2)

    thing_cache.get(THING_ID_1)
    thing_cache.get(THING_ID_1)

    assert call(THING_ID_2) not in thing_service.try_read.call_args_list


def test_returns_none_when_service_has_no_thing(thing_cache: ThingCache):
    assert thing_cache.get(THING_ID_2) is None


def test_does_not_cache_missing_things(thing_cache: ThingCache, thing_service: MagicMock):
    thing_cache.get(THING_ID_2)
    thing_cache.get(THING_ID_2)

    assert thing_service.try_read.call_args_list == [call(THING_ID_2), call(THING_ID_2)]
    assert THING_ID_2 not in thing_cache
    assert len(thing_cache) == 0


def test_returns_the_thing_from_service(thing_cache: ThingCache, thing_service: MagicMock):
    backpack = Thing(thing_id=ThingId("BackPack"), attributes={"colour": "green"})
    serve(thing_service, backpack)

    assert thing_cache.get(ThingId("BackPack")) == backpack


def test_missing_id_is_retried_until_service_finds_it(thing_cache: ThingCache, thing_service: MagicMock):
    thing_service.try_read.side_effect = [LookupResult.miss(), LookupResult.hit(THING_1)]

    assert thing_cache.get(THING_ID_1) is None
    assert thing_cache.get(THING_ID_1) is THING_1
    assert thing_cache.get(THING_ID_1) is THING_1
    assert thing_service.try_read.call_count == 2


def test_service_errors_propagate_and_nothing_is_stored(thing_cache: ThingCache, thing_service: MagicMock):
    thing_service.try_read.side_effect = TimeoutError("service unavailable")

    with pytest.raises(TimeoutError, match="service unavailable"):
        thing_cache.get(THING_ID_1)

    assert THING_ID_1 not in thing_cache


def test_cached_ids_keep_insertion_order(thing_cache: ThingCache, thing_service: MagicMock):
    serve(thing_service, THING_1, THING_2)

    thing_cache.get(THING_ID_2)
    thing_cache.get(ThingId("Unknown"))
    thing_cache.get(THING_ID_1)

    assert thing_cache.cached_ids() == [THING_ID_2, THING_ID_1]
    assert len(thing_cache) == 2
    assert THING_ID_1 in thing_cache

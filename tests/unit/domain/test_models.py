import pytest
from dataclasses import FrozenInstanceError

from mockdrills.domain.models.common import FileName, ThingId
from mockdrills.domain.models.delivery import File, SendResult, SigningCredential
from mockdrills.domain.models.thing import LookupResult, Thing


def test_lookup_result_hit_and_miss():
    thing = Thing(thing_id=ThingId("TheDress"))

    assert LookupResult.hit(thing) == LookupResult(found=True, value=thing)
    assert LookupResult.miss() == LookupResult(found=False, value=None)


def test_lookup_result_is_immutable():
    with pytest.raises(FrozenInstanceError):
        LookupResult.miss().found = True


def test_send_result_all_sent():
    file = File(name=FileName("a"), content=b"1")

    assert SendResult().all_sent
    assert SendResult(sent_files=[file]).all_sent
    assert not SendResult(skipped_files=[file]).all_sent


def test_signing_credential_hides_secret():
    credential = SigningCredential(key_id="key-1", secret=b"hunter2")

    assert "hunter2" not in repr(credential)
    assert "key-1" in repr(credential)

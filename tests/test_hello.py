import logging

import pytest

from palletkit.hello import HelloSubstrate
from palletkit.runtime import BadOrigin, System, root, signed


@pytest.fixture
def pallet():
    return HelloSubstrate(System(block_number=1))


def test_say_hello_works(pallet, caplog):
    with caplog.at_level(logging.INFO, logger="palletkit.hello"):
        assert pallet.say_hello(signed(1)) is None
    messages = [r.getMessage() for r in caplog.records]
    assert "Hello World" in messages
    assert "Request sent by: 1" in messages


def test_say_hello_no_root(pallet, caplog):
    with caplog.at_level(logging.INFO, logger="palletkit.hello"):
        with pytest.raises(BadOrigin):
            pallet.say_hello(root())
    assert caplog.records == []
    assert pallet.system.events() == []
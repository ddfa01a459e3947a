import pytest

from palletkit.runtime import BadOrigin, System, root, signed
from palletkit.simple_map import (
    EntryGot,
    EntryIncreased,
    EntrySet,
    EntryTaken,
    MaxValueReached,
    NoValueStored,
    SimpleMap,
)


@pytest.fixture
def pallet():
    return SimpleMap(System(block_number=1))


def test_set_works(pallet):
    pallet.set_single_entry(signed(1), 19)
    assert pallet.system.events()[0].event == EntrySet(1, 19)


@pytest.mark.parametrize(
    "call",
    [
        lambda p: p.get_single_entry(signed(2), 3),
        lambda p: p.take_single_entry(signed(2)),
        lambda p: p.increase_single_entry(signed(2), 2),
    ],
    ids=["get", "take", "increase"],
)
def test_missing_entry_throws(pallet, call):
    with pytest.raises(NoValueStored):
        call(pallet)
    assert pallet.system.events() == []


@pytest.mark.parametrize(
    "call, expected, stored",
    [
        (lambda p: p.get_single_entry(signed(1), 2), EntryGot(1, 19), 19),
        (lambda p: p.take_single_entry(signed(2)), EntryTaken(2, 19), 0),
        (lambda p: p.increase_single_entry(signed(2), 2), EntryIncreased(2, 19, 21), 21),
    ],
    ids=["get", "take", "increase"],
)
def test_operation_on_stored_entry(pallet, call, expected, stored):
    pallet.set_single_entry(signed(2), 19)
    call(pallet)
    assert pallet.system.events()[1].event == expected
    assert pallet.simple_map(2) == stored


def test_increase_overflow_leaves_storage(pallet):
    pallet.set_single_entry(signed(2), 2**32 - 1)
    with pytest.raises(MaxValueReached):
        pallet.increase_single_entry(signed(2), 1)
    assert pallet.simple_map(2) == 2**32 - 1
    assert len(pallet.system.events()) == 1


def test_root_cannot_set(pallet):
    with pytest.raises(BadOrigin):
        pallet.set_single_entry(root(), 5)
    assert pallet.simple_map(None) == 0
    assert pallet.system.events() == []
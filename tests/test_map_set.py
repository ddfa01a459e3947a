import pytest

from palletkit.map_set import (
    MAX_MEMBERS,
    AlreadyMember,
    MapSet,
    MemberAdded,
    MemberRemoved,
    MembershipLimitReached,
    NotMember,
)
from palletkit.runtime import BadOrigin, System, root, signed


@pytest.fixture
def pallet():
    return MapSet(System(block_number=1))


def _fill(pallet):
    for who in range(MAX_MEMBERS):
        pallet.add_member(signed(who))


def test_add_member_works(pallet):
    pallet.add_member(signed(1))
    assert pallet.system.events()[0].event == MemberAdded(1)
    assert pallet.is_member(1)


def test_cant_add_duplicate_members(pallet):
    pallet.add_member(signed(1))
    with pytest.raises(AlreadyMember):
        pallet.add_member(signed(1))
    assert pallet.member_count() == 1
    assert len(pallet.system.events()) == 1


@pytest.mark.parametrize("newcomer", [16, 0], ids=["new", "duplicate"])
def test_cant_exceed_max_members(pallet, newcomer):
    _fill(pallet)
    assert pallet.member_count() == 16
    with pytest.raises(MembershipLimitReached):
        pallet.add_member(signed(newcomer))
    assert not pallet.is_member(16)
    assert pallet.member_count() == 16


def test_remove_member_works(pallet):
    pallet.add_member(signed(1))
    pallet.remove_member(signed(1))
    assert pallet.system.events()[1].event == MemberRemoved(1)
    assert not pallet.is_member(1)
    assert pallet.member_count() == 0


def test_remove_member_handles_errors(pallet):
    with pytest.raises(NotMember):
        pallet.remove_member(signed(2))
    assert pallet.system.events() == []


def test_space_freed_after_removal(pallet):
    _fill(pallet)
    pallet.remove_member(signed(3))
    pallet.add_member(signed(99))
    assert pallet.is_member(99)
    assert pallet.member_count() == 16


def test_accounts_sorted(pallet):
    for who in (5, 2, 9):
        pallet.add_member(signed(who))
    assert pallet.accounts() == [2, 5, 9]


def test_root_cannot_join(pallet):
    with pytest.raises(BadOrigin):
        pallet.add_member(root())
    assert pallet.member_count() == 0
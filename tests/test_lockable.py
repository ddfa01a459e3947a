import pytest

from palletkit.currency import Balances, LiquidityRestrictions
from palletkit.lockable import (
    EXAMPLE_ID,
    ExtendedLock,
    LockableCurrency,
    Locked,
    Unlocked,
)
from palletkit.runtime import BadOrigin, System, root, signed


@pytest.fixture
def balances():
    return Balances(System(), [(1, 1000), (2, 2000)], existential_deposit=1)


@pytest.fixture
def pallet(balances):
    created = LockableCurrency(balances.system, balances)
    created.system.set_block_number(1)
    return created


def last_event(pallet):
    return pallet.system.events()[-1].event


def test_pallet_lock_uses_example_id(balances, pallet):
    pallet.lock_capital(signed(1), 600)
    balances.remove_lock(EXAMPLE_ID, 1)
    assert balances.locked_balance(1) == 0


def test_lock_capital(balances, pallet):
    pallet.lock_capital(signed(1), 600)
    assert balances.locked_balance(1) == 600
    assert last_event(pallet) == Locked(1, 600)
    with pytest.raises(LiquidityRestrictions):
        balances.transfer(1, 2, 401)
    assert balances.free_balance(1) == 1000


def test_lock_capital_replaces_lock(balances, pallet):
    for amount in (600, 200):
        pallet.lock_capital(signed(1), amount)
    assert balances.locked_balance(1) == 200


def test_extend_lock(balances, pallet):
    pallet.lock_capital(signed(1), 600)
    pallet.extend_lock(signed(1), 300)
    assert balances.locked_balance(1) == 600
    pallet.extend_lock(signed(1), 900)
    assert balances.locked_balance(1) == 900
    assert last_event(pallet) == ExtendedLock(1, 900)


def test_unlock_all(balances, pallet):
    pallet.lock_capital(signed(1), 1000)
    pallet.unlock_all(signed(1))
    assert balances.locked_balance(1) == 0
    assert last_event(pallet) == Unlocked(1)
    balances.transfer(1, 2, 1000)
    assert balances.free_balance(2) == 3000


def test_root_origin_rejected(balances, pallet):
    with pytest.raises(BadOrigin):
        pallet.lock_capital(root(), 10)
    assert balances.locked_balance(1) == 0
    assert pallet.system.events() == []
import pytest

from palletkit.fixed_point import (
    FixedPoint,
    FixedUpdated,
    ManualUpdated,
    Overflow,
    Permill,
    PermillUpdated,
    U16F16,
)
from palletkit.runtime import BadOrigin, System, root, signed


@pytest.fixture
def system():
    return System(block_number=1)


@pytest.fixture
def pallet(system):
    return FixedPoint(system)


def emitted(system):
    return [record.event for record in system.events()]


def test_all_accumulators_start_at_one(pallet):
    assert pallet.manual_value() == 1 << 16
    assert pallet.permill_value() == Permill.one()
    assert pallet.fixed_value() == 1


def test_manual_impl_works(system, pallet):
    one = 1 << 16
    half = one // 2
    quarter = half // 2

    pallet.update_manual(signed(1), half)
    assert pallet.manual_value() == half
    pallet.update_manual(signed(1), half)
    assert pallet.manual_value() == quarter

    assert emitted(system) == [
        ManualUpdated(half, half),
        ManualUpdated(half, quarter),
    ]


def test_manual_impl_overflows(system, pallet):
    one = 1 << 16
    pallet.update_manual(signed(1), one << 10)
    before = pallet.manual_value()
    events_before = emitted(system)

    with pytest.raises(Overflow):
        pallet.update_manual(signed(1), one << 7)

    assert pallet.manual_value() == before
    assert emitted(system) == events_before


def test_permill_impl_works(system, pallet):
    half = Permill.from_percent(50)
    quarter = Permill.from_percent(25)

    pallet.update_permill(signed(1), half)
    assert pallet.permill_value() == half
    pallet.update_permill(signed(1), half)
    assert pallet.permill_value() == quarter

    assert emitted(system) == [
        PermillUpdated(half, half),
        PermillUpdated(half, quarter),
    ]


def test_fixed_impl_works(system, pallet):
    one = U16F16.from_num(1)
    half = one / 2
    quarter = half / 2

    pallet.update_fixed(signed(1), half)
    assert pallet.fixed_value() == half
    pallet.update_fixed(signed(1), half)
    assert pallet.fixed_value() == quarter

    assert emitted(system) == [
        FixedUpdated(half, half),
        FixedUpdated(half, quarter),
    ]


def test_fixed_impl_overflows(system, pallet):
    pallet.update_fixed(signed(1), U16F16.from_num(1 << 10))
    before = pallet.fixed_value()

    with pytest.raises(Overflow):
        pallet.update_fixed(signed(1), U16F16.from_num(1 << 7))

    assert pallet.fixed_value() == before
    assert len(system.events()) == 1


@pytest.mark.parametrize("method, arg", [
    ("update_manual", 1 << 15),
    ("update_permill", Permill.from_percent(50)),
    ("update_fixed", U16F16.from_num(1)),
])
def test_root_origin_is_rejected(system, pallet, method, arg):
    with pytest.raises(BadOrigin):
        getattr(pallet, method)(root(), arg)
    assert system.events() == []


def test_permill_from_percent_caps_at_one():
    assert Permill.from_percent(150) == Permill.one()
    assert Permill.from_percent(25).parts == 250_000


def test_permill_rejects_out_of_range():
    with pytest.raises(ValueError):
        Permill(1_000_001)


def test_permill_saturating_mul_rounds_down():
    assert Permill(1).saturating_mul(Permill(1)) == Permill(0)
    assert Permill.one().saturating_mul(Permill(123)) == Permill(123)


def test_u16f16_from_num_and_raw_bits():
    assert U16F16.from_num(1).bits == 1 << 16
    assert U16F16.from_num(0.5).bits == 1 << 15
    assert float(U16F16.from_num(3)) == 3.0


def test_u16f16_from_num_overflow():
    with pytest.raises(OverflowError):
        U16F16.from_num(1 << 16)
    with pytest.raises(OverflowError):
        U16F16.from_num(-1)


def test_u16f16_checked_mul():
    assert U16F16.from_num(3).checked_mul(U16F16.from_num(4)) == 12
    assert U16F16.from_num(1 << 10).checked_mul(U16F16.from_num(1 << 7)) is None


def test_u16f16_division():
    assert U16F16.from_num(6) / U16F16.from_num(3) == 2
    assert U16F16.from_num(1) / 4 == U16F16.from_num(0.25)
    with pytest.raises(ZeroDivisionError):
        U16F16.from_num(1) / 0


def test_manual_rejects_out_of_range_factor(pallet):
    with pytest.raises(ValueError):
        pallet.update_manual(signed(1), 2**32)
    assert pallet.manual_value() == 1 << 16
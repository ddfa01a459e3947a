# palletkit

A small library of in-memory runtime modules ("pallets") that share one
`System`. The `System` holds the current block number and an event log. Each
pallet checks the caller's origin, updates its own in-memory storage and
deposits events into the log.

Events deposited while the block number is 0 are not recorded, so set the
block number to 1 or more when you want to inspect events.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

| Module | What it provides |
| --- | --- |
| `palletkit.runtime` | `System`, `Origin`, `OriginKind`, `signed`, `root`, `unsigned`, `ensure_signed`, `ensure_none`, `DispatchError`, `BadOrigin`, `EventRecord`, `Phase`, `Pallet` |
| `palletkit.hello` | `HelloSubstrate.say_hello`: logs a greeting; needs a signed origin |
| `palletkit.simple_event` | `SimpleEvent.do_something`: emits `EmitInput(value)` |
| `palletkit.generic_event` | `GenericEvent.do_something`: emits `EmitInput(who, value)` |
| `palletkit.last_caller` | `LastCaller`: `call` stores the caller and emits `Called`; `caller` returns it |
| `palletkit.simple_map` | `SimpleMap`: set, get, take and increase a per-account unsigned 32-bit entry |
| `palletkit.fixed_point` | `FixedPoint`: three multiplicative accumulators built on `Permill`, `U16F16` and a manual 16.16 integer |
| `palletkit.map_set` | `MapSet`: a membership set limited to 16 members |
| `palletkit.ringbuffer` | `RingBuffer` over a `RingBufferStorage`: a FIFO queue whose indices wrap, committing its bounds on `commit` or on leaving a `with` block |
| `palletkit.queue` | `RingBufferQueue`: a queue of `ValueStruct` items on an 8-bit `RingBuffer` |
| `palletkit.randomness` | `RandomnessPallet` with a pluggable `RandomnessSource`; `CollectiveFlip` mixes recent block hashes with BLAKE2b |
| `palletkit.currency` | `Balances`: free, reserved and locked balances with an existential deposit |
| `palletkit.reservable` | `ReservableCurrency`: reserve, unreserve and transfer funds |
| `palletkit.lockable` | `LockableCurrency`: lock, extend and remove a lock |
| `palletkit.crowdfund` | `Crowdfund`: create, contribute, withdraw, dissolve and dispense |

## Errors

Pallet-specific failures are subclasses of `palletkit.runtime.DispatchError`
(for example `NoValueStored`, `Overflow`, `AlreadyMember`,
`InsufficientBalance`, `InvalidIndex`). A call from the wrong kind of origin
raises `BadOrigin`. Arguments outside their range, such as a negative amount
or a value that does not fit in 32 bits, raise `ValueError`.

## Example

```python
from palletkit.runtime import System, signed
from palletkit.simple_map import SimpleMap, EntryIncreased, NoValueStored

system = System(block_number=1)
pallet = SimpleMap(system)

pallet.set_single_entry(signed(2), 19)
pallet.increase_single_entry(signed(2), 2)
assert pallet.simple_map(2) == 21
assert system.events()[-1].event == EntryIncreased(2, 19, 21)

try:
    pallet.take_single_entry(signed(3))
except NoValueStored:
    pass
```

A crowdfund works with a `Balances` currency:

```python
from palletkit.runtime import System, signed
from palletkit.currency import Balances
from palletkit.crowdfund import Crowdfund

system = System(block_number=0)
balances = Balances(system, [(1, 1000), (2, 2000)])
crowdfund = Crowdfund(system, balances, submission_deposit=1,
                      min_contribution=10, retirement_period=5)

crowdfund.create(signed(1), 2, 1000, 9)
crowdfund.contribute(signed(1), 0, 49)
assert crowdfund.contribution_get(0, 1) == 49
assert balances.free_balance(crowdfund.fund_account_id(0)) == 50

system.set_block_number(10)
crowdfund.withdraw(signed(1), 0)
assert balances.free_balance(1) == 999
```

## What it does not do

- All state lives in Python objects and is lost when the process exits;
  nothing is written to disk.
- There is no network, consensus, transaction pool, fee or weight accounting,
  and no command-line interface.
- There is no transactional rollback. Most calls check everything before they
  change state, but a call that fails part way, for example
  `unreserve_and_transfer` when the transfer is refused, keeps the effects of
  the steps that already ran.
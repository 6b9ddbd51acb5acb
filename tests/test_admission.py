import pytest

from supermarket_checkout.admission import admit, shortest_queue_index, validate_customer
from supermarket_checkout.errors import EmptyCart, InsufficientFunds, NoRegisters
from supermarket_checkout.models import Customer, Register, Wallet, cart


def _customer(notes=(), normal=(0,), perishable=()):
    return Customer(Wallet.of(*notes), cart(normal=normal, perishable=perishable))


def _register(rid, n=0):
    return Register(rid, tuple(_customer() for _ in range(n)))


def test_admit_rejects_empty_cart():
    with pytest.raises(EmptyCart):
        admit([_register("R1")], _customer(normal=()))


def test_empty_cart_rejected_regardless_of_registers():
    with pytest.raises(EmptyCart):
        admit([], _customer(normal=()))


def test_admit_rejects_insufficient_funds():
    with pytest.raises(InsufficientFunds) as exc:
        admit([_register("R1")], _customer(notes=(5, 2), normal=(10,)))
    assert exc.value.funds == 7
    assert exc.value.price == 10


def test_admit_accepts_exact_funds():
    registers = admit([_register("R1")], _customer(notes=(5, 2), normal=(7,)))
    assert len(registers[0]) == 1


def test_admit_rejects_no_registers():
    with pytest.raises(NoRegisters):
        admit([], _customer())


def test_admit_adds_customer_to_only_one_queue():
    original = [_register("R1"), _register("R2")]
    registers = admit(original, _customer())
    assert [len(r) for r in registers] == [1, 0]
    # Inputs are not modified.
    assert [len(r) for r in original] == [0, 0]


def test_admit_picks_shortest_queue():
    registers = admit([_register("R1", 2), _register("R2")], _customer())
    assert [len(r) for r in registers] == [2, 1]


def test_shortest_queue_ties_go_to_lowest_index():
    assert shortest_queue_index([_register("R1", 1), _register("R2"), _register("R3")]) == 1


def test_greedy_admission_keeps_queues_balanced():
    registers = [_register("R1"), _register("R2"), _register("R3")]
    for _ in range(10):
        registers = admit(registers, _customer())
        lengths = [len(r) for r in registers]
        assert max(lengths) - min(lengths) <= 1
    assert [len(r) for r in registers] == [4, 3, 3]


def test_validate_customer_accepts_valid_customer():
    validate_customer(_customer(notes=(10,), normal=(3, 4)))


def test_insufficient_funds_rejected_without_settling(monkeypatch):
    from supermarket_checkout import register_time, settlement
    from supermarket_checkout.checkout import Checkout

    def no_settle(*args, **kwargs):
        raise AssertionError("settle must not run during admission")

    monkeypatch.setattr(settlement, "settle", no_settle)
    monkeypatch.setattr(register_time, "settle", no_settle)

    store = Checkout.with_registers(2)
    with pytest.raises(InsufficientFunds):
        store.admit(_customer(notes=(5, 2), normal=(10,)))
    assert [len(r) for r in store.registers] == [0, 0]

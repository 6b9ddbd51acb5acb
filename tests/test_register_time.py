from supermarket_checkout.config import ChainReaction
from supermarket_checkout.models import Customer, Wallet, cart
from supermarket_checkout.register_time import payment_time, queue_times, scan_time


def test_scan_time_weights_item_kinds():
    c = Customer(Wallet(), cart(normal=[0, 0], perishable=[0]))
    assert scan_time([c], normal_seconds=2, perishable_seconds=3) == 4 + 3


def test_scan_time_spans_whole_queue():
    a = Customer(Wallet(), cart(normal=[1]))
    b = Customer(Wallet(), cart(perishable=[1, 1]))
    assert scan_time([a, b], normal_seconds=1, perishable_seconds=2) == 5


def test_payment_time_empty_cart_costs_nothing():
    c = Customer(Wallet(), cart())
    assert payment_time([c], seconds_per_note=1) == 0


def test_payment_time_one_second_per_note():
    c = Customer(Wallet.of(1, 5, 10, 2), cart(normal=[2, 4], perishable=[10]))
    assert payment_time([c], seconds_per_note=1) == 3


def test_payment_time_scales_with_seconds_per_note():
    c = Customer(Wallet.of(5, 2), cart(normal=[7]))
    assert payment_time([c], seconds_per_note=3) == 6


def _chain_queue():
    return [
        Customer(Wallet.of(5, 2), cart(perishable=[7])),  # exact, 2 notes
        Customer(Wallet.of(5, 10), cart(normal=[7])),  # 2 notes, change 8
        Customer(Wallet.of(2, 1), cart(normal=[2])),  # exact, 1 note
    ]


def test_chain_reaction_one_hop():
    # 2 + (free after exact) + 1
    assert payment_time(_chain_queue(), seconds_per_note=1) == 3


def test_chain_reaction_compound():
    assert payment_time(_chain_queue(), seconds_per_note=1, chain_reaction=ChainReaction.COMPOUND) == 2


def test_chain_reaction_does_not_reach_past_next_customer():
    queue = [
        Customer(Wallet.of(5), cart(normal=[5])),  # exact, 1 note
        Customer(Wallet.of(10), cart(normal=[3])),  # free, change 7
        Customer(Wallet.of(2, 2), cart(normal=[4])),  # 2 notes
    ]
    assert payment_time(queue, seconds_per_note=1) == 1 + 0 + 2


def test_chain_reaction_passes_on_when_free_customer_is_exact():
    queue = [
        Customer(Wallet.of(5), cart(normal=[5])),  # exact, 1 note
        Customer(Wallet.of(2, 2), cart(normal=[4])),  # free, exact
        Customer(Wallet.of(10), cart(normal=[10])),  # free again
    ]
    assert payment_time(queue, seconds_per_note=1) == 1


def test_payment_time_skips_customers_without_money():
    c = Customer(Wallet.of(5, 2), cart(perishable=[10]))
    assert payment_time([c], seconds_per_note=1) == 0


def test_broke_customer_breaks_the_chain():
    queue = [
        Customer(Wallet.of(5), cart(normal=[5])),  # exact, 1 note
        Customer(Wallet.of(2), cart(normal=[10])),  # skipped
        Customer(Wallet.of(10), cart(normal=[3])),  # counted
    ]
    assert payment_time(queue, seconds_per_note=1) == 2


def test_queue_times_combines_scan_and_payment():
    qt = queue_times(_chain_queue(), normal_seconds=1, perishable_seconds=2, seconds_per_note=1)
    assert qt.scan_time == 2 + 1 + 1
    assert qt.payment_time == 3
    assert qt.total == 7

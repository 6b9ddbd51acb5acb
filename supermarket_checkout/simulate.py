from __future__ import annotations

# Local simulation: no broker needed.
#
# Generates a seeded batch of customers, admits them one by one into a fresh
# store and reports per-register times plus the store flush time. Customers
# the store rejects (empty cart, not enough money) are counted and skipped.

import argparse
from dataclasses import dataclass, field

from .checkout import Checkout
from .config import TimingConfig, add_timing_args, timing_from_args
from .errors import CheckoutError
from .generator import generate_customers


@dataclass
class SimulationReport:
    admitted: int = 0
    rejected: dict[str, int] = field(default_factory=dict)
    flush_time: int = 0


def run_simulation(
    *,
    num_registers: int,
    num_customers: int,
    seed: int | None = None,
    mean_basket_size: float = 5.0,
    timing: TimingConfig | None = None,
    verbose: bool = True,
) -> SimulationReport:
    checkout = Checkout.with_registers(num_registers, timing=timing)
    report = SimulationReport()

    for customer in generate_customers(num_customers, seed=seed, mean_basket_size=mean_basket_size):
        try:
            register_id, position = checkout.admit(customer)
        except CheckoutError as e:
            report.rejected[e.code] = report.rejected.get(e.code, 0) + 1
            if verbose:
                print(f"[simulate] {customer.name} rejected: {e}")
            continue
        report.admitted += 1
        if verbose:
            print(
                f"[simulate] {customer.name} items={len(customer.cart)} price={customer.cart_price} "
                f"-> {register_id} (pos {position})"
            )

    report.flush_time = checkout.flush_time()

    if verbose:
        for rid, qt in checkout.register_times().items():
            print(f"[simulate] {rid}: scan={qt.scan_time}s pay={qt.payment_time}s total={qt.total}s")
        print(
            f"[simulate] admitted={report.admitted} rejected={sum(report.rejected.values())} "
            f"flush_time={report.flush_time}s (policy={checkout.timing.flush_policy.value})"
        )

    return report


def main() -> None:
    parser = argparse.ArgumentParser(description="Simulate a store locally and print its flush time")
    parser.add_argument("--num-registers", type=int, required=True)
    parser.add_argument("--num-customers", type=int, required=True)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--mean-basket-size", type=float, default=5.0)
    add_timing_args(parser)
    args = parser.parse_args()

    run_simulation(
        num_registers=args.num_registers,
        num_customers=args.num_customers,
        seed=args.seed,
        mean_basket_size=args.mean_basket_size,
        timing=timing_from_args(args),
    )


if __name__ == "__main__":
    main()

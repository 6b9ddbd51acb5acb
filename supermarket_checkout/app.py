from __future__ import annotations

# Single entrypoint:
#     python -m supermarket_checkout.app <command> ...
#
# - simulate   local store with generated customers, prints flush time
# - store      run the store service on an MQTT broker
# - customer   send one customer to a running store
# - flush      ask a running store for its flush time
# - generator  send N generated customers to a running store

import argparse
import sys

from .config import add_mqtt_args, add_timing_args, timing_from_args, timing_to_args


def main() -> None:
    parser = argparse.ArgumentParser(description="Supermarket checkout flush time - main entrypoint")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p_sim = sub.add_parser("simulate", help="Simulate a store locally (no broker needed)")
    p_sim.add_argument("--num-registers", type=int, required=True)
    p_sim.add_argument("--num-customers", type=int, required=True)
    p_sim.add_argument("--seed", type=int, default=None)
    p_sim.add_argument("--mean-basket-size", type=float, default=5.0)
    add_timing_args(p_sim)

    p_store = sub.add_parser("store", help="Run the store service (MQTT)")
    add_mqtt_args(p_store)
    p_store.add_argument("--num-registers", type=int, required=True)
    add_timing_args(p_store)

    p_cust = sub.add_parser("customer", help="Send one customer to the store")
    add_mqtt_args(p_cust)
    p_cust.add_argument("--name", required=True)
    p_cust.add_argument("--notes", default="", help="comma separated note values, e.g. 5,2")
    p_cust.add_argument("--normal", default="", help="comma separated prices of normal items")
    p_cust.add_argument("--perishable", default="", help="comma separated prices of perishable items")

    p_flush = sub.add_parser("flush", help="Ask the store for its flush time")
    add_mqtt_args(p_flush)

    p_gen = sub.add_parser("generator", help="Send generated customers to the store")
    add_mqtt_args(p_gen)
    p_gen.add_argument("--count", type=int, required=True)
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--mean-basket-size", type=float, default=5.0)

    args = parser.parse_args()

    if args.cmd == "simulate":
        from .simulate import main as run

        run_args = [
            "--num-registers",
            str(args.num_registers),
            "--num-customers",
            str(args.num_customers),
            "--mean-basket-size",
            str(args.mean_basket_size),
            *timing_to_args(timing_from_args(args)),
        ]
        if args.seed is not None:
            run_args += ["--seed", str(args.seed)]
        _dispatch_to_module_main(run, run_args)
        return

    if args.cmd == "store":
        from .service import main as run

        run_args = [
            *_mqtt_args(args),
            "--num-registers",
            str(args.num_registers),
            *timing_to_args(timing_from_args(args)),
        ]
        _dispatch_to_module_main(run, run_args)
        return

    if args.cmd == "generator":
        from .generator import main as run

        run_args = [*_mqtt_args(args), "--count", str(args.count), "--mean-basket-size", str(args.mean_basket_size)]
        if args.seed is not None:
            run_args += ["--seed", str(args.seed)]
        _dispatch_to_module_main(run, run_args)
        return

    if args.cmd == "customer":
        _run_customer(args)
        return

    if args.cmd == "flush":
        from .client import query_flush_time

        resp = query_flush_time(mqtt_host=args.mqtt_host, mqtt_port=args.mqtt_port, namespace=args.namespace)
        if resp.get("type") != "flush_time":
            print(f"[flush] error: {resp}")
            sys.exit(1)
        for rid, info in sorted(resp["registers"].items()):
            print(
                f"[flush] {rid}: queue={info['queue_len']} scan={info['scan_time']}s pay={info['payment_time']}s"
            )
        print(f"[flush] store flush time {resp['seconds']}s (policy={resp['policy']})")


def _run_customer(args: argparse.Namespace) -> None:
    from .client import join_queue, parse_ints
    from .errors import CheckoutError
    from .models import Customer, Wallet, cart

    try:
        customer = Customer(
            wallet=Wallet.of(*parse_ints(args.notes)),
            cart=cart(normal=parse_ints(args.normal), perishable=parse_ints(args.perishable)),
            name=args.name,
        )
    except (CheckoutError, ValueError) as e:
        print(f"[customer {args.name}] invalid input: {e}")
        sys.exit(2)

    resp = join_queue(mqtt_host=args.mqtt_host, mqtt_port=args.mqtt_port, namespace=args.namespace, customer=customer)
    if resp.get("type") == "assigned":
        print(f"[customer {args.name}] assigned to {resp['register_id']} (position {resp['position']})")
    else:
        print(f"[customer {args.name}] error {resp.get('code')}: {resp.get('message')}")
        sys.exit(1)


def _mqtt_args(args: argparse.Namespace) -> list[str]:
    return ["--mqtt-host", args.mqtt_host, "--mqtt-port", str(args.mqtt_port), "--namespace", args.namespace]


def _dispatch_to_module_main(module_main, argv: list[str]) -> None:
    old_argv = sys.argv[:]
    try:
        sys.argv = [old_argv[0], *argv]
        module_main()
    finally:
        sys.argv = old_argv


if __name__ == "__main__":
    main()

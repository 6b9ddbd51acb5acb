"""Supermarket checkout flush time.

Customers with a cart and a wallet of notes are admitted to the shortest of
several cash registers. Each register needs time to scan items and to take
payment (one unit per note handed over, skipped right after an exact payment);
the store's flush time is the slowest register's total by default.

- `checkout.Checkout`   the store: admission + flush time
- `settlement.settle`   which notes pay a price, and the change
- `service`             the store behind MQTT (paho-mqtt)
- `app`                 command line entrypoint

See README for how to run.
"""

from __future__ import annotations

# The store: a fixed set of registers plus the flush-time calculation.
#
# `Checkout` is plain synchronous logic and easy to unit test. The MQTT layer
# (`service.py`) wraps it and takes care of locking.

from typing import Any, Sequence

from .admission import admit, shortest_queue_index
from .config import TimingConfig
from .errors import NoRegisters
from .models import Customer, Register
from .register_time import QueueTimes, queue_times


class Checkout:
    """All registers of one store."""

    def __init__(self, registers: Sequence[Register], *, timing: TimingConfig | None = None) -> None:
        if not registers:
            raise NoRegisters()
        ids = [r.register_id for r in registers]
        if len(set(ids)) != len(ids):
            raise ValueError("register ids must be unique")

        self.timing = timing or TimingConfig()
        self._registers: list[Register] = list(registers)

    @classmethod
    def with_registers(cls, count: int, *, timing: TimingConfig | None = None) -> Checkout:
        """Create a store with `count` empty registers named R1..Rn."""
        if count <= 0:
            raise NoRegisters()
        return cls([Register(f"R{i}") for i in range(1, count + 1)], timing=timing)

    @property
    def registers(self) -> tuple[Register, ...]:
        return tuple(self._registers)

    # -------------------- admission --------------------

    def admit(self, customer: Customer) -> tuple[str, int]:
        """Queue a customer; returns (register_id, position in that queue)."""
        updated = admit(self._registers, customer)
        # Same choice `admit` just made; the old list is still unchanged.
        chosen = updated[shortest_queue_index(self._registers)]
        self._registers = updated
        return chosen.register_id, len(chosen)

    # -------------------- timing --------------------

    def register_times(self) -> dict[str, QueueTimes]:
        t = self.timing
        return {
            r.register_id: queue_times(
                r.customers,
                normal_seconds=t.normal_seconds,
                perishable_seconds=t.perishable_seconds,
                seconds_per_note=t.seconds_per_note,
                chain_reaction=t.chain_reaction,
            )
            for r in self._registers
        }

    def flush_time(self) -> int:
        """Time until the store has processed every queued customer."""
        return self.timing.flush_policy.combine(qt.total for qt in self.register_times().values())

    def status(self) -> dict[str, Any]:
        """JSON-ready snapshot of every register."""
        times = self.register_times()
        return {
            "type": "status_response",
            "flush_time": self.timing.flush_policy.combine(qt.total for qt in times.values()),
            "policy": self.timing.flush_policy.value,
            "registers": {
                r.register_id: {
                    "queue_len": len(r),
                    "scan_time": times[r.register_id].scan_time,
                    "payment_time": times[r.register_id].payment_time,
                }
                for r in self._registers
            },
        }

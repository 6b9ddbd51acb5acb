"""Runtime configuration shared by the CLI entrypoints.

Timing constants are in whole seconds. Scan times default to the item kinds'
scan weights (normal 1s, perishable 2s) and each note handed over costs 1s.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .models import ItemKind

DEFAULT_MQTT_HOST = "127.0.0.1"
DEFAULT_MQTT_PORT = 1883
DEFAULT_NAMESPACE = "supermarket/checkout"


class ChainReaction(Enum):
    """How an exact payment affects the customers behind it."""

    # Only the next customer pays for free.
    ONE_HOP = "one-hop"
    # Everyone after an exact payment pays for free.
    COMPOUND = "compound"


class FlushPolicy(Enum):
    """How per-register times combine into one store time."""

    MAX = "max"
    MIN = "min"

    def combine(self, times: Iterable[int]) -> int:
        return max(times) if self is FlushPolicy.MAX else min(times)


@dataclass(frozen=True)
class TimingConfig:
    normal_seconds: int = ItemKind.NORMAL.scan_weight
    perishable_seconds: int = ItemKind.PERISHABLE.scan_weight
    seconds_per_note: int = 1
    chain_reaction: ChainReaction = ChainReaction.ONE_HOP
    flush_policy: FlushPolicy = FlushPolicy.MAX

    def __post_init__(self) -> None:
        if self.normal_seconds < 0:
            raise ValueError("normal_seconds must be >= 0")
        if self.perishable_seconds < 0:
            raise ValueError("perishable_seconds must be >= 0")
        if self.seconds_per_note < 0:
            raise ValueError("seconds_per_note must be >= 0")


def add_mqtt_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--mqtt-host", default=DEFAULT_MQTT_HOST)
    p.add_argument("--mqtt-port", type=int, default=DEFAULT_MQTT_PORT)
    p.add_argument("--namespace", default=DEFAULT_NAMESPACE)


def add_timing_args(p: argparse.ArgumentParser) -> None:
    defaults = TimingConfig()
    p.add_argument("--normal-seconds", type=int, default=defaults.normal_seconds, help="scan seconds per normal item")
    p.add_argument(
        "--perishable-seconds",
        type=int,
        default=defaults.perishable_seconds,
        help="scan seconds per perishable item",
    )
    p.add_argument("--seconds-per-note", type=int, default=defaults.seconds_per_note, help="seconds per note handed over")
    p.add_argument(
        "--chain-reaction",
        choices=[c.value for c in ChainReaction],
        default=defaults.chain_reaction.value,
        help="who pays for free after an exact payment",
    )
    p.add_argument(
        "--flush-policy",
        choices=[f.value for f in FlushPolicy],
        default=defaults.flush_policy.value,
        help="combine register times with max (bottleneck) or min",
    )


def timing_from_args(args: argparse.Namespace) -> TimingConfig:
    return TimingConfig(
        normal_seconds=args.normal_seconds,
        perishable_seconds=args.perishable_seconds,
        seconds_per_note=args.seconds_per_note,
        chain_reaction=ChainReaction(args.chain_reaction),
        flush_policy=FlushPolicy(args.flush_policy),
    )


def timing_to_args(timing: TimingConfig) -> list[str]:
    """Inverse of `timing_from_args`, for forwarding flags to a sub-command."""
    return [
        "--normal-seconds",
        str(timing.normal_seconds),
        "--perishable-seconds",
        str(timing.perishable_seconds),
        "--seconds-per-note",
        str(timing.seconds_per_note),
        "--chain-reaction",
        timing.chain_reaction.value,
        "--flush-policy",
        timing.flush_policy.value,
    ]

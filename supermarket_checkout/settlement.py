from __future__ import annotations

# Settlement: which notes does a customer hand over, and how much change comes back?
#
# Payment model:
# - If nothing is due, nothing is handed over.
# - If every note is bigger than the amount due, the smallest note is handed over
#   and the difference comes back as change.
# - Otherwise the customer keeps handing over notes that fit into what is still
#   due, in any order, until the amount is paid exactly or every note left is
#   bigger than the rest; then the smallest note left goes on top.
#
# Since the order of notes does not matter, every possible payment is one of:
# - a set of notes adding up to the amount exactly, or
# - all notes below some value m, plus some notes of value >= m leaving a rest
#   r with 0 < r < m, plus one more note m (change m - r).
# Both are found with a min-count subset-sum table over amounts, so the cost
# grows with the amount and the number of distinct values, not with how many
# notes a wallet holds.
#
# Payments are ranked by (change, number of notes): the customer overpays as
# little as possible, and among equally good payments uses the fewest notes.
# Remaining ties go to the smaller top note m.
#
# Notes are tracked by position, so two notes with the same value are never
# mixed up.

from collections import Counter
from dataclasses import dataclass
from typing import Any, Sequence, Union

from .errors import InsufficientFunds, SettlementUnreachable
from .models import Note

NoteLike = Union[Note, int]

_UNREACHED = float("inf")


@dataclass(frozen=True)
class Settlement:
    """Outcome of one payment.

    `used` holds the caller's own note objects, in wallet order.
    """

    used: tuple[Any, ...]
    change: int

    @property
    def note_count(self) -> int:
        return len(self.used)

    @property
    def exact(self) -> bool:
        return self.change == 0

    @property
    def paid(self) -> int:
        return sum(_value_of(n) for n in self.used)


def settle(notes: Sequence[NoteLike], amount_due: int) -> Settlement:
    """Pick the notes that pay `amount_due` and compute the change.

    Args:
        notes: the customer's notes (`Note` objects or plain ints).
        amount_due: non-negative amount to pay.

    Raises:
        ValueError: negative amount or note value.
        InsufficientFunds: the notes do not cover `amount_due`.
    """
    if amount_due < 0:
        raise ValueError("amount_due must be >= 0")

    values = [_value_of(n) for n in notes]
    funds = sum(values)
    if funds < amount_due:
        raise InsufficientFunds(funds=funds, price=amount_due)

    usage, change = _plan(sorted(Counter(values).items()), amount_due)
    return Settlement(used=_pick(notes, values, usage), change=change)


def _value_of(note: NoteLike) -> int:
    value = note.value if isinstance(note, Note) else int(note)
    if value < 0:
        raise ValueError("note value must be >= 0")
    return value


def _plan(counts: list[tuple[int, int]], amount: int) -> tuple[dict[int, int], int]:
    """Best payment as ({value: notes used}, change).

    `counts` is [(value, how many)] sorted by value.
    """
    if amount == 0:
        return {}, 0

    exact = _fewest_notes(counts, amount, amount)
    if exact is not None:
        return exact[1], 0

    best: tuple[int, int, dict[int, int]] | None = None
    below_sum = 0
    below_count = 0
    for i, (top, count) in enumerate(counts):
        if below_sum >= amount:
            break
        # Everything below `top` is handed over; what is left must be paid from
        # the remaining notes so that less than `top` is still due.
        due = amount - below_sum
        found = _fewest_notes([(top, count - 1), *counts[i + 1 :]], due - top + 1, due - 1)
        if found is not None:
            total, extra = found
            change = top - (due - total)
            n_notes = below_count + sum(extra.values()) + 1
            if best is None or (change, n_notes) < best[:2]:
                usage = dict(counts[:i])
                for value, n in extra.items():
                    usage[value] = usage.get(value, 0) + n
                usage[top] = usage.get(top, 0) + 1
                best = (change, n_notes, usage)
        below_sum += top * count
        below_count += count

    if best is None:
        raise SettlementUnreachable(f"no combination of notes pays {amount}")
    return best[2], best[0]


def _fewest_notes(counts: list[tuple[int, int]], lo: int, hi: int) -> tuple[int, dict[int, int]] | None:
    """Smallest reachable sum in [lo, hi], using as few notes as possible.

    Returns (sum, {value: notes used}) or None. Counts are split into
    power-of-two bundles so each bundle is a 0/1 choice.
    """
    lo = max(lo, 0)
    if hi < lo:
        return None

    bundles: list[tuple[int, int]] = []
    for value, count in counts:
        if value == 0 or value > hi:
            continue
        size = 1
        while count > 0:
            take = min(size, count)
            bundles.append((value, take))
            count -= take
            size *= 2

    fewest = [_UNREACHED] * (hi + 1)
    fewest[0] = 0
    chosen: list[bytearray] = []
    for value, n in bundles:
        weight = value * n
        row = bytearray(hi + 1)
        for t in range(hi, weight - 1, -1):
            candidate = fewest[t - weight] + n
            if candidate < fewest[t]:
                fewest[t] = candidate
                row[t] = 1
        chosen.append(row)

    total = next((t for t in range(lo, hi + 1) if fewest[t] != _UNREACHED), None)
    if total is None:
        return None

    usage: dict[int, int] = {}
    t = total
    for (value, n), row in zip(reversed(bundles), reversed(chosen)):
        if row[t]:
            usage[value] = usage.get(value, 0) + n
            t -= value * n
    return total, usage


def _pick(notes: Sequence[NoteLike], values: list[int], usage: dict[int, int]) -> tuple[Any, ...]:
    """Map per-value note counts back onto distinct positions in `notes`."""
    wanted = dict(usage)
    picked = []
    for note, value in zip(notes, values):
        if wanted.get(value, 0) > 0:
            wanted[value] -= 1
            picked.append(note)
    return tuple(picked)

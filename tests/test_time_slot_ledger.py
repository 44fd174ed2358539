"""End-to-end: fuel deltas from a flight log aggregated per time slot."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from fenwick_bit_tree.trees import GrowingTree

SLOT_SECONDS = 600


@dataclass
class LogRecord:
    timestamp: int
    flight: str
    fuel_delta: int
    status: str


def generate_flights(
    start: int, flight: str, segment_count: int, rng: np.random.Generator
) -> list[LogRecord]:
    """Alternate landings (fuel burnt) with refuels whenever the tank runs short."""
    records = []
    fuel = 0
    timestamp = start
    for _ in range(segment_count):
        next_leg = int(rng.integers(0, 10)) * 100
        extra = int(rng.integers(0, 10)) * 100
        if next_leg > fuel:
            delta = next_leg + extra
            records.append(LogRecord(timestamp, flight, delta, "fuelup"))
            fuel += delta
        timestamp += next_leg * 72
        records.append(LogRecord(timestamp, flight, -next_leg, "landed"))
        fuel -= next_leg
    return records


def generate_flight_log(
    flight_count: int, segment_count: int, rng: np.random.Generator
) -> list[LogRecord]:
    start = 1_700_000_000
    records = []
    for i in range(flight_count):
        name = f"{chr(ord('A') + i % 26)}{int(rng.integers(0, 100))}"
        records.extend(generate_flights(start, name, segment_count, rng))
    return records


def _slot(record: LogRecord, start: int) -> int:
    return (record.timestamp - start) // SLOT_SECONDS


def test_fleet_fuel_balance_per_slot(rng: np.random.Generator) -> None:
    records = generate_flight_log(flight_count=12, segment_count=30, rng=rng)
    start = min(r.timestamp for r in records)

    # records arrive out of order, the tree grows as later slots show up
    tree = GrowingTree()
    for i in rng.permutation(len(records)).tolist():
        tree.update(_slot(records[i], start), records[i].fuel_delta)

    last_slot = max(_slot(r, start) for r in records)
    per_slot = np.zeros(last_slot + 1, dtype=np.int64)
    for r in records:
        per_slot[_slot(r, start)] += r.fuel_delta
    expected = np.cumsum(per_slot)

    assert [tree.query(s) for s in range(last_slot + 1)] == expected.tolist()
    # fuel never goes negative for the fleet as a whole
    assert tree.query(last_slot) >= 0
    # past the last recorded slot the balance holds
    assert tree.query(last_slot + 1000) == expected[-1]


def test_fuel_burnt_between_slots(rng: np.random.Generator) -> None:
    records = [r for r in generate_flight_log(4, 20, rng) if r.status == "landed"]
    start = min(r.timestamp for r in records)

    tree = GrowingTree(growth="power_of_two")
    for r in records:
        tree.update(_slot(r, start), -r.fuel_delta)

    last_slot = max(_slot(r, start) for r in records)
    lo, hi = last_slot // 4, last_slot // 2
    burnt = sum(-r.fuel_delta for r in records if lo < _slot(r, start) <= hi)
    assert tree.range_query(lo, hi) == burnt

"""Animation timing allocator.

Each character that emitted paths owns a fixed slot of 1/speed seconds; slots
are laid out back-to-back in character order. Inside a slot, every path gets a
share proportional to its length (equal split when all lengths are zero).

The same module evaluates the animation at an arbitrary timestamp so raster
frames can be synthesized without CSS keyframes.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from sigforge.models.paths import PathRecord, TimingEntry
from sigforge.utils.math_helpers import clamp, ease_out, finite_or

DEFAULT_SPEED = 0.4
MIN_SPEED = 0.01

# Fill fades in once the outline is 60% drawn, over a fixed 0.8s
FILL_DELAY_RATIO = 0.6
FILL_FADE_S = 0.8


@dataclass(frozen=True)
class PathState:
    """Resolved paint state of one path at one instant."""

    dash_offset: float
    fill_opacity: float


def slot_seconds(speed: float) -> float:
    """Seconds allotted to one character."""
    s = finite_or(speed, DEFAULT_SPEED)
    return 1.0 / max(s, MIN_SPEED)


def _groups(records: Sequence[PathRecord]) -> dict[int, list[int]]:
    """Character index → positions in `records`, in stroke order."""
    groups: dict[int, list[int]] = {}
    for pos, rec in enumerate(records):
        groups.setdefault(rec.index, []).append(pos)
    return groups


def allocate_timing(records: Sequence[PathRecord], speed: float) -> list[TimingEntry]:
    """One TimingEntry per record, aligned with `records`."""
    slot = slot_seconds(speed)
    entries: list[TimingEntry | None] = [None] * len(records)

    for slot_no, (_, members) in enumerate(sorted(_groups(records).items())):
        lengths = np.array([max(records[p].length, 0.0) for p in members], dtype=np.float64)
        total = float(lengths.sum())
        if total > 0:
            shares = lengths / total
        else:
            shares = np.full(len(members), 1.0 / len(members))
        starts = np.concatenate([[0.0], np.cumsum(shares)[:-1]])

        base = slot_no * slot
        for pos, start, share in zip(members, starts, shares):
            entries[pos] = TimingEntry(
                delay=base + float(start) * slot,
                duration=float(share) * slot,
            )

    return [e for e in entries if e is not None]


def total_duration(records: Sequence[PathRecord], speed: float) -> float:
    """characterCount × slot; zero when nothing was emitted."""
    return len(_groups(records)) * slot_seconds(speed)


def fill_start(entry: TimingEntry) -> float:
    return entry.delay + entry.duration * FILL_DELAY_RATIO


def path_state_at(record: PathRecord, entry: TimingEntry, t: float) -> PathState:
    """Interpolated dash offset and fill opacity at time t (ease-out curves)."""
    if entry.duration > 0:
        progress = (t - entry.delay) / entry.duration
    else:
        progress = 1.0 if t >= entry.delay else 0.0
    drawn = ease_out(clamp(progress, 0.0, 1.0))

    offset = record.dash_length * (1.0 - drawn)
    if record.is_stroke:
        offset = -offset

    fade = ease_out(clamp((t - fill_start(entry)) / FILL_FADE_S, 0.0, 1.0))
    return PathState(dash_offset=offset, fill_opacity=fade)


FINAL_STATE = PathState(dash_offset=0.0, fill_opacity=1.0)

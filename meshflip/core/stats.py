"""Operation statistics kept by ``TriMesh`` and their text rendering.

One ``OpStats`` record exists per operation name (currently ``'rotate'``).
Refused rotations are broken down by reason so a beautify run can tell
boundary candidates, coincident apexes and already-present diagonals apart.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Any

# (stats key, table label) of every refusal reason tracked on OpStats
REJECT_REASONS = (
    ('non_manifold_rejects', 'nonManifold'),
    ('degenerate_rejects', 'sameApex'),
    ('exists_rejects', 'exists'),
)


@dataclass
class OpStats:
    attempts: int = 0
    success: int = 0
    fail: int = 0
    non_manifold_rejects: int = 0
    degenerate_rejects: int = 0
    exists_rejects: int = 0
    # Timing (seconds)
    time_total: float = 0.0
    time_max: float = 0.0
    time_min: float = 0.0  # 0 means no call timed yet

    def record_time(self, duration: float) -> None:
        self.time_total += duration
        self.time_max = max(self.time_max, duration)
        self.time_min = duration if self.time_min == 0.0 else min(self.time_min, duration)

    def to_dict(self) -> Dict[str, Any]:
        d = {
            'attempts': self.attempts,
            'success': self.success,
            'fail': self.fail,
            'success_rate': (self.success / self.attempts) if self.attempts else 0.0,
            'time_total': self.time_total,
            'time_max': self.time_max,
            'time_min': self.time_min,
            'time_avg': (self.time_total / self.attempts) if self.attempts else 0.0,
        }
        for key, _ in REJECT_REASONS:
            d[key] = getattr(self, key)
        return d


def _render(header, rows) -> str:
    widths = [max(len(str(c)) for c in col) for col in zip(header, *rows)]
    def line(r):
        return " ".join(str(c).rjust(w) for c, w in zip(r, widths))
    return "\n".join([line(header), "-" * (sum(widths) + len(widths) - 1)] + [line(r) for r in rows])


def format_stats_table(stats_dict) -> str:
    """Human readable table: one row per op, then the refusal breakdown."""
    if not stats_dict:
        return "<no stats>"
    header = ["op", "attempts", "succ", "fail", "succ%", "avg_ms", "max_ms"]
    rows = []
    for op in sorted(stats_dict):
        s = stats_dict[op]
        rows.append([op, s['attempts'], s['success'], s['fail'],
                     f"{s['success_rate'] * 100.0:6.2f}",
                     f"{s['time_avg'] * 1000.0:8.3f}", f"{s['time_max'] * 1000.0:8.3f}"])
    text = _render(header, rows)

    reason_rows = [[op] + [stats_dict[op].get(key, 0) for key, _ in REJECT_REASONS]
                   for op in sorted(stats_dict) if stats_dict[op].get('fail')]
    if reason_rows:
        text += "\n\nRefusals:\n" + _render(["op"] + [label for _, label in REJECT_REASONS], reason_rows)
    return text


def print_stats(stats_dict, file=None, pretty=True):  # pragma: no cover - formatting wrapper
    import sys
    out = file or sys.stdout
    print(format_stats_table(stats_dict) if pretty else stats_dict, file=out)


__all__ = ["OpStats", "REJECT_REASONS", "print_stats", "format_stats_table"]

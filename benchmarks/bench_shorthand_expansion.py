"""Benchmark: shorthand expansion cost as alternation segments grow.

resolve_shorthand() computes a Cartesian product, so output size and time
grow exponentially with the number of ``(a|b|c)`` segments.
"""
from __future__ import annotations

import json
import sys
import time
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from permission_nodes.nodes import Node

_ITERATIONS: int = 200
_ALTERNATIVES: int = 3
_MAX_SEGMENTS: int = 6


def _shorthand(segments: int) -> str:
    group = "(" + "|".join(f"opt{i}" for i in range(_ALTERNATIVES)) + ")"
    return "plugin." + ".".join([group] * segments)


def bench_shorthand_expansion() -> dict[str, object]:
    """Benchmark Node.resolve_shorthand() for 1.._MAX_SEGMENTS segments.

    Returns
    -------
    dict with keys: operation, iterations, per_segment_count.
    """
    per_segment: list[dict[str, object]] = []
    for segments in range(1, _MAX_SEGMENTS + 1):
        node = Node(_shorthand(segments))
        t0 = time.perf_counter()
        for _ in range(_ITERATIONS):
            expanded = node.resolve_shorthand()
        elapsed = time.perf_counter() - t0
        per_segment.append(
            {
                "segments": segments,
                "expanded": len(expanded),
                "avg_latency_ms": round(elapsed / _ITERATIONS * 1000, 4),
            }
        )
        print(
            f"[bench_shorthand_expansion] segments={segments} "
            f"expanded={len(expanded)} mean={elapsed / _ITERATIONS * 1000:.4f}ms"
        )

    return {
        "operation": "shorthand_expansion",
        "iterations": _ITERATIONS,
        "per_segment_count": per_segment,
    }


def run_benchmark() -> dict[str, object]:
    """Entry point returning the benchmark result dict."""
    return bench_shorthand_expansion()


if __name__ == "__main__":
    result = run_benchmark()
    results_dir = Path(__file__).parent / "results"
    results_dir.mkdir(exist_ok=True)
    output_path = results_dir / "shorthand_baseline.json"
    with open(output_path, "w", encoding="utf-8") as fh:
        json.dump(result, fh, indent=2)
    print(f"Results saved to {output_path}")

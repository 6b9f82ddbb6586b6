#!/usr/bin/env python3
"""Headless game profiler.

Usage:
    python scripts/profile_simulation.py --ticks 2000 --seed 42
    python scripts/profile_simulation.py --variant maze --ticks 5000 --cprofile profile.prof
    python scripts/profile_simulation.py --grid 120x80 --memory

Reports:
    - Per-tick timing statistics (min, max, mean, p50, p95, p99)
    - Tick vs. snapshot cost (the API host publishes one snapshot per tick)
    - Score and remaining collectibles over the run
    - Throughput (ticks/sec)
    - Optional: cProfile dump for flame graph generation
    - Optional: tracemalloc memory snapshot
"""

from __future__ import annotations

import argparse
import cProfile
import io
import os
import pstats
import statistics
import sys
import time
import tracemalloc

# Ensure project root is on path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from gridchase.config import GameConfig
from gridchase.core.enums import Direction, Domain
from gridchase.engine.game_loop import GameLoop
from gridchase.systems.rng import DeterministicRNG


def _run_game(cfg: GameConfig, num_ticks: int, input_seed: int) -> dict:
    """Run a game with random turns and collect per-tick timing data."""
    loop = GameLoop(cfg, rng=DeterministicRNG(cfg.world_seed))
    inputs = DeterministicRNG(input_seed)
    directions = list(Direction)
    loop.start()

    tick_times: list[float] = []
    snapshot_times: list[float] = []
    scores: list[int] = []
    remaining: list[int] = []

    for i in range(num_ticks):
        if i % 4 == 0:
            loop.request_direction(inputs.choice(Domain.AI_DECISION, -1, i, directions))

        t_start = time.perf_counter()
        if not loop.tick_once():
            break
        t1 = time.perf_counter()
        loop.create_snapshot()
        t2 = time.perf_counter()

        tick_times.append(t1 - t_start)
        snapshot_times.append(t2 - t1)
        scores.append(loop.state.run.score)
        remaining.append(loop.state.terrain.remaining_collectibles())

    return {
        "tick_times": tick_times,
        "snapshot_times": snapshot_times,
        "scores": scores,
        "remaining": remaining,
        "final_tick": loop.state.tick,
        "outcome": loop.state.run.outcome.name.lower(),
        "level": loop.state.run.level,
    }


def _percentile(data: list[float], p: float) -> float:
    """Simple percentile calculation."""
    if not data:
        return 0.0
    sorted_data = sorted(data)
    k = (len(sorted_data) - 1) * (p / 100.0)
    f = int(k)
    c = f + 1
    if c >= len(sorted_data):
        return sorted_data[f]
    return sorted_data[f] + (k - f) * (sorted_data[c] - sorted_data[f])


def _print_report(data: dict, wall_time: float) -> None:
    """Print a formatted performance report."""
    tick_times = data["tick_times"]
    snapshot_times = data["snapshot_times"]
    num_ticks = len(tick_times)

    if num_ticks == 0:
        print("No ticks executed.")
        return

    print("\n" + "=" * 70)
    print("  GAME PERFORMANCE REPORT")
    print("=" * 70)

    # --- Overview ---
    print(f"\n  Ticks executed:    {num_ticks}")
    print(f"  Wall clock time:   {wall_time:.3f}s")
    print(f"  Throughput:        {num_ticks / wall_time:.1f} ticks/sec")
    print(f"  Avg tick time:     {statistics.mean(tick_times) * 1000:.3f}ms")
    print(f"  Outcome:           {data['outcome']} (level {data['level']})")

    # --- Progress ---
    print(f"\n  Final score:           {data['scores'][-1]}")
    print(f"  Collectibles (start):  {data['remaining'][0]}")
    print(f"  Collectibles (end):    {data['remaining'][-1]}")

    # --- Tick time distribution ---
    print(f"\n  {'Metric':<16} {'Time (ms)':>10}")
    print(f"  {'-' * 16} {'-' * 10}")
    print(f"  {'Min':<16} {min(tick_times) * 1000:>10.3f}")
    print(f"  {'P50 (median)':<16} {_percentile(tick_times, 50) * 1000:>10.3f}")
    print(f"  {'P95':<16} {_percentile(tick_times, 95) * 1000:>10.3f}")
    print(f"  {'P99':<16} {_percentile(tick_times, 99) * 1000:>10.3f}")
    print(f"  {'Max':<16} {max(tick_times) * 1000:>10.3f}")
    if num_ticks > 1:
        print(f"  {'StdDev':<16} {statistics.stdev(tick_times) * 1000:>10.3f}")

    # --- Tick vs snapshot ---
    total_sum = sum(tick_times) + sum(snapshot_times)
    print(f"\n  {'Phase':<16} {'Avg (ms)':>10} {'P95 (ms)':>10} {'% Total':>10}")
    print(f"  {'-' * 16} {'-' * 10} {'-' * 10} {'-' * 10}")
    for name, times in [("Tick", tick_times), ("Snapshot", snapshot_times)]:
        avg_ms = statistics.mean(times) * 1000 if times else 0
        p95_ms = _percentile(times, 95) * 1000 if times else 0
        pct = (sum(times) / total_sum * 100) if total_sum > 0 else 0
        print(f"  {name:<16} {avg_ms:>10.3f} {p95_ms:>10.3f} {pct:>9.1f}%")

    # --- Slowest ticks ---
    print("\n  Top 5 slowest ticks:")
    indexed = sorted(enumerate(tick_times), key=lambda x: x[1], reverse=True)[:5]
    for tick_idx, t in indexed:
        print(f"    Tick {tick_idx:>5}: {t * 1000:.3f}ms  (score {data['scores'][tick_idx]})")

    print("\n" + "=" * 70)


def _parse_grid(value: str | None) -> tuple[int, int] | None:
    if not value:
        return None
    cols, _, rows = value.lower().partition("x")
    return int(cols), int(rows or cols)


def main() -> None:
    parser = argparse.ArgumentParser(description="Profile the game engine")
    parser.add_argument("--ticks", type=int, default=2000, help="Number of ticks to run")
    parser.add_argument("--seed", type=int, default=42, help="World seed")
    parser.add_argument("--variant", type=str, default="meadow", choices=["meadow", "maze"])
    parser.add_argument("--grid", type=str, default=None, help="Grid size as COLSxROWS")
    parser.add_argument("--cprofile", type=str, default=None, help="Save cProfile output to file")
    parser.add_argument("--memory", action="store_true", help="Enable tracemalloc memory profiling")
    args = parser.parse_args()

    cfg = GameConfig.for_variant(args.variant, world_seed=args.seed, max_ticks=args.ticks + 10)
    grid = _parse_grid(args.grid)
    if grid is not None:
        cfg = cfg.with_grid(*grid)

    print(f"Profiling: {args.ticks} ticks, seed={args.seed}, "
          f"variant={args.variant}, grid={cfg.grid_width}x{cfg.grid_height}")

    # --- Optional: memory tracking ---
    if args.memory:
        tracemalloc.start()

    # --- Optional: cProfile ---
    profiler = None
    if args.cprofile:
        profiler = cProfile.Profile()
        profiler.enable()

    wall_start = time.perf_counter()
    data = _run_game(cfg, args.ticks, input_seed=args.seed + 1)
    wall_time = time.perf_counter() - wall_start

    if profiler:
        profiler.disable()

    _print_report(data, wall_time)

    # --- cProfile output ---
    if profiler and args.cprofile:
        profiler.dump_stats(args.cprofile)
        print(f"\n  cProfile data saved to: {args.cprofile}")
        print(f"  View with: python -m pstats {args.cprofile}")

        print("\n  Top 20 functions by cumulative time:")
        stream = io.StringIO()
        ps = pstats.Stats(profiler, stream=stream)
        ps.sort_stats("cumulative")
        ps.print_stats(20)
        print(stream.getvalue())

    # --- Memory output ---
    if args.memory:
        snapshot = tracemalloc.take_snapshot()
        print("\n  Top 15 memory allocations by size:")
        print(f"  {'File:Line':<60} {'Size':>10}")
        print(f"  {'-' * 60} {'-' * 10}")
        for stat in snapshot.statistics("lineno")[:15]:
            print(f"  {str(stat.traceback):<60} {stat.size / 1024:>8.1f} KB")

        current, peak = tracemalloc.get_traced_memory()
        print(f"\n  Current memory: {current / 1024:.1f} KB")
        print(f"  Peak memory:    {peak / 1024:.1f} KB")
        tracemalloc.stop()


if __name__ == "__main__":
    main()

"""
Autoplay Benchmark
==================

Runs complete headless sessions with a simple catching bot to measure
simulation throughput and outcome rates per difficulty.

Usage:
    python -m tools.benchmark_speed [--sessions N] [--difficulty NAME ...] [--quick]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional
import numpy as np

from dropcatch.core.config_loader import Difficulty, load_config
from dropcatch.core.game import GameSession
from dropcatch.core.rules import EndReason


def bot_step(session: GameSession, rng: np.random.Generator) -> None:
    """
    One frame of bot input.

    Follows the lowest rewarding drop and catches whenever the can touches
    at least one rewarding drop and no penalty drop.
    """
    drops = session.live_drops
    if not drops:
        return

    catalog = session.catalog
    now = session.now_ms
    rewarding = [d for d in drops if not catalog[d.type].is_penalty]
    if rewarding:
        target = max(rewarding, key=lambda d: d.progress(now))
        cx, _ = target.rect_at(now).center
        session.move_catcher_to(cx + rng.normal(0.0, 6.0))

    can = session.catcher.rect
    touching = [d for d in drops if can.overlaps(d.rect_at(now))]
    if any(not catalog[d.type].is_penalty for d in touching) and \
            not any(catalog[d.type].is_penalty for d in touching):
        session.collect_overlapping()


def play_session(
    session: GameSession,
    difficulty: Difficulty,
    rng: np.random.Generator,
    frame_ms: int = 16
) -> dict:
    """Play one session to its end and return the outcome."""
    session.reset()
    session.start(difficulty)
    frames = 0
    while session.running:
        session.advance(frame_ms)
        bot_step(session, rng)
        frames += 1

    info = session.get_info()
    return {
        "reason": session.result.reason,
        "score": session.score,
        "frames": frames,
        "catches": info["catches"],
        "missed": info["missed"],
    }


def benchmark_difficulty(
    difficulty: Difficulty,
    num_sessions: int = 50,
    seed: int = 42
) -> dict:
    """
    Benchmark full sessions at one difficulty.

    Args:
        difficulty: Difficulty to play.
        num_sessions: Number of sessions.
        seed: Random seed for drops and bot jitter.

    Returns:
        Dict with timing and outcome results.
    """
    config = load_config()
    session = GameSession(config=config, seed=seed)
    rng = np.random.default_rng(seed)

    start = time.perf_counter()
    outcomes = [play_session(session, difficulty, rng) for _ in range(num_sessions)]
    elapsed = time.perf_counter() - start

    scores = np.array([o["score"] for o in outcomes], dtype=np.int64)
    frames = int(sum(o["frames"] for o in outcomes))
    reasons = [o["reason"] for o in outcomes]

    return {
        "difficulty": difficulty.value,
        "num_sessions": num_sessions,
        "elapsed_seconds": elapsed,
        "sessions_per_second": num_sessions / elapsed,
        "frames_per_second": frames / elapsed,
        "mean_score": float(scores.mean()),
        "win_rate": reasons.count(EndReason.WIN) / num_sessions,
        "floor_rate": reasons.count(EndReason.SCORE_FLOOR) / num_sessions,
        "timeout_rate": reasons.count(EndReason.TIMEOUT) / num_sessions,
    }


def run_all_benchmarks(
    difficulties: Optional[List[Difficulty]] = None,
    sessions: int = 50
) -> list:
    """Run the benchmark for each difficulty and print a summary table."""
    if difficulties is None:
        difficulties = list(Difficulty)

    results = []

    print("=" * 60)
    print("DROP CATCH AUTOPLAY BENCHMARK")
    print("=" * 60)
    print()

    for difficulty in difficulties:
        print(f"Benchmarking {difficulty.value} ({sessions} sessions)...")
        result = benchmark_difficulty(difficulty, num_sessions=sessions)
        results.append(result)
        print(f"  Sessions/sec: {result['sessions_per_second']:.1f}")
        print(f"  Frames/sec:   {result['frames_per_second']:.1f}")
        print()

    print("=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print()
    print(f"{'Difficulty':<12} {'Sess/s':>8} {'Score':>8} {'Win':>6} {'Floor':>6} {'Time':>6}")
    print("-" * 50)

    for r in results:
        print(
            f"{r['difficulty']:<12} {r['sessions_per_second']:>8.1f} {r['mean_score']:>8.1f} "
            f"{r['win_rate']:>6.2f} {r['floor_rate']:>6.2f} {r['timeout_rate']:>6.2f}"
        )

    return results


def main():
    parser = argparse.ArgumentParser(description="Benchmark Drop Catch sessions with an autoplay bot")
    parser.add_argument("--sessions", type=int, default=50, help="Sessions per difficulty")
    parser.add_argument("--difficulty", nargs="+", choices=[d.value for d in Difficulty],
                        default=None, help="Difficulties to run (default: all)")
    parser.add_argument("--quick", action="store_true", help="Quick benchmark (fewer sessions)")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING))

    sessions = 5 if args.quick else args.sessions
    difficulties = [Difficulty.parse(d) for d in args.difficulty] if args.difficulty else None

    run_all_benchmarks(difficulties=difficulties, sessions=sessions)

    return 0


if __name__ == "__main__":
    sys.exit(main())

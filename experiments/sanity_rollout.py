# /experiments/sanity_rollout.py
"""
Sanity rollouts for FlappyEnv:
- Runs RANDOM and/or TINY-HEURISTIC policies over fixed seeds
- Writes an episodes CSV for notebook analysis
- Saves per-episode action sequences (and optionally observations) for exact replay

Usage examples (from repo root):
  # Run both policies over 20 default seeds, frame_skip=2, save traces:
  python -m experiments.sanity_rollout --policies both --save-traces

  # Only heuristic on hard, custom seeds, also save observations:
  python -m experiments.sanity_rollout --policies heuristic --difficulty hard --seeds 111,222,333 --save-traces --save-obs

  # Quick random-only smoke with fewer steps:
  python -m experiments.sanity_rollout --policies random --steps 300 --out-dir /tmp/sanity
"""

from __future__ import annotations
import argparse
import csv
from pathlib import Path
from typing import List, NamedTuple

import numpy as np

from src.env.flappy_env import FlappyEnv
from src.flappy.config import FPS, DIFFICULTY_DEFAULT, DIFFICULTY_SETTINGS


# ------------------------ Policies ------------------------

def random_policy_init(action_seed: int, flap_prob: float = 0.08):
    rng = np.random.RandomState(action_seed)
    def act(_obs: np.ndarray) -> int:
        return int(rng.random_sample() < flap_prob)
    return act

def tiny_heuristic_policy_init(slack: float = 0.04):
    """
    Very small rule: flap when the avatar is falling and has sunk
    below the lower edge of the next gap (minus a little slack).
    With no pipe ahead the sentinel gap is [0, 1], so it aims for mid-screen.
    """
    def act(obs: np.ndarray) -> int:
        y, vy, _dx, top, bottom = obs[0], obs[1], obs[2], obs[3], obs[4]
        target = bottom - slack if bottom < 1.0 else 0.5
        return 1 if (vy >= 0.0 and y > target and y > top + slack) else 0
    return act


POLICIES = {
    "random": lambda seed: random_policy_init(10_000 + seed),
    "heuristic": lambda seed: tiny_heuristic_policy_init(),
}


# ------------------------ Rollout core ------------------------

class EpisodeResult(NamedTuple):
    ep_len: int
    ret_sum: float
    score: int
    frames: int
    terminated: bool
    truncated: bool


def ensure_dir(p: Path):
    p.mkdir(parents=True, exist_ok=True)

def write_episode_row(csv_path: Path, header: List[str], row: List):
    exists = csv_path.exists()
    with csv_path.open("a", newline="") as f:
        w = csv.writer(f)
        if not exists:
            w.writerow(header)
        w.writerow(row)

def run_one_episode(policy_name: str,
                    seed: int,
                    difficulty: str,
                    frame_skip: int,
                    steps_limit: int,
                    save_traces: bool,
                    save_obs: bool,
                    out_dir: Path) -> EpisodeResult:
    """Run one episode; writes traces to disk if requested."""
    if policy_name not in POLICIES:
        raise ValueError(f"Unknown policy {policy_name!r}")
    policy = POLICIES[policy_name](seed)
    env = FlappyEnv(difficulty=difficulty, frame_skip=frame_skip)

    actions: List[int] = []
    obs_list: List[np.ndarray] = []
    ret_sum = 0.0
    ep_len = 0
    term = trunc = False
    info = {}

    try:
        obs, info = env.reset(seed=seed)
        if save_obs:
            obs_list.append(obs.copy())

        for _ in range(steps_limit):
            a = policy(obs)
            actions.append(int(a))

            obs, r, term, trunc, info = env.step(a)
            ret_sum += float(r)
            ep_len += 1
            if save_obs:
                obs_list.append(obs.copy())
            if term or trunc:
                break
    finally:
        env.close()

    if save_traces:
        trace_dir = out_dir / "traces" / policy_name
        ensure_dir(trace_dir)
        np.save(trace_dir / f"{seed}_actions.npy", np.asarray(actions, dtype=np.int8))
        if save_obs:
            np.save(trace_dir / f"{seed}_obs.npy", np.asarray(obs_list, dtype=np.float32))
        meta_lines = [
            f"seed={seed}",
            f"difficulty={difficulty}",
            f"frame_skip={frame_skip}",
            f"policy={policy_name}",
            f"steps_limit={steps_limit}",
        ]
        (trace_dir / f"{seed}_meta.txt").write_text("\n".join(meta_lines), encoding="utf-8")

    return EpisodeResult(ep_len, ret_sum, int(info.get("score", 0)), int(info.get("frame", 0)),
                         bool(term), bool(trunc))


HEADER = [
    "env_name", "policy_name", "seed", "difficulty",
    "frame_skip", "sim_fps", "decision_hz",
    "episode_len_decisions", "return_sum", "score", "frames",
    "terminated", "truncated",
]


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--policies", type=str, default="both",
                    choices=["random", "heuristic", "both"],
                    help="Which policy to run")
    ap.add_argument("--seeds", type=str, default="",
                    help="Comma-separated seeds. If empty, uses 20 defaults: 101..120")
    ap.add_argument("--difficulty", choices=sorted(DIFFICULTY_SETTINGS), default=DIFFICULTY_DEFAULT)
    ap.add_argument("--frame-skip", type=int, default=2,
                    help="Sim ticks per decision step")
    ap.add_argument("--steps", type=int, default=10_000,
                    help="Hard cap on decision steps (env may truncate earlier)")
    ap.add_argument("--out-dir", type=str, default="experiments/runs",
                    help="Directory to store episodes.csv and traces/")
    ap.add_argument("--save-traces", action="store_true",
                    help="Save action sequences (and optional obs) for replay")
    ap.add_argument("--save-obs", action="store_true",
                    help="Also save observations per step (larger files)")
    args = ap.parse_args(argv)

    out_dir = Path(args.out_dir)
    ensure_dir(out_dir)

    if args.seeds.strip():
        seeds = [int(s) for s in args.seeds.split(",") if s.strip()]
    else:
        seeds = list(range(101, 121))  # 20 fixed eval seeds by default

    episodes_csv = out_dir / "episodes.csv"
    decision_hz = FPS / max(1, args.frame_skip)
    to_run = ["random", "heuristic"] if args.policies == "both" else [args.policies]

    print(f"Running policies={to_run} on {len(seeds)} seeds "
          f"(difficulty={args.difficulty}, frame_skip={args.frame_skip}, decision_hz≈{decision_hz:.1f})")
    print(f"Writing summaries to {episodes_csv} and traces under {out_dir}/traces/")

    for policy_name in to_run:
        for seed in seeds:
            res = run_one_episode(
                policy_name=policy_name,
                seed=seed,
                difficulty=args.difficulty,
                frame_skip=args.frame_skip,
                steps_limit=args.steps,
                save_traces=args.save_traces,
                save_obs=args.save_obs,
                out_dir=out_dir
            )
            row = [
                "FlappyEnv", policy_name, seed, args.difficulty,
                args.frame_skip, FPS, decision_hz,
                res.ep_len, f"{res.ret_sum:.1f}", res.score, res.frames,
                int(res.terminated), int(res.truncated),
            ]
            write_episode_row(episodes_csv, HEADER, row)

            print(f"[{policy_name}] seed={seed}  len={res.ep_len}  score={res.score}  "
                  f"ret={res.ret_sum:.1f}  term={res.terminated} trunc={res.truncated}")

    print("✓ Sanity rollouts complete")


if __name__ == "__main__":
    main()

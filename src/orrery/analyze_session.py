"""Analyze a recorded orrery session and plot the body tracks."""
from __future__ import annotations

import argparse
import csv
import json
import math
from collections import Counter
from pathlib import Path
from typing import Dict, List

import numpy as np

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt


SAMPLES_FILENAME = "samples.csv"
EVENTS_FILENAME = "events.csv"
META_FILENAME = "meta.json"
FIGS_SUBDIR = "figs"


def load_samples(path: Path) -> Dict[str, Dict[str, np.ndarray]]:
    """Per-body columns ``t, x, y, z, phase`` keyed by body name."""

    columns: Dict[str, Dict[str, List[float]]] = {}
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            body = columns.setdefault(
                row["body"], {"t": [], "x": [], "y": [], "z": [], "phase": []}
            )
            for key in body:
                body[key].append(float(row[key]))
    return {
        name: {key: np.asarray(values) for key, values in body.items()}
        for name, body in columns.items()
    }


def load_events(path: Path) -> List[dict]:
    events: List[dict] = []
    with path.open("r", newline="", encoding="utf-8") as fh:
        reader = csv.DictReader(fh)
        for row in reader:
            if not row:
                continue
            event = {"t": float(row["t"]), "type": row["type"], "body": row.get("body") or None}
            details_raw = row.get("details", "")
            if details_raw:
                try:
                    event["details"] = json.loads(details_raw)
                except json.JSONDecodeError:
                    event["details"] = details_raw
            events.append(event)
    return events


def revolutions(phase: np.ndarray) -> float:
    """Completed turns from a wrapped phase series, assuming < half a turn per sample."""

    if phase.size < 2:
        return 0.0
    steps = np.diff(phase)
    steps = (steps + math.pi) % (2.0 * math.pi) - math.pi
    return float(abs(steps.sum()) / (2.0 * math.pi))


def summarize_events(events: List[dict]) -> Dict[str, int]:
    return dict(Counter(event["type"] for event in events))


def ensure_fig_dir(session_dir: Path) -> Path:
    fig_dir = session_dir / FIGS_SUBDIR
    fig_dir.mkdir(parents=True, exist_ok=True)
    return fig_dir


def plot_tracks(fig_dir: Path, samples: Dict[str, Dict[str, np.ndarray]], meta: dict) -> Path:
    colors = {name: info.get("color") for name, info in meta.get("bodies", {}).items()}
    fig, ax = plt.subplots(figsize=(7, 7))
    for name, track in samples.items():
        ax.plot(track["x"], track["z"], lw=1.0, label=name, color=colors.get(name))
    ax.scatter([0.0], [0.0], color="#FFD700", s=60)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x")
    ax.set_ylabel("z")
    ax.set_title("Body tracks (x-z plane)")
    ax.legend(fontsize="small", loc="upper right")
    fig.tight_layout()
    out = fig_dir / "tracks_xz.png"
    fig.savefig(out, dpi=150)
    plt.close(fig)
    return out


def print_summary(
    session_dir: Path,
    samples: Dict[str, Dict[str, np.ndarray]],
    event_summary: Dict[str, int],
) -> None:
    duration = max((float(track["t"][-1]) for track in samples.values() if track["t"].size), default=0.0)
    print(f"Session: {session_dir.name}")
    print(f" Simulated time: {duration:.1f} units")
    print(f" Bodies sampled: {len(samples)}")
    for name, track in samples.items():
        print(f"  {name:<10} {track['t'].size:>6} samples  {revolutions(track['phase']):8.2f} revolutions")
    if event_summary:
        print(" Events: " + ", ".join(f"{etype}: {count}" for etype, count in sorted(event_summary.items())))
    else:
        print(" Events: none")


def resolve_session_dir(parser: argparse.ArgumentParser, base_dir: Path, session: str | None) -> Path:
    if session:
        session_path = Path(session)
        if not session_path.is_dir():
            session_path = base_dir / session
    else:
        last_file = base_dir / "last_session.txt"
        if not last_file.exists():
            parser.error("No session given and last_session.txt is missing.")
        session_path = base_dir / last_file.read_text(encoding="utf-8").strip()
    if not session_path.is_dir():
        parser.error(f"Session directory not found: {session_path}")
    return session_path


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Summarize a recorded session and plot body tracks.")
    parser.add_argument("session", nargs="?", help="Session directory or identifier")
    parser.add_argument("--sessions-dir", type=Path, default=Path("data") / "sessions")
    parser.add_argument("--no-plot", action="store_true")
    args = parser.parse_args(argv)

    session_path = resolve_session_dir(parser, args.sessions_dir, args.session)
    samples_path = session_path / SAMPLES_FILENAME
    events_path = session_path / EVENTS_FILENAME
    meta_path = session_path / META_FILENAME
    if not samples_path.exists() or not events_path.exists():
        parser.error("Session directory is missing samples.csv or events.csv.")

    meta: dict = {}
    if meta_path.exists():
        with meta_path.open("r", encoding="utf-8") as fh:
            meta = json.load(fh)

    samples = load_samples(samples_path)
    events = load_events(events_path)
    if not samples:
        parser.error("samples.csv is empty, nothing to analyze.")

    if not args.no_plot:
        plot_tracks(ensure_fig_dir(session_path), samples, meta)
    print_summary(session_path, samples, summarize_events(events))


if __name__ == "__main__":
    main()

# main.py
from config_loader import load_config, load_track, load_targets, CONFIG_PATH, Config
from rundom.geo_point import GeoPoint
from rundom.region_sampler import RegionSampler
from rundom.session import Session, SessionState, ObserverMoved, TargetCaptured, AllTargetsCaptured
from rundom.walker import Walker
from plotting.route import plot_session_route, plot_nearest_distance
from pathlib import Path
from typing import List, Optional

import argparse
import sys
import logging

logger = logging.getLogger(__name__)


def create_output_dirs(name: str = "run", base: Path = Path("data")):
    output_path = Path.cwd() / base / name

    output_path.mkdir(parents=True, exist_ok=True)
    return output_path

def setup_logging(output_path, level=logging.INFO):
    """Log to output.log in the run directory and to stdout."""
    log_file = output_path / "output.log"

    logging.basicConfig(
        level=level,
        format='%(message)s',
        handlers=[
            logging.FileHandler(log_file, mode='w'),
            logging.StreamHandler(sys.stdout)  # Also print to console
        ],
        force=True,
    )
    logger.info(f"Logging setup complete. Output will be saved to {log_file}")


class RunRecorder:
    """Session listener collecting per-tick data for the plots."""

    def __init__(self):
        self.trajectory_data = {
            "position": [],
            "nearest_distance": [],
            "captures": [],
            "summary": None,
        }

    def __call__(self, event):
        if isinstance(event, ObserverMoved):
            self.trajectory_data["position"].append(event.position)
            self.trajectory_data["nearest_distance"].append(event.nearest_distance_m)
        elif isinstance(event, TargetCaptured):
            self.trajectory_data["captures"].append({
                "index": len(self.trajectory_data["position"]) - 1,
                "target_id": event.target.id,
                "remaining": event.remaining,
            })
        elif isinstance(event, AllTargetsCaptured):
            self.trajectory_data["summary"] = event.summary


def run_walker(session: Session, walker: Walker, max_steps: int):
    """Walk to the nearest star until all are collected or steps run out."""
    session.observer_moved(walker.position)
    for _ in range(max_steps):
        if session.state != SessionState.ACTIVE:
            break
        if session.capturable_id is not None:
            session.collect()
            continue

        found = session.tracker.nearest(walker.position)
        if found is None:
            break
        target = found[0]
        walker.turn_toward(target.position)
        walker.move_forward(limit=target.position)
        session.observer_moved(walker.position)

    if session.state == SessionState.ACTIVE:
        logger.info(f"Stopped after {max_steps} steps, {session.bag_label} collected")


def run_track(session: Session, track: List[GeoPoint]):
    """Replay recorded positions, collecting whenever a star is in reach."""
    for point in track:
        if session.state != SessionState.ACTIVE:
            break
        if session.observer_moved(point) is not None:
            session.collect()


def run_session(config: Config, track: Optional[List[GeoPoint]] = None,
                targets: Optional[List[GeoPoint]] = None):
    sampler = RegionSampler(seed=config.session.seed, max_attempts=config.session.max_attempts)
    session = Session(config.session, sampler=sampler)
    recorder = RunRecorder()
    session.subscribe(recorder)

    center = track[0] if track else config.start.to_point()
    placed = session.begin(center, targets=targets)
    for t in placed:
        logger.info(f"⭐ {t.label} at ({t.position.latitude:.6f}, {t.position.longitude:.6f})")

    if track:
        run_track(session, track)
    else:
        walker = Walker(position=center, step_m=config.walker.step_m)
        run_walker(session, walker, config.walker.max_steps)

    summary = recorder.trajectory_data["summary"]
    if summary is not None:
        logger.info(f"\n🏁 Finished! Distance: {summary.distance} meters, Duration: {summary.elapsed}")
    else:
        logger.info(f"\n❌ Run incomplete, {session.bag_label} collected")

    return session, placed, recorder.trajectory_data


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Simulate a star collection run")
    parser.add_argument("--config", type=Path, default=CONFIG_PATH)
    parser.add_argument("--track", type=Path, default=None, help="CSV of recorded positions to replay")
    parser.add_argument("--targets", type=Path, default=None, help="CSV of fixed star positions")
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--output", type=str, default="run")
    parser.add_argument("--show", action="store_true")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    output_path = create_output_dirs(args.output)
    setup_logging(output_path)

    config = load_config(args.config)
    if args.seed is not None:
        config.session.seed = args.seed
    track = load_track(args.track) if args.track else None
    targets = load_targets(args.targets) if args.targets else None

    session, placed, td = run_session(config, track=track, targets=targets)

    plot_session_route(td, placed, center=session.center, radius_m=session.radius_m,
                       output_dir=output_path, show=args.show)
    plot_nearest_distance(td, config.session.capture_threshold_m,
                          output_dir=output_path, show=args.show)
    return 0


if __name__ == "__main__":
    sys.exit(main())

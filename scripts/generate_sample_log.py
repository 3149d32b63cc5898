#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = ROOT / "src"
if SRC_PATH.exists():
    sys.path.insert(0, str(SRC_PATH))


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a sample pulsenav JSONL log.")
    parser.add_argument("--output-dir", default="data/runs", help="Directory for JSONL logs.")
    parser.add_argument("--run-id", default="sample-run", help="Run identifier for the log file.")
    parser.add_argument("--steps", type=int, default=5, help="Number of forward legs to drive.")
    parser.add_argument("--inches", type=float, default=4.0, help="Length of each leg.")
    return parser.parse_args()


def main() -> None:
    from pulsenav_core import DrivePrimitives, MotionLogger, PoseCorrector
    from pulsenav_sim.world import build_sim_hardware

    args = parse_args()
    hardware = build_sim_hardware()
    logger = MotionLogger(Path(args.output_dir), args.run_id)
    logger.start()
    drive = DrivePrimitives(hardware.motors, hardware.encoders, hardware.clock, logger=logger)
    corrector = PoseCorrector(drive, hardware.sensor, logger=logger)
    for _ in range(args.steps):
        drive.move_forward(20, args.inches)
        corrector.correct_heading(0.0)
    logger.log_event("final_pose", hardware.clock.now(), hardware.world.pose)
    logger.stop()


if __name__ == "__main__":
    main()

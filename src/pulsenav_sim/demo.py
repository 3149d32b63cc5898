"""Runs a motion step script against the simulated differential-drive robot."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from pulsenav_core import (
    DrivePrimitives,
    MotionLogger,
    PoseCorrector,
    StepOutcome,
    StepRunner,
    config_from_dict,
    steps_from_list,
)
from pulsenav_core.config import read_config_file
from pulsenav_sim.world import SimulatedHardware, build_sim_hardware, world_config_from_dict

DEFAULT_STEPS: List[Dict[str, Any]] = [
    {"op": "move_forward", "percent": 25, "inches": 12},
    {"op": "turn_left", "percent": 25, "degrees": 90},
    {"op": "move_forward", "percent": 25, "inches": 6},
    {"op": "check_y", "target_y": 16},
    {"op": "turn_right", "percent": 25, "degrees": 90},
    {"op": "check_x", "target_x": 22},
    {"op": "correct_heading", "target": 0},
]


@dataclass
class DemoConfig:
    output_dir: str = "data/runs"
    run_id: str = "pulse-demo"
    world: Dict[str, Any] = field(default_factory=dict)
    motion: Dict[str, Any] = field(default_factory=dict)
    steps: List[Dict[str, Any]] = field(default_factory=lambda: list(DEFAULT_STEPS))


def run_demo(config: DemoConfig, output_dir: Path, run_id: str) -> List[StepOutcome]:
    hardware = build_sim_hardware(world_config_from_dict(config.world))
    motion = config_from_dict(config.motion)
    logger = MotionLogger(output_dir, run_id)
    logger.start()
    try:
        drive = DrivePrimitives(
            hardware.motors,
            hardware.encoders,
            hardware.clock,
            calibration=motion.calibration,
            config=motion.drive,
            logger=logger,
        )
        corrector = PoseCorrector(
            drive,
            hardware.sensor,
            thresholds=motion.thresholds,
            config=motion.correction,
            logger=logger,
        )
        runner = StepRunner(drive, corrector, logger=logger, config=motion.runner)
        outcomes = runner.run(steps_from_list(config.steps))
        logger.log_event("final_pose", hardware.clock.now(), hardware.world.pose)
    finally:
        logger.stop()
        hardware.world.disconnect()
    _print_summary(outcomes, hardware)
    return outcomes


def _print_summary(outcomes: List[StepOutcome], hardware: SimulatedHardware) -> None:
    for outcome in outcomes:
        status = "ok" if outcome.ok else f"failed: {outcome.error}"
        print(f"{outcome.step.op}({_format_args(outcome.step.args)}) {status}")
    pose = hardware.world.pose
    print(
        f"final pose x={pose.x:.2f} y={pose.y:.2f} heading={pose.heading:.1f} "
        f"t={hardware.world.time_s:.2f}s"
    )


def _format_args(args: Any) -> str:
    return ", ".join(f"{key}={value:g}" for key, value in args.items())


def _coalesce(*values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def _load_config(path: Path) -> DemoConfig:
    return _config_from_dict(read_config_file(path))


def _config_from_dict(data: Dict[str, Any]) -> DemoConfig:
    config = DemoConfig()
    for key in ("output_dir", "run_id"):
        if key in data:
            setattr(config, key, data[key])
    config.world = dict(data.get("world", {}))
    config.motion = dict(data.get("motion", {}))
    if "steps" in data:
        config.steps = list(data["steps"])
    return config


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Run a pulse-correction demo on a simulated robot.")
    parser.add_argument(
        "--config",
        default="config/sim/pulse_demo.yaml",
        help="Path to demo config (JSON or YAML).",
    )
    parser.add_argument("--output-dir", default=None, help="Directory for JSONL logs.")
    parser.add_argument("--run-id", default=None, help="Run identifier for the log file.")
    args = parser.parse_args(argv)

    config = _load_config(Path(args.config))
    run_demo(
        config,
        output_dir=Path(_coalesce(args.output_dir, config.output_dir)),
        run_id=str(_coalesce(args.run_id, config.run_id)),
    )


if __name__ == "__main__":
    main()

"""Shared data structures for pulsenav."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List


class Side(str, Enum):
    LEFT = "left"
    RIGHT = "right"


class Cardinal(float, Enum):
    EAST = 0.0
    NORTH = 90.0
    WEST = 180.0
    SOUTH = 270.0


@dataclass(frozen=True)
class Pose:
    x: float
    y: float
    heading: float


@dataclass(frozen=True)
class MotionCommand:
    # Float rather than int: calibrator offsets are fractional percents.
    left_percent: float
    right_percent: float


@dataclass(frozen=True)
class CalibrationConstants:
    encoder_counts_per_rev: float = 318.0
    wheel_radius_in: float = 1.25
    robot_width_in: float = 7.0
    backward_calibrator: float = 3.0
    turn_calibrator: float = 0.0

    @property
    def counts_per_inch(self) -> float:
        return self.encoder_counts_per_rev / (2.0 * math.pi * self.wheel_radius_in)


@dataclass(frozen=True)
class CorrectionThresholds:
    heading_tolerance_deg: float = 1.0
    position_tolerance: float = 0.25
    pulse_percent: float = 15.0
    pulse_s: float = 0.035
    settle_s: float = 0.25


@dataclass(frozen=True)
class MotionResult:
    name: str
    command: MotionCommand
    target_counts: float
    counts: float
    polls: int
    elapsed_s: float


@dataclass
class CorrectionResult:
    name: str
    target: float
    final_value: float
    pulses: int = 0
    # +1/-1 per pulse: increasing heading (left) or forward travel is positive.
    directions: List[int] = field(default_factory=list)

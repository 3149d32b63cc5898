"""Encoder-verified drive primitives for a differential-drive robot."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from pulsenav_core.adapters import Clock, EncoderBank, MotorDriver
from pulsenav_core.data_model import CalibrationConstants, MotionCommand, MotionResult, Side
from pulsenav_core.errors import MotionTimeoutError
from pulsenav_core.logging import MotionLogger


@dataclass
class DriveConfig:
    # None waits on the encoders without a deadline.
    timeout_s: Optional[float] = 10.0
    poll_interval_s: float = 0.005


class DrivePrimitives:
    """Blocking open-loop maneuvers measured by the wheel encoders.

    Every primitive resets both encoders, commands both motors, polls until
    the average count reaches its target and leaves both motors stopped,
    whether it returns or raises.
    """

    def __init__(
        self,
        motors: MotorDriver,
        encoders: EncoderBank,
        clock: Clock,
        calibration: Optional[CalibrationConstants] = None,
        config: Optional[DriveConfig] = None,
        logger: Optional[MotionLogger] = None,
    ) -> None:
        self._motors = motors
        self._encoders = encoders
        self._clock = clock
        self._calibration = calibration or CalibrationConstants()
        self._config = config or DriveConfig()
        self._logger = logger

    @property
    def calibration(self) -> CalibrationConstants:
        return self._calibration

    @property
    def clock(self) -> Clock:
        return self._clock

    def distance_counts(self, inches: float) -> float:
        return abs(inches) * self._calibration.counts_per_inch

    def turn_counts(self, degrees: float) -> float:
        arc_in = math.radians(abs(degrees)) * (self._calibration.robot_width_in / 2.0)
        return arc_in * self._calibration.counts_per_inch

    def backward_compensated(self, percent: float) -> float:
        if percent < 0:
            return percent - self._calibration.backward_calibrator
        return percent

    def apply(self, command: MotionCommand) -> None:
        self._motors.set_power(Side.LEFT, command.left_percent)
        self._motors.set_power(Side.RIGHT, command.right_percent)

    def stop(self) -> None:
        self._motors.stop(Side.LEFT)
        self._motors.stop(Side.RIGHT)

    def move_forward(self, percent: float, inches: float) -> MotionResult:
        if inches < 0:
            percent = -percent
        command = MotionCommand(left_percent=percent, right_percent=percent)
        return self._run_to_counts("move_forward", command, self.distance_counts(inches))

    def turn_right(self, percent: float, degrees: float) -> MotionResult:
        speed = abs(percent) + self._calibration.turn_calibrator
        command = MotionCommand(
            left_percent=speed,
            right_percent=self.backward_compensated(-speed),
        )
        return self._run_to_counts("turn_right", command, self.turn_counts(degrees))

    def turn_left(self, percent: float, degrees: float) -> MotionResult:
        speed = abs(percent) + self._calibration.turn_calibrator
        command = MotionCommand(
            left_percent=self.backward_compensated(-speed),
            right_percent=speed,
        )
        return self._run_to_counts("turn_left", command, self.turn_counts(degrees))

    def move_forward_seconds(self, percent: float, seconds: float) -> MotionResult:
        power = self.backward_compensated(percent)
        command = MotionCommand(left_percent=power, right_percent=power)
        start = self._clock.now()
        self._reset_encoders()
        try:
            self.apply(command)
            self._clock.sleep(seconds)
        finally:
            self.stop()
        result = MotionResult(
            name="move_forward_seconds",
            command=command,
            target_counts=0.0,
            counts=self._average_count(),
            polls=0,
            elapsed_s=self._clock.now() - start,
        )
        self._log(result)
        return result

    def _run_to_counts(self, name: str, command: MotionCommand, target: float) -> MotionResult:
        timeout_s = self._config.timeout_s
        start = self._clock.now()
        polls = 0
        counts = 0.0
        self._reset_encoders()
        try:
            self.apply(command)
            while True:
                counts = self._average_count()
                polls += 1
                if counts >= target:
                    break
                if timeout_s is not None and self._clock.now() - start >= timeout_s:
                    raise MotionTimeoutError(name, target, counts, timeout_s)
                self._clock.sleep(self._config.poll_interval_s)
        finally:
            self.stop()
        result = MotionResult(
            name=name,
            command=command,
            target_counts=target,
            counts=counts,
            polls=polls,
            elapsed_s=self._clock.now() - start,
        )
        self._log(result)
        return result

    def _reset_encoders(self) -> None:
        self._encoders.reset_count(Side.LEFT)
        self._encoders.reset_count(Side.RIGHT)

    def _average_count(self) -> float:
        left = self._encoders.read_count(Side.LEFT)
        right = self._encoders.read_count(Side.RIGHT)
        return (left + right) / 2.0

    def _log(self, result: MotionResult) -> None:
        if self._logger:
            self._logger.log_event(result.name, self._clock.now(), result)

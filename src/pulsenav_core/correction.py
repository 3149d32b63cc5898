"""Pulse-based pose correction against an absolute position sensor."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

from pulsenav_core.adapters import PositionSensor
from pulsenav_core.data_model import Cardinal, CorrectionResult, CorrectionThresholds, MotionCommand
from pulsenav_core.drive import DrivePrimitives
from pulsenav_core.errors import CorrectionLimitError, SensorUnavailableError
from pulsenav_core.logging import MotionLogger

_FORWARD_SIGN: Dict[Cardinal, int] = {
    Cardinal.EAST: 1,
    Cardinal.WEST: -1,
    Cardinal.NORTH: 1,
    Cardinal.SOUTH: -1,
}


@dataclass
class CorrectionConfig:
    max_pulses: int = 60
    timeout_s: Optional[float] = 30.0
    restore_heading: bool = False


def heading_error(current: float, target: float) -> float:
    """Signed shortest rotation from ``current`` to ``target`` in degrees.

    The result lies in (-180, 180]; positive means turning toward increasing
    heading (a left turn).
    """
    diff = (target - current) % 360.0
    if diff > 180.0:
        diff -= 360.0
    return diff


def nearest_cardinal(heading: float, axis: str) -> Cardinal:
    if axis == "x":
        return Cardinal.EAST if abs(heading_error(heading, Cardinal.EAST.value)) <= 90.0 else Cardinal.WEST
    if axis == "y":
        return Cardinal.NORTH if abs(heading_error(heading, Cardinal.NORTH.value)) <= 90.0 else Cardinal.SOUTH
    raise ValueError(f"Unknown axis {axis!r}. Use 'x' or 'y'.")


class PoseCorrector:
    """Bang-bang correction of heading and of one coordinate at a time.

    Each iteration applies a fixed short pulse, stops, waits for the sensor to
    settle and re-reads it. Loops end inside the tolerance band, or raise when
    the sensor loses the robot or the pulse/time cap is hit.
    """

    def __init__(
        self,
        drive: DrivePrimitives,
        sensor: PositionSensor,
        thresholds: Optional[CorrectionThresholds] = None,
        config: Optional[CorrectionConfig] = None,
        logger: Optional[MotionLogger] = None,
    ) -> None:
        self._drive = drive
        self._sensor = sensor
        self._thresholds = thresholds or CorrectionThresholds()
        self._config = config or CorrectionConfig()
        self._logger = logger

    @property
    def thresholds(self) -> CorrectionThresholds:
        return self._thresholds

    def correct_heading(self, target: float) -> CorrectionResult:
        return self._correct_heading(target, "correct_heading")

    def _correct_heading(self, target: float, caller: str) -> CorrectionResult:
        # Errors carry the name of the operation the caller asked for.
        target = target % 360.0
        clock = self._drive.clock
        heading = self._read_heading(caller)
        result = CorrectionResult(name="correct_heading", target=target, final_value=heading)
        start = clock.now()
        error = heading_error(heading, target)
        while abs(error) > self._thresholds.heading_tolerance_deg:
            self._check_limits(caller, result, start, heading)
            direction = 1 if error > 0 else -1
            self._pulse_turn(direction)
            result.pulses += 1
            result.directions.append(direction)
            clock.sleep(self._thresholds.settle_s)
            heading = self._read_heading(caller)
            error = heading_error(heading, target)
        result.final_value = heading
        self._log(result)
        return result

    def check_x(self, target_x: float) -> CorrectionResult:
        return self._check_axis("check_x", "x", target_x)

    def check_y(self, target_y: float) -> CorrectionResult:
        return self._check_axis("check_y", "y", target_y)

    def _check_axis(self, name: str, axis: str, target: float) -> CorrectionResult:
        clock = self._drive.clock
        initial_heading = self._read_heading(name)
        self._read_position(name, axis)
        cardinal = nearest_cardinal(initial_heading, axis)
        self._correct_heading(cardinal.value, name)

        forward_sign = _FORWARD_SIGN[cardinal]
        position = self._read_position(name, axis)
        result = CorrectionResult(name=name, target=target, final_value=position)
        start = clock.now()
        error = target - position
        while abs(error) > self._thresholds.position_tolerance:
            self._check_limits(name, result, start, position)
            direction = forward_sign if error > 0 else -forward_sign
            self._drive.move_forward_seconds(
                direction * self._thresholds.pulse_percent, self._thresholds.pulse_s
            )
            result.pulses += 1
            result.directions.append(direction)
            clock.sleep(self._thresholds.settle_s)
            position = self._read_position(name, axis)
            error = target - position

        if self._config.restore_heading:
            self._correct_heading(initial_heading, name)
        result.final_value = position
        self._log(result)
        return result

    def _pulse_turn(self, direction: int) -> None:
        power = self._thresholds.pulse_percent
        if direction > 0:
            command = MotionCommand(
                left_percent=self._drive.backward_compensated(-power),
                right_percent=power,
            )
        else:
            command = MotionCommand(
                left_percent=power,
                right_percent=self._drive.backward_compensated(-power),
            )
        try:
            self._drive.apply(command)
            self._drive.clock.sleep(self._thresholds.pulse_s)
        finally:
            self._drive.stop()
        if self._logger:
            self._logger.log_event("heading_pulse", self._drive.clock.now(), command)

    def _check_limits(self, name: str, result: CorrectionResult, start: float, value: float) -> None:
        timeout_s = self._config.timeout_s
        over_pulses = result.pulses >= self._config.max_pulses
        over_time = timeout_s is not None and self._drive.clock.now() - start >= timeout_s
        if over_pulses or over_time:
            self._drive.stop()
            raise CorrectionLimitError(name, result.target, value, result.pulses)

    def _read_heading(self, name: str) -> float:
        heading = self._sensor.read_heading()
        if heading < 0:
            raise SensorUnavailableError(name, "heading", heading)
        return heading % 360.0

    def _read_position(self, name: str, axis: str) -> float:
        value = self._sensor.read_x() if axis == "x" else self._sensor.read_y()
        if value <= 0:
            raise SensorUnavailableError(name, axis, value)
        return value

    def _log(self, result: CorrectionResult) -> None:
        if self._logger:
            self._logger.log_event(result.name, self._drive.clock.now(), result)

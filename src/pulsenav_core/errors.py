"""Errors raised by motion primitives and pose correction."""

from __future__ import annotations


class MotionError(RuntimeError):
    """A maneuver ended without reaching its goal."""


class MotionTimeoutError(MotionError):
    def __init__(self, name: str, target_counts: float, counts: float, timeout_s: float) -> None:
        super().__init__(
            f"{name} timed out after {timeout_s:.2f}s at {counts:.1f}/{target_counts:.1f} counts"
        )
        self.name = name
        self.target_counts = target_counts
        self.counts = counts
        self.timeout_s = timeout_s


class SensorUnavailableError(MotionError):
    def __init__(self, name: str, reading: str, value: float) -> None:
        super().__init__(f"{name}: position sensor {reading} not visible (read {value})")
        self.name = name
        self.reading = reading
        self.value = value


class CorrectionLimitError(MotionError):
    def __init__(self, name: str, target: float, value: float, pulses: int) -> None:
        super().__init__(
            f"{name} did not converge on {target} after {pulses} pulses (last read {value})"
        )
        self.name = name
        self.target = target
        self.value = value
        self.pulses = pulses

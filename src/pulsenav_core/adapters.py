"""Adapter interfaces for motors, encoders, the position sensor, and time."""

from __future__ import annotations

import time
from abc import ABC, abstractmethod

from pulsenav_core.data_model import Side


class MotorDriver(ABC):
    @abstractmethod
    def set_power(self, side: Side, percent: float) -> None:
        raise NotImplementedError

    @abstractmethod
    def stop(self, side: Side) -> None:
        raise NotImplementedError


class EncoderBank(ABC):
    @abstractmethod
    def reset_count(self, side: Side) -> None:
        raise NotImplementedError

    @abstractmethod
    def read_count(self, side: Side) -> int:
        raise NotImplementedError


class PositionSensor(ABC):
    """Absolute position/heading source.

    Readings are polled and may be stale. ``read_heading`` returns a negative
    value while the robot is not visible; ``read_x`` and ``read_y`` return a
    non-positive value in the same situation.
    """

    @abstractmethod
    def read_heading(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def read_x(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def read_y(self) -> float:
        raise NotImplementedError


class Clock(ABC):
    @abstractmethod
    def now(self) -> float:
        raise NotImplementedError

    @abstractmethod
    def sleep(self, seconds: float) -> None:
        raise NotImplementedError


class SystemClock(Clock):
    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)

"""Kinematic differential-drive world with simulated hardware adapters."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional

from pulsenav_core.adapters import Clock, EncoderBank, MotorDriver, PositionSensor
from pulsenav_core.data_model import Pose, Side
from pulsenav_sim.base import SimulationBridge

NOT_VISIBLE = -1.0


@dataclass
class WorldConfig:
    start_x: float = 10.0
    start_y: float = 10.0
    start_heading: float = 0.0
    max_speed_ips: float = 20.0
    robot_width_in: float = 7.0
    encoder_counts_per_rev: float = 318.0
    wheel_radius_in: float = 1.25
    # Reverse motors lose this many percent of commanded power.
    backward_loss_percent: float = 3.0
    sensor_noise: float = 0.0
    step_s: float = 0.005
    seed: int = 0

    @property
    def counts_per_inch(self) -> float:
        return self.encoder_counts_per_rev / (2.0 * math.pi * self.wheel_radius_in)


class DifferentialDriveWorld(SimulationBridge):
    def __init__(self, config: Optional[WorldConfig] = None) -> None:
        self._config = config or WorldConfig()
        self._pose = [self._config.start_x, self._config.start_y, self._config.start_heading % 360.0]
        self._power: Dict[Side, float] = {Side.LEFT: 0.0, Side.RIGHT: 0.0}
        self._counts: Dict[Side, float] = {Side.LEFT: 0.0, Side.RIGHT: 0.0}
        self._time_s = 0.0
        self._connected = False

    @property
    def config(self) -> WorldConfig:
        return self._config

    @property
    def pose(self) -> Pose:
        x, y, heading = self._pose
        return Pose(x=x, y=y, heading=heading)

    @property
    def time_s(self) -> float:
        return self._time_s

    def power(self, side: Side) -> float:
        return self._power[side]

    def set_power(self, side: Side, percent: float) -> None:
        self._power[side] = percent

    def counts(self, side: Side) -> float:
        return self._counts[side]

    def reset_counts(self, side: Side) -> None:
        self._counts[side] = 0.0

    def place(self, x: float, y: float, heading: float) -> None:
        self._pose = [x, y, heading % 360.0]

    def connect(self) -> None:
        self._connected = True

    def step(self, dt: float) -> None:
        if not self._connected:
            raise RuntimeError("Simulation bridge not connected.")
        left = self._wheel_speed(self._power[Side.LEFT])
        right = self._wheel_speed(self._power[Side.RIGHT])
        x, y, heading = self._pose
        omega = (right - left) / self._config.robot_width_in
        linear = (left + right) * 0.5
        yaw = math.radians(heading) + omega * dt * 0.5
        x += linear * math.cos(yaw) * dt
        y += linear * math.sin(yaw) * dt
        heading = (heading + math.degrees(omega * dt)) % 360.0
        self._pose = [x, y, heading]
        cpi = self._config.counts_per_inch
        self._counts[Side.LEFT] += abs(left) * dt * cpi
        self._counts[Side.RIGHT] += abs(right) * dt * cpi
        self._time_s += dt

    def disconnect(self) -> None:
        self._power = {Side.LEFT: 0.0, Side.RIGHT: 0.0}
        self._connected = False

    def _wheel_speed(self, percent: float) -> float:
        if percent < 0:
            percent = min(0.0, percent + self._config.backward_loss_percent)
        return percent / 100.0 * self._config.max_speed_ips


class SimMotorDriver(MotorDriver):
    def __init__(self, world: DifferentialDriveWorld) -> None:
        self._world = world

    def set_power(self, side: Side, percent: float) -> None:
        self._world.set_power(side, max(-100.0, min(100.0, percent)))

    def stop(self, side: Side) -> None:
        self._world.set_power(side, 0.0)


class SimEncoderBank(EncoderBank):
    def __init__(self, world: DifferentialDriveWorld) -> None:
        self._world = world

    def reset_count(self, side: Side) -> None:
        self._world.reset_counts(side)

    def read_count(self, side: Side) -> int:
        return int(self._world.counts(side))


class SimPositionSensor(PositionSensor):
    def __init__(self, world: DifferentialDriveWorld) -> None:
        self._world = world
        self._random = random.Random(world.config.seed)
        self.visible = True

    def read_heading(self) -> float:
        if not self.visible:
            return NOT_VISIBLE
        return (self._world.pose.heading + self._noise()) % 360.0

    def read_x(self) -> float:
        if not self.visible:
            return NOT_VISIBLE
        return self._world.pose.x + self._noise()

    def read_y(self) -> float:
        if not self.visible:
            return NOT_VISIBLE
        return self._world.pose.y + self._noise()

    def _noise(self) -> float:
        if self._world.config.sensor_noise <= 0:
            return 0.0
        return self._random.gauss(0.0, self._world.config.sensor_noise)


class SimClock(Clock):
    """Virtual time; sleeping advances the world in fixed sub-steps."""

    def __init__(self, world: DifferentialDriveWorld) -> None:
        self._world = world

    def now(self) -> float:
        return self._world.time_s

    def sleep(self, seconds: float) -> None:
        step_s = self._world.config.step_s
        if seconds <= 0:
            # Polling still lets the world move on.
            self._world.step(step_s)
            return
        remaining = seconds
        while remaining > 1e-9:
            dt = min(step_s, remaining)
            self._world.step(dt)
            remaining -= dt


def world_config_from_dict(data: Mapping[str, Any]) -> WorldConfig:
    base = WorldConfig()
    known = {item.name for item in fields(WorldConfig)}
    for key, value in data.items():
        if key not in known:
            raise ValueError(f"Unknown world config key {key!r}.")
        setattr(base, key, value)
    return base


@dataclass
class SimulatedHardware:
    world: DifferentialDriveWorld
    motors: SimMotorDriver
    encoders: SimEncoderBank
    sensor: SimPositionSensor
    clock: SimClock


def build_sim_hardware(config: Optional[WorldConfig] = None) -> SimulatedHardware:
    world = DifferentialDriveWorld(config)
    world.connect()
    return SimulatedHardware(
        world=world,
        motors=SimMotorDriver(world),
        encoders=SimEncoderBank(world),
        sensor=SimPositionSensor(world),
        clock=SimClock(world),
    )

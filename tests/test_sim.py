import json

import pytest

from pulsenav_core import (
    DriveConfig,
    DrivePrimitives,
    MotionTimeoutError,
    PoseCorrector,
    SensorUnavailableError,
    Side,
    heading_error,
)
from pulsenav_sim.demo import DemoConfig, main, run_demo
from pulsenav_sim.world import DifferentialDriveWorld, WorldConfig, build_sim_hardware, world_config_from_dict


def make_robot(config=None, drive_config=None):
    hardware = build_sim_hardware(config)
    drive = DrivePrimitives(hardware.motors, hardware.encoders, hardware.clock, config=drive_config)
    corrector = PoseCorrector(drive, hardware.sensor)
    return hardware, drive, corrector


def test_world_requires_connect() -> None:
    world = DifferentialDriveWorld()

    with pytest.raises(RuntimeError):
        world.step(0.01)


def test_world_config_rejects_unknown_keys() -> None:
    assert world_config_from_dict({"start_x": 5.0}).start_x == 5.0
    with pytest.raises(ValueError):
        world_config_from_dict({"wheel_count": 4})


def test_move_forward_covers_requested_distance() -> None:
    hardware, drive, _ = make_robot()

    drive.move_forward(20, 10)

    pose = hardware.world.pose
    assert 10.0 <= pose.x - 10.0 < 10.1
    assert pose.y == pytest.approx(10.0)
    assert pose.heading == pytest.approx(0.0)
    assert hardware.world.power(Side.LEFT) == 0.0
    assert hardware.world.power(Side.RIGHT) == 0.0


def test_turn_right_then_left_returns_to_start_heading() -> None:
    hardware, drive, _ = make_robot()

    drive.turn_right(25, 90)
    after_right = hardware.world.pose.heading
    drive.turn_left(25, 90)

    assert abs(heading_error(after_right, 270.0)) < 1.0
    assert abs(heading_error(hardware.world.pose.heading, 0.0)) < 1.0


def test_driving_past_deadline_times_out() -> None:
    hardware, drive, _ = make_robot(drive_config=DriveConfig(timeout_s=0.5))

    with pytest.raises(MotionTimeoutError):
        drive.move_forward(20, 1000)

    assert hardware.world.time_s == pytest.approx(0.5, abs=0.01)
    assert hardware.world.power(Side.LEFT) == 0.0
    assert hardware.world.power(Side.RIGHT) == 0.0


def test_correct_heading_converges_across_zero() -> None:
    hardware, _, corrector = make_robot()
    hardware.world.place(20.0, 20.0, 350.0)

    result = corrector.correct_heading(10.0)

    assert result.pulses > 0
    assert set(result.directions) == {1}
    assert abs(heading_error(hardware.world.pose.heading, 10.0)) <= 1.0


def test_check_x_aligns_then_closes_gap() -> None:
    hardware, _, corrector = make_robot()
    hardware.world.place(20.0, 20.0, 4.0)

    result = corrector.check_x(22.0)

    pose = hardware.world.pose
    assert abs(heading_error(pose.heading, 0.0)) <= 1.0
    assert abs(pose.x - 22.0) <= 0.25
    assert result.final_value == pytest.approx(pose.x)


def test_check_y_backs_up_when_overshot() -> None:
    hardware, _, corrector = make_robot()
    hardware.world.place(20.0, 21.0, 92.0)

    result = corrector.check_y(20.0)

    assert set(result.directions) == {-1}
    assert abs(hardware.world.pose.y - 20.0) <= 0.25


def test_check_y_hidden_robot_stays_put() -> None:
    hardware, _, corrector = make_robot()
    hardware.sensor.visible = False

    with pytest.raises(SensorUnavailableError):
        corrector.check_y(30.0)

    assert hardware.world.pose.y == pytest.approx(10.0)
    assert hardware.world.time_s == 0.0


def test_run_demo_default_steps(tmp_path, capsys) -> None:
    outcomes = run_demo(DemoConfig(), output_dir=tmp_path, run_id="demo")

    assert outcomes and all(outcome.ok for outcome in outcomes)
    lines = (tmp_path / "demo.jsonl").read_text(encoding="utf-8").strip().splitlines()
    final = json.loads(lines[-1])
    assert final["event"] == "final_pose"
    assert abs(final["payload"]["x"] - 22.0) <= 0.25
    assert abs(final["payload"]["y"] - 16.0) <= 0.25
    assert "final pose" in capsys.readouterr().out


def test_main_reads_config_file(tmp_path, capsys) -> None:
    config_path = tmp_path / "demo.yaml"
    config_path.write_text(
        "\n".join(
            [
                "run_id: from-file",
                "world:",
                "  start_heading: 3.0",
                "steps:",
                "  - {op: check_x, target_x: 11}",
            ]
        ),
        encoding="utf-8",
    )

    main(["--config", str(config_path), "--output-dir", str(tmp_path)])

    assert (tmp_path / "from-file.jsonl").exists()
    assert "check_x(target_x=11) ok" in capsys.readouterr().out


def test_sensor_noise_is_seeded() -> None:
    config = WorldConfig(sensor_noise=0.1, seed=7)
    first = build_sim_hardware(config).sensor
    second = build_sim_hardware(WorldConfig(sensor_noise=0.1, seed=7)).sensor

    assert [first.read_x() for _ in range(3)] == [second.read_x() for _ in range(3)]

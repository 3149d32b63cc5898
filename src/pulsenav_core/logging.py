"""Structured logging for motion runs."""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Mapping, Optional


class MotionLogger:
    def __init__(self, output_dir: Path, run_id: str) -> None:
        self._output_dir = output_dir
        self._run_id = run_id
        self._file: Optional[Path] = None
        self._handle = None

    @property
    def path(self) -> Optional[Path]:
        return self._file

    def start(self) -> None:
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._file = self._output_dir / f"{self._run_id}.jsonl"
        self._handle = self._file.open("w", encoding="utf-8")

    def log_event(self, event: str, timestamp_s: float, payload: Any) -> None:
        if not self._handle:
            return
        record = {
            "event": event,
            "timestamp_s": timestamp_s,
            "payload": _to_record(payload),
        }
        self._handle.write(json.dumps(record) + "\n")
        self._handle.flush()

    def stop(self) -> None:
        if self._handle:
            self._handle.close()
            self._handle = None


def _to_record(payload: Any) -> Any:
    if is_dataclass(payload) and not isinstance(payload, type):
        return _to_record(asdict(payload))
    if isinstance(payload, Enum):
        return payload.value
    if isinstance(payload, Mapping):
        return {str(key): _to_record(value) for key, value in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [_to_record(value) for value in payload]
    return payload

#!/usr/bin/env python3
"""Open-loop timed sequencer that drives the rover around a square."""
import math
from enum import Enum
from typing import NamedTuple


class SequencerState(Enum):
    ADVANCING = 0
    PAUSED_AFTER_ADVANCE = 1
    TURNING = 2
    PAUSED_AFTER_TURN = 3


class VelocityCommand(NamedTuple):
    linear_x: float = 0.0
    angular_z: float = 0.0

    @classmethod
    def stop(cls):
        return cls(0.0, 0.0)


class MotionSequencer:
    """
    Cycles ADVANCING -> PAUSED_AFTER_ADVANCE -> TURNING -> PAUSED_AFTER_TURN.

    Every state has a fixed command and a duration derived from the
    motion parameters. `tick(now)` returns the command of the state that
    was active when it was called, then moves to the next state once the
    time spent in the current one reaches its duration.
    """

    def __init__(self,
                 linear_speed: float = 0.05,
                 angular_speed: float = math.pi / 4,
                 side_length: float = 0.5,
                 turn_angle: float = math.pi / 2,
                 pause_duration: float = 1.0,
                 start_time=None):
        if linear_speed <= 0.0:
            raise ValueError(f"linear_speed must be positive, got {linear_speed}")
        if angular_speed <= 0.0:
            raise ValueError(f"angular_speed must be positive, got {angular_speed}")
        if side_length < 0.0:
            raise ValueError(f"side_length must not be negative, got {side_length}")
        if turn_angle < 0.0:
            raise ValueError(f"turn_angle must not be negative, got {turn_angle}")
        if pause_duration < 0.0:
            raise ValueError(f"pause_duration must not be negative, got {pause_duration}")

        self.linear_speed = float(linear_speed)
        self.angular_speed = float(angular_speed)
        self.side_length = float(side_length)
        self.turn_angle = float(turn_angle)
        self.pause_duration = float(pause_duration)

        # state -> (command, duration in seconds, next state)
        self._transitions = {
            SequencerState.ADVANCING: (
                VelocityCommand(self.linear_speed, 0.0),
                self.side_length / self.linear_speed,
                SequencerState.PAUSED_AFTER_ADVANCE),
            SequencerState.PAUSED_AFTER_ADVANCE: (
                VelocityCommand.stop(),
                self.pause_duration,
                SequencerState.TURNING),
            SequencerState.TURNING: (
                VelocityCommand(0.0, self.angular_speed),
                self.turn_angle / self.angular_speed,
                SequencerState.PAUSED_AFTER_TURN),
            SequencerState.PAUSED_AFTER_TURN: (
                VelocityCommand.stop(),
                self.pause_duration,
                SequencerState.ADVANCING),
        }

        self.state = SequencerState.ADVANCING
        self.state_entry_time = start_time
        self.sides_completed = 0

    @property
    def laps_completed(self):
        return self.sides_completed // 4

    @property
    def current_side(self):
        """Side (1-4) being driven, or the one just driven while pausing or turning."""
        if self.state == SequencerState.ADVANCING:
            return self.sides_completed % 4 + 1
        return (self.sides_completed - 1) % 4 + 1

    def duration(self, state: SequencerState) -> float:
        return self._transitions[state][1]

    def command(self, state: SequencerState) -> VelocityCommand:
        return self._transitions[state][0]

    def elapsed(self, now: float) -> float:
        if self.state_entry_time is None:
            return 0.0
        return now - self.state_entry_time

    def reset(self, now=None):
        self.state = SequencerState.ADVANCING
        self.state_entry_time = now
        self.sides_completed = 0

    def tick(self, now: float) -> VelocityCommand:
        if self.state_entry_time is None:
            self.state_entry_time = now

        command, duration, next_state = self._transitions[self.state]

        if now - self.state_entry_time >= duration:
            if self.state == SequencerState.ADVANCING:
                self.sides_completed += 1
            self.state = next_state
            self.state_entry_time = now

        return command

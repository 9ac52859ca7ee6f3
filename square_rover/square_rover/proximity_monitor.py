#!/usr/bin/env python3
"""Latest-reading store for the three IR range sensors plus a threshold check."""
import threading
from enum import Enum
from typing import List, NamedTuple, Optional


class Side(Enum):
    FRONT = 'front'
    LEFT = 'left'
    RIGHT = 'right'


class RangeReading(NamedTuple):
    distance: float
    stamp: Optional[float] = None


class ProximityWarning(NamedTuple):
    side: Side
    distance: float


class ProximityMonitor:
    """
    Holds one reading slot per side; the newest reading always wins.

    `check()` reports every side whose stored distance is strictly below
    `threshold`. The threshold is in the same unit as the readings
    (millimeters for the rover's IR sensors); `meters_per_unit` converts
    a stored distance to meters for display only.
    """

    def __init__(self, threshold: float = 150.0, meters_per_unit: float = 0.001):
        self.threshold = float(threshold)
        self.meters_per_unit = float(meters_per_unit)

        self._lock = threading.Lock()
        self._readings = {side: None for side in Side}

    def update(self, side: Side, reading) -> None:
        if not isinstance(reading, RangeReading):
            reading = RangeReading(float(reading))
        with self._lock:
            self._readings[side] = reading

    def reading(self, side: Side) -> Optional[RangeReading]:
        with self._lock:
            return self._readings[side]

    def check(self) -> List[ProximityWarning]:
        with self._lock:
            snapshot = dict(self._readings)

        warnings = []
        for side in Side:
            reading = snapshot[side]
            # sides that never reported stay silent
            if reading is None:
                continue
            if reading.distance < self.threshold:
                warnings.append(ProximityWarning(side, reading.distance))
        return warnings

    def to_meters(self, distance: float) -> float:
        return distance * self.meters_per_unit

import math
import threading

import pytest

from square_rover.proximity_monitor import ProximityMonitor, ProximityWarning, RangeReading, Side


def sides(warnings):
    return {warning.side for warning in warnings}


def test_front_and_right_too_close():
    monitor = ProximityMonitor()
    monitor.update(Side.FRONT, RangeReading(100.0))
    monitor.update(Side.LEFT, RangeReading(200.0))
    monitor.update(Side.RIGHT, RangeReading(140.0))

    assert monitor.check() == [
        ProximityWarning(Side.FRONT, 100.0),
        ProximityWarning(Side.RIGHT, 140.0),
    ]


def test_threshold_is_strict():
    monitor = ProximityMonitor(threshold=150.0)
    monitor.update(Side.FRONT, 150.0)
    monitor.update(Side.LEFT, 149.999)
    assert sides(monitor.check()) == {Side.LEFT}


def test_no_reading_means_no_warning():
    monitor = ProximityMonitor()
    assert monitor.check() == []
    assert monitor.reading(Side.FRONT) is None


def test_latest_reading_wins():
    monitor = ProximityMonitor()
    monitor.update(Side.LEFT, RangeReading(50.0, stamp=2.0))
    monitor.update(Side.LEFT, RangeReading(500.0, stamp=1.0))
    assert monitor.check() == []
    assert monitor.reading(Side.LEFT) == RangeReading(500.0, 1.0)


def test_repeated_update_is_idempotent():
    monitor = ProximityMonitor()
    monitor.update(Side.FRONT, 100.0)
    first = monitor.check()
    for _ in range(5):
        monitor.update(Side.FRONT, 100.0)
    assert monitor.check() == first


def test_nan_reading_is_stored_but_never_warns():
    monitor = ProximityMonitor()
    monitor.update(Side.RIGHT, float('nan'))
    assert math.isnan(monitor.reading(Side.RIGHT).distance)
    assert monitor.check() == []


def test_configurable_threshold_and_units():
    monitor = ProximityMonitor(threshold=0.15, meters_per_unit=1.0)
    monitor.update(Side.FRONT, 0.1)
    assert sides(monitor.check()) == {Side.FRONT}
    assert monitor.to_meters(0.1) == 0.1
    assert ProximityMonitor().to_meters(100.0) == pytest.approx(0.1)


def test_concurrent_updates_keep_one_reading_per_side():
    monitor = ProximityMonitor()

    def writer(side, value):
        for _ in range(1000):
            monitor.update(side, value)

    threads = [threading.Thread(target=writer, args=(side, 10.0)) for side in Side]
    for thread in threads:
        thread.start()
    for _ in range(100):
        assert len(monitor.check()) <= 3
    for thread in threads:
        thread.join()

    assert sides(monitor.check()) == set(Side)

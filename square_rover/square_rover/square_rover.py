#!/usr/bin/env python3
import math

import rclpy
from rclpy.node import Node
from rclpy.signals import SignalHandlerOptions
from rcl_interfaces.msg import ParameterDescriptor
from geometry_msgs.msg import Twist
from sensor_msgs.msg import Range

from square_rover.motion_sequencer import MotionSequencer, SequencerState, VelocityCommand
from square_rover.proximity_monitor import ProximityMonitor, RangeReading, Side


def to_twist(command):
    msg = Twist()
    msg.linear.x = float(command.linear_x)
    msg.angular.z = float(command.angular_z)
    return msg


class SquareRover(Node):
    def __init__(self, **kwargs):
        super().__init__('square_rover', **kwargs)

        # Motion parameters (tune these for your robot)
        self._declare_number('linear_speed', 0.05)          # m/s
        self._declare_number('angular_speed', math.pi / 4)  # rad/s
        self._declare_number('side_length', 0.5)            # m
        self._declare_number('turn_angle', math.pi / 2)     # rad
        self._declare_number('pause_duration', 1.0)         # s
        self._declare_number('loop_rate', 10.0)             # Hz

        # IR sensors report millimeters
        self._declare_number('warning_threshold', 150.0)
        self._declare_number('meters_per_unit', 0.001)

        self.declare_parameter('cmd_vel_topic', 'cmd_vel')
        self.declare_parameter('front_topic', 'ir_front_sensor')
        self.declare_parameter('left_topic', 'ir_left_sensor')
        self.declare_parameter('right_topic', 'ir_right_sensor')

        loop_rate = self._number('loop_rate')
        if loop_rate <= 0.0:
            raise ValueError(f"loop_rate must be positive, got {loop_rate}")

        self.sequencer = MotionSequencer(
            linear_speed=self._number('linear_speed'),
            angular_speed=self._number('angular_speed'),
            side_length=self._number('side_length'),
            turn_angle=self._number('turn_angle'),
            pause_duration=self._number('pause_duration'),
            start_time=self.now_sec(),
        )
        self.monitor = ProximityMonitor(
            threshold=self._number('warning_threshold'),
            meters_per_unit=self._number('meters_per_unit'),
        )

        self.pub = self.create_publisher(Twist, self._param('cmd_vel_topic'), 10)

        topics = {
            Side.FRONT: self._param('front_topic'),
            Side.LEFT: self._param('left_topic'),
            Side.RIGHT: self._param('right_topic'),
        }
        for side, topic in topics.items():
            self.create_subscription(Range, topic, self._range_callback(side), 10)

        self.timer = self.create_timer(1.0 / loop_rate, self.loop)

        self.get_logger().info(
            f"Square rover started. forward_time={self.sequencer.duration(SequencerState.ADVANCING):.2f}s, "
            f"turn_time={self.sequencer.duration(SequencerState.TURNING):.2f}s")
        self.get_logger().info(f"Starting forward side {self.sequencer.current_side}")

    def _declare_number(self, name, default):
        # integer overrides (loop_rate:=10) are accepted and read back as float
        self.declare_parameter(name, default, ParameterDescriptor(dynamic_typing=True))

    def _param(self, name):
        return self.get_parameter(name).value

    def _number(self, name):
        return float(self._param(name))

    def now_sec(self):
        return self.get_clock().now().nanoseconds / 1e9

    def _range_callback(self, side):
        def callback(msg):
            stamp = msg.header.stamp.sec + msg.header.stamp.nanosec / 1e9
            self.monitor.update(side, RangeReading(msg.range, stamp))
        return callback

    def collision_check(self):
        warnings = self.monitor.check()
        for warning in warnings:
            self.get_logger().warn(
                f"Collision risk! The robot is {self.monitor.to_meters(warning.distance):.2f} "
                f"meters from an obstacle on the {warning.side.value} side")
        return warnings

    def loop(self):
        self.collision_check()

        previous = self.sequencer.state
        command = self.sequencer.tick(self.now_sec())
        if self.sequencer.state != previous:
            self._log_transition(self.sequencer.state)

        self.pub.publish(to_twist(command))

    def _log_transition(self, state):
        side = self.sequencer.current_side
        if state == SequencerState.ADVANCING:
            self.get_logger().info(f"Starting forward side {side}")
        elif state == SequencerState.TURNING:
            self.get_logger().info(f"Turning (side {side})")
        elif state == SequencerState.PAUSED_AFTER_ADVANCE and side == 4:
            self.get_logger().info(f"Square completed ({self.sequencer.laps_completed} total)")

    def stop(self):
        self.pub.publish(to_twist(VelocityCommand.stop()))


def main(args=None):
    # keep the context alive on SIGINT so the stop command still goes out
    rclpy.init(args=args, signal_handler_options=SignalHandlerOptions.NO)
    node = SquareRover()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        node.get_logger().info("Interrupted, stopping rover")
    finally:
        node.stop()
        node.destroy_node()
        rclpy.try_shutdown()


if __name__ == '__main__':
    main()

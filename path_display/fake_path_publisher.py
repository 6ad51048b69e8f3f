#!/usr/bin/env python3

import rclpy
from rclpy.node import Node
from rclpy.qos import QoSProfile, ReliabilityPolicy, HistoryPolicy
from geometry_msgs.msg import PoseStamped, Point, Quaternion
from nav_msgs.msg import Path

from path_display.demo_path import sine_path


class FakePathPublisher(Node):
    def __init__(self):
        super().__init__('fake_path_publisher')

        # --- Parameters ---
        self.declare_parameter('output_topic', '/path')
        self.declare_parameter('frame_id', 'map')
        self.declare_parameter('num_poses', 20)
        self.declare_parameter('length', 2.0)
        self.declare_parameter('amplitude', 0.3)
        self.declare_parameter('wavelength', 1.0)
        self.declare_parameter('publish_rate', 2.0)
        # Phase advance per second, so the path visibly moves
        self.declare_parameter('phase_speed', 0.5)

        self.output_topic = self.get_parameter('output_topic').value
        self.frame_id = self.get_parameter('frame_id').value
        self.num_poses = self.get_parameter('num_poses').value
        self.length = self.get_parameter('length').value
        self.amplitude = self.get_parameter('amplitude').value
        self.wavelength = self.get_parameter('wavelength').value
        self.phase_speed = self.get_parameter('phase_speed').value
        publish_rate = self.get_parameter('publish_rate').value

        self.phase = 0.0
        self.period = 1.0 / publish_rate

        path_qos = QoSProfile(
            reliability=ReliabilityPolicy.RELIABLE,
            history=HistoryPolicy.KEEP_LAST,
            depth=1
        )
        self.path_publisher = self.create_publisher(Path, self.output_topic, path_qos)
        self.timer = self.create_timer(self.period, self.timer_callback)

        self.get_logger().info("FakePathPublisher initialized.")
        self.get_logger().info(f"Publishing to: {self.output_topic} (Frame: {self.frame_id})")
        self.get_logger().info(f"Poses: {self.num_poses}, length: {self.length}, amplitude: {self.amplitude}")

    def timer_callback(self):
        path_msg = Path()
        path_msg.header.stamp = self.get_clock().now().to_msg()
        path_msg.header.frame_id = self.frame_id

        for pose in sine_path(self.num_poses, self.length, self.amplitude, self.wavelength, self.phase):
            stamped = PoseStamped()
            stamped.header = path_msg.header
            x, y, z = pose.position
            qx, qy, qz, qw = pose.orientation
            stamped.pose.position = Point(x=x, y=y, z=z)
            stamped.pose.orientation = Quaternion(x=qx, y=qy, z=qz, w=qw)
            path_msg.poses.append(stamped)

        self.path_publisher.publish(path_msg)
        self.phase += self.phase_speed * self.period
        self.get_logger().debug(f"Published Path with {len(path_msg.poses)} poses.")


def main(args=None):
    rclpy.init(args=args)
    node = FakePathPublisher()
    try:
        rclpy.spin(node)
    except KeyboardInterrupt:
        node.get_logger().info("KeyboardInterrupt received. Shutting down.")
    finally:
        node.destroy_node()
        rclpy.shutdown()


if __name__ == '__main__':
    main()

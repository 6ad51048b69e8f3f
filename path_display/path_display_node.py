#!/usr/bin/env python3

import rclpy
from rclpy.node import Node
from rclpy.callback_groups import MutuallyExclusiveCallbackGroup
from rclpy.executors import MultiThreadedExecutor
from rcl_interfaces.msg import SetParametersResult
from std_srvs.srv import Trigger
from visualization_msgs.msg import MarkerArray

from path_display.config import apply_config, load_config
from path_display.display import PathDisplay
from path_display.errors import ConfigError
from path_display.markers import clear_marker_array, scene_to_marker_array
from path_display.ros_adapters import RclpyTransport, TimerRenderTick, make_tf_resolver
from path_display.scene import Scene

# Parameters only read at startup
STARTUP_ONLY = ('config_file', 'fixed_frame', 'marker_topic', 'render_rate', 'title')


class PathDisplayNode(Node):
    def __init__(self):
        super().__init__('path_display_node')

        # --- Parameters ---
        # Values from config_file become the defaults; launch/CLI overrides still win.
        self.declare_parameter('config_file', '')
        config_file = self.get_parameter('config_file').get_parameter_value().string_value
        defaults = load_config(config_file, self.get_logger())
        for name, value in defaults.items():
            self.declare_parameter(name, value)
        self.config = {name: self.get_parameter(name).value for name in defaults}

        # --- Callback groups ---
        # Messages, render ticks and parameter/service calls may run concurrently
        # under the MultiThreadedExecutor; PathDisplay serializes them.
        self.message_group = MutuallyExclusiveCallbackGroup()
        self.render_group = MutuallyExclusiveCallbackGroup()

        # --- TF2, display and publisher ---
        frames, self.tf_listener = make_tf_resolver(self, self.config['fixed_frame'])
        self.render_tick = TimerRenderTick(self, self.config['render_rate'], self.render_group)
        self.display = PathDisplay(
            Scene(),
            frames,
            transport=RclpyTransport(self, self.message_group),
            render_tick=self.render_tick,
            logger=self.get_logger(),
            title=self.config['title'],
        )
        self.marker_pub = self.create_publisher(MarkerArray, self.config['marker_topic'], 10)
        self.display.add_render_listener(self.publish_markers)
        self.display.add_reset_listener(self.clear_markers)

        apply_config(self.display, self.config)
        listing = self.display.refresh_topics()
        self.get_logger().info(f"Discovered {len(listing.topics)} path topic(s): {listing.topics}")

        self.srv = self.create_service(Trigger, '~/list_topics', self.list_topics_callback)
        self.add_on_set_parameters_callback(self.on_set_parameters)

        self.get_logger().info(
            f"Path display '{self.display.title}' started. Subscribed to '{self.config['topic']}', "
            f"fixed frame '{self.config['fixed_frame']}', markers on '{self.config['marker_topic']}'.")

    def publish_markers(self, root_visual):
        marker_array = scene_to_marker_array(
            root_visual,
            self.config['fixed_frame'],
            self.get_clock().now().to_msg(),
            line_width=self.config['line_width'],
        )
        self.marker_pub.publish(marker_array)

    def clear_markers(self):
        self.marker_pub.publish(
            clear_marker_array(self.config['fixed_frame'], self.get_clock().now().to_msg()))

    def list_topics_callback(self, request, response):
        listing = self.display.refresh_topics()
        response.success = True
        response.message = '\n'.join(listing.topics)
        self.get_logger().info(f"Listed {len(listing.topics)} path topic(s).")
        return response

    def on_set_parameters(self, params):
        updated = dict(self.config)
        changed = set()
        for param in params:
            if param.name not in self.config:
                continue
            if param.name in STARTUP_ONLY:
                return SetParametersResult(
                    successful=False, reason=f"'{param.name}' can only be set at startup")
            updated[param.name] = param.value
            changed.add(param.name)

        if not changed:
            return SetParametersResult(successful=True)

        try:
            apply_config(self.display, updated, changed)
        except ConfigError as e:
            self.get_logger().warning(f"Rejected parameter update: {e}")
            return SetParametersResult(successful=False, reason=str(e))

        self.config = updated
        if 'topic' in changed:
            self.display.refresh_topics()
        self.get_logger().info(f"Applied parameter update: {sorted(changed)}")
        return SetParametersResult(successful=True)

    def destroy_node(self):
        self.display.close()
        super().destroy_node()


def main(args=None):
    rclpy.init(args=args)
    node = PathDisplayNode()
    executor = MultiThreadedExecutor()
    executor.add_node(node)
    try:
        executor.spin()
    except KeyboardInterrupt:
        node.get_logger().info("KeyboardInterrupt received. Shutting down.")
    finally:
        node.destroy_node()
        if rclpy.ok():
            rclpy.shutdown()


if __name__ == '__main__':
    main()

"""rclpy and tf2 implementations of the display's external interfaces."""
import rclpy
from rclpy.duration import Duration
from rclpy.time import Time
from rclpy.qos import DurabilityPolicy, HistoryPolicy, QoSProfile, ReliabilityPolicy

import tf2_ros
from tf2_ros import LookupException, ConnectivityException, ExtrapolationException
from nav_msgs.msg import Path

from path_display import subscription
from path_display.display import RenderTick
from path_display.errors import TransformUnresolved, TransportUnavailable
from path_display.frames import FrameResolver
from path_display.geometry import Pose
from path_display.messages import path_from_msg
from path_display.subscription import Transport

_HISTORY = {
    subscription.HistoryPolicy.KEEP_LAST: HistoryPolicy.KEEP_LAST,
    subscription.HistoryPolicy.KEEP_ALL: HistoryPolicy.KEEP_ALL,
}
_RELIABILITY = {
    subscription.ReliabilityPolicy.RELIABLE: ReliabilityPolicy.RELIABLE,
    subscription.ReliabilityPolicy.BEST_EFFORT: ReliabilityPolicy.BEST_EFFORT,
}
_DURABILITY = {
    subscription.DurabilityPolicy.VOLATILE: DurabilityPolicy.VOLATILE,
    subscription.DurabilityPolicy.TRANSIENT_LOCAL: DurabilityPolicy.TRANSIENT_LOCAL,
}


def to_qos_profile(qos):
    return QoSProfile(
        depth=max(int(qos.depth), 1),
        history=_HISTORY[qos.history],
        reliability=_RELIABILITY[qos.reliability],
        durability=_DURABILITY[qos.durability],
    )


class RclpyTransport(Transport):
    def __init__(self, node, callback_group=None):
        self.node = node
        self.callback_group = callback_group

    def _check(self):
        if not rclpy.ok(context=self.node.context):
            raise TransportUnavailable("rclpy context is not initialized or already shut down")

    def subscribe(self, topic, qos, callback):
        self._check()

        def on_path(msg: Path):
            callback(path_from_msg(msg))

        return self.node.create_subscription(
            Path, topic, on_path, to_qos_profile(qos), callback_group=self.callback_group)

    def unsubscribe(self, handle):
        self._check()
        self.node.destroy_subscription(handle)

    def topic_names_and_types(self):
        self._check()
        return self.node.get_topic_names_and_types()


class TfFrameResolver(FrameResolver):
    """Resolves frames against ``fixed_frame`` through a tf2 buffer."""

    def __init__(self, tf_buffer, fixed_frame, timeout=0.0):
        self.tf_buffer = tf_buffer
        self.fixed_frame = fixed_frame
        self.timeout = Duration(seconds=timeout)

    def resolve(self, frame_id):
        if not frame_id or frame_id == self.fixed_frame:
            return Pose()
        try:
            transform = self.tf_buffer.lookup_transform(
                self.fixed_frame, frame_id, Time(), timeout=self.timeout
            )
        except (LookupException, ConnectivityException, ExtrapolationException) as e:
            raise TransformUnresolved(frame_id, str(e)) from e

        t = transform.transform.translation
        q = transform.transform.rotation
        return Pose.from_values((t.x, t.y, t.z), (q.x, q.y, q.z, q.w))


def make_tf_resolver(node, fixed_frame, cache_time=10.0):
    tf_buffer = tf2_ros.Buffer(cache_time=Duration(seconds=cache_time))
    tf_listener = tf2_ros.TransformListener(tf_buffer, node)
    return TfFrameResolver(tf_buffer, fixed_frame), tf_listener


class TimerRenderTick(RenderTick):
    """Drives render ticks from a ROS timer at a fixed rate."""

    def __init__(self, node, rate, callback_group=None):
        self.node = node
        self.period = 1.0 / rate
        self.callback_group = callback_group
        self._timers = {}

    def connect(self, callback):
        self._timers[callback] = self.node.create_timer(
            self.period, callback, callback_group=self.callback_group)

    def disconnect(self, callback):
        timer = self._timers.pop(callback, None)
        if timer is not None:
            timer.cancel()
            self.node.destroy_timer(timer)

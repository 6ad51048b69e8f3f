import threading

import numpy as np
import pytest

from path_display.display import ManualRenderTick, PathDisplay
from path_display.errors import TransportUnavailable
from path_display.frames import StaticFrameResolver
from path_display.geometry import Pose
from path_display.messages import PathMessage
from path_display.scene import Scene
from path_display.subscription import Transport


class FakeTransport(Transport):
    def __init__(self, topics=None, available=True):
        self.topics = list(topics or [])
        self.available = available
        self.calls = []
        self.callbacks = {}
        self._lock = threading.Lock()

    def subscribe(self, topic, qos, callback):
        if not self.available:
            raise TransportUnavailable('no session')
        with self._lock:
            handle = ('sub', topic, len(self.calls))
            self.calls.append(('subscribe', topic, qos))
            self.callbacks[handle] = callback
        return handle

    def unsubscribe(self, handle):
        with self._lock:
            self.calls.append(('unsubscribe', handle[1]))
            self.callbacks.pop(handle, None)

    def topic_names_and_types(self):
        if not self.available:
            raise TransportUnavailable('no session')
        return self.topics

    def deliver(self, msg):
        with self._lock:
            callbacks = list(self.callbacks.values())
        for callback in callbacks:
            callback(msg)


def same_rotation(q1, q2, atol=1e-9):
    return abs(abs(float(np.dot(q1, q2))) - 1.0) < atol


@pytest.fixture
def scene():
    return Scene()


@pytest.fixture
def frames():
    return StaticFrameResolver(fixed_frame='map')


@pytest.fixture
def transport():
    return FakeTransport(topics=[
        ('/cmd_vel', ['geometry_msgs/msg/Twist']),
        ('/plan', ['nav_msgs/msg/Path']),
        ('/path', ['nav_msgs/msg/Path']),
    ])


@pytest.fixture
def tick():
    return ManualRenderTick()


@pytest.fixture
def display(scene, frames, transport, tick):
    d = PathDisplay(scene, frames, transport=transport, render_tick=tick)
    yield d
    d.close()


@pytest.fixture
def make_path():
    def _make(positions, frame_id='map', orientation=(0.0, 0.0, 0.0, 1.0)):
        return PathMessage(frame_id, tuple(Pose(tuple(map(float, p)), orientation) for p in positions))
    return _make

import logging
import threading

from path_display.indicator_pool import IndicatorPool
from path_display.path_buffer import PathBuffer
from path_display.renderer import PathRenderer
from path_display.style import StyleState
from path_display.subscription import SubscriptionController, TopicListing

DEFAULT_TITLE = 'Path'


class RenderTick:
    """Source of the zero-argument per-frame notification."""

    def connect(self, callback):
        raise NotImplementedError

    def disconnect(self, callback):
        raise NotImplementedError


class ManualRenderTick(RenderTick):
    """Render tick driven explicitly by the host via ``tick()``."""

    def __init__(self):
        self._callbacks = []

    def connect(self, callback):
        self._callbacks.append(callback)

    def disconnect(self, callback):
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def connected(self):
        return bool(self._callbacks)

    def tick(self):
        for callback in list(self._callbacks):
            callback()


class PathDisplay:
    """Draws the latest path message as a line plus per-pose indicators.

    Message callbacks, render ticks and configuration setters may arrive on
    different threads. Every public method takes ``self._lock`` for its whole
    duration, and none of them calls another public method while holding it.
    """

    def __init__(self, scene, frames, transport=None, render_tick=None, logger=None,
                 qos=None, title=''):
        self._lock = threading.Lock()
        self.logger = logger or logging.getLogger(__name__)
        self.title = title or DEFAULT_TITLE

        self.scene = scene
        self.root_visual = scene.create_visual()
        scene.root_visual.add_child(self.root_visual)

        self.style = StyleState()
        self.material = scene.create_material()
        self.material.set_color(self.style.color)

        self.buffer = PathBuffer()
        self.pool = IndicatorPool(scene, self.root_visual, self.material)
        self.renderer = PathRenderer(
            scene, self.root_visual, self.buffer, self.pool, self.style, frames, self.logger)
        self.subscription = SubscriptionController(
            transport, self.on_message, self._reset, self.logger, qos=qos)

        self._topic_list = []
        self._render_listeners = []
        self._reset_listeners = []
        self._closed = False

        self._render_tick = render_tick
        if render_tick is not None:
            render_tick.connect(self.update)

    # --- Message arrival ---

    def on_message(self, msg):
        with self._lock:
            self.buffer.store(msg)

    # --- Render tick ---

    def update(self):
        with self._lock:
            if self._closed:
                return False
            refreshed = self.renderer.update()
            if refreshed:
                self._notify(self._render_listeners, self.root_visual)
            return refreshed

    def add_render_listener(self, listener):
        """Call ``listener(root_visual)`` after every successful render pass."""
        with self._lock:
            self._render_listeners.append(listener)

    def add_reset_listener(self, listener):
        """Call ``listener()`` after a topic or QoS change blanked the display."""
        with self._lock:
            self._reset_listeners.append(listener)

    def _notify(self, listeners, *args):
        for listener in listeners:
            try:
                listener(*args)
            except Exception as e:
                self.logger.error(f"Display listener failed: {e}")

    # --- Subscription ---

    def set_topic(self, name):
        with self._lock:
            return self.subscription.set_topic(name)

    def update_qos(self, depth, history, reliability, durability):
        with self._lock:
            return self.subscription.update_qos(depth, history, reliability, durability)

    def refresh_topics(self):
        """Rediscover path topics; returns the list and the index to pre-select."""
        with self._lock:
            listing = self.subscription.list_candidate_topics()
            self._topic_list = listing.topics
            position = listing.current_index if listing.current_index is not None else 0
            return TopicListing(list(listing.topics), position)

    def get_topic_list(self):
        with self._lock:
            return list(self._topic_list)

    def _reset(self):
        self.pool.reset_poses()
        self.buffer.clear()
        self._notify(self._reset_listeners)

    # --- Style ---

    def set_shape(self, shape):
        with self._lock:
            self.style.set_shape(shape)

    def set_axis_head_visibility(self, visible):
        with self._lock:
            self.style.set_axis_head_visibility(visible)

    def set_axis_dimensions(self, length, radius):
        with self._lock:
            self.style.set_axis_dimensions(length, radius)

    def set_arrow_dimensions(self, shaft_length, shaft_radius, head_length, head_radius):
        with self._lock:
            self.style.set_arrow_dimensions(shaft_length, shaft_radius, head_length, head_radius)

    def set_color(self, color):
        with self._lock:
            self.style.set_color(color)
            # Every arrow shares this material.
            self.material.set_color(self.style.color)

    def set_line_color(self, color):
        with self._lock:
            self.style.set_line_color(color)

    def set_offset(self, x, y, z):
        with self._lock:
            self.style.set_offset(x, y, z)

    def set_frame_resolver(self, frames):
        with self._lock:
            self.renderer.frames = frames

    # --- State ---

    @property
    def pool_size(self):
        with self._lock:
            return len(self.pool)

    @property
    def render_state(self):
        with self._lock:
            return self.renderer.state

    @property
    def line(self):
        with self._lock:
            return self.renderer.line

    def close(self):
        """Stop receiving ticks, then release the subscription and visuals."""
        if self._render_tick is not None:
            self._render_tick.disconnect(self.update)
            self._render_tick = None
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self.subscription.unsubscribe()
            self.scene.destroy_visual(self.root_visual, recursive=True)

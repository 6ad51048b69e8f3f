import logging
from pathlib import Path

import yaml

from path_display.errors import ConfigError
from path_display.style import StyleState
from path_display.subscription import QosSettings

DEFAULT_CONFIG = {
    'topic': '/path',
    'fixed_frame': 'map',
    'marker_topic': 'path_markers',
    'render_rate': 30.0,
    'title': 'Path',
    'shape': 0,
    'shaft_length': 0.23,
    'shaft_radius': 0.01,
    'head_length': 0.07,
    'head_radius': 0.03,
    'axis_length': 0.3,
    'axis_radius': 0.03,
    'axis_head_visible': False,
    'color': [1.0, 0.098, 0.0, 1.0],
    'line_color': [0.098, 1.0, 0.2, 1.0],
    'line_width': 0.01,
    'offset': [0.0, 0.0, 0.0],
    'qos_depth': 10,
    'qos_history': 0,
    'qos_reliability': 0,
    'qos_durability': 0,
}

ARROW_KEYS = ('shaft_length', 'shaft_radius', 'head_length', 'head_radius')
AXIS_KEYS = ('axis_length', 'axis_radius')
QOS_KEYS = ('qos_depth', 'qos_history', 'qos_reliability', 'qos_durability')


def load_config(path=None, logger=None):
    """Return DEFAULT_CONFIG updated with the values found in a YAML file.

    Accepts either a flat mapping or a ROS params file
    (``<node>: {ros__parameters: {...}}``). A missing or unreadable file
    falls back to the defaults.
    """
    logger = logger or logging.getLogger(__name__)
    config = dict(DEFAULT_CONFIG)
    if not path:
        return config

    config_path = Path(path).expanduser()
    if not config_path.exists():
        logger.warning(f"Config file {config_path} not found. Using default configuration.")
        return config

    try:
        with open(config_path, 'r') as f:
            loaded = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Error loading config file: {e}. Using default configuration.")
        return config

    loaded = _unwrap_ros_params(loaded)
    if not isinstance(loaded, dict):
        logger.warning(f"Config file {config_path} does not hold a mapping. Using default configuration.")
        return config

    for key, value in loaded.items():
        if key not in DEFAULT_CONFIG:
            logger.warning(f"Ignoring unknown config key '{key}'.")
            continue
        config[key] = value
    return config


def _unwrap_ros_params(loaded):
    if not isinstance(loaded, dict):
        return loaded
    for value in loaded.values():
        if isinstance(value, dict) and 'ros__parameters' in value:
            return value['ros__parameters']
    return loaded


def apply_config(display, config, keys=None):
    """Push configuration values into a PathDisplay through its setters.

    ``keys`` limits which settings are applied; by default all are. Every
    value is checked before the display is touched, so a rejected update
    leaves it unchanged. Topic and QoS changes trigger a resubscribe, so they
    are applied last and only once even if several QoS keys changed.
    """
    keys = set(config if keys is None else keys)
    try:
        # Dry run on a scratch style.
        _apply_style(StyleState(), config, keys)
        if keys & set(QOS_KEYS):
            QosSettings.from_ints(*(config[k] for k in QOS_KEYS))
        if 'topic' in keys and not isinstance(config['topic'], str):
            raise ConfigError(f"topic must be a string, got {config['topic']!r}")

        _apply_style(display, config, keys)
        if keys & set(QOS_KEYS):
            display.update_qos(*(config[k] for k in QOS_KEYS))
        if 'topic' in keys:
            display.set_topic(config['topic'])
    except (TypeError, ValueError, KeyError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def _apply_style(target, config, keys):
    if 'shape' in keys:
        target.set_shape(config['shape'])
    if 'axis_head_visible' in keys:
        target.set_axis_head_visibility(config['axis_head_visible'])
    if keys & set(AXIS_KEYS):
        target.set_axis_dimensions(*(config[k] for k in AXIS_KEYS))
    if keys & set(ARROW_KEYS):
        target.set_arrow_dimensions(*(config[k] for k in ARROW_KEYS))
    if 'color' in keys:
        target.set_color(config['color'])
    if 'line_color' in keys:
        target.set_line_color(config['line_color'])
    if 'offset' in keys:
        offset = list(config['offset'])
        if len(offset) != 3:
            raise ConfigError(f"offset needs 3 components, got {len(offset)}")
        target.set_offset(*offset)

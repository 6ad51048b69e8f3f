class PathDisplayError(Exception):
    """Base class for path display errors."""


class TransformUnresolved(PathDisplayError):
    """The reference frame of a path could not be resolved to a world pose."""

    def __init__(self, frame_id, reason=''):
        self.frame_id = frame_id
        self.reason = reason
        message = f"Unable to get frame pose: {frame_id}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class TransportUnavailable(PathDisplayError):
    """No middleware session is available to subscribe or list topics."""


class ConfigError(PathDisplayError):
    """A configuration value could not be applied."""

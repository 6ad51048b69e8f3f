class PathBuffer:
    """Holds the most recent path message.

    Not thread safe on its own; the owning display serializes access.
    """

    def __init__(self):
        self._msg = None

    def store(self, msg):
        self._msg = msg

    def peek(self):
        return self._msg

    def clear(self):
        self._msg = None

    @property
    def empty(self):
        return self._msg is None

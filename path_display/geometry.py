from typing import NamedTuple, Tuple

import numpy as np
from scipy.spatial.transform import Rotation

# Quaternions are (x, y, z, w), the order used by geometry_msgs.
IDENTITY_QUATERNION = (0.0, 0.0, 0.0, 1.0)
ZERO_VECTOR = (0.0, 0.0, 0.0)


def normalize_quaternion(q):
    q = np.asarray(q, dtype=np.float64)
    norm = np.linalg.norm(q)
    if norm < 1e-12 or not np.isfinite(norm):
        return np.array(IDENTITY_QUATERNION, dtype=np.float64)
    return q / norm


def quaternion_from_euler(roll, pitch, yaw):
    return tuple(float(v) for v in Rotation.from_euler('xyz', [roll, pitch, yaw]).as_quat())


def quaternion_multiply(q1, q2):
    """Hamilton product q1 * q2: rotate by q2 first, then by q1."""
    r = Rotation.from_quat(normalize_quaternion(q1)) * Rotation.from_quat(normalize_quaternion(q2))
    return tuple(float(v) for v in r.as_quat())


def rotate_vector(q, v):
    return Rotation.from_quat(normalize_quaternion(q)).apply(np.asarray(v, dtype=np.float64))


# Arrow meshes point along their local +Z; this turns them onto the pose's +X.
ARROW_CORRECTION = quaternion_from_euler(0.0, 1.57, 0.0)


class Pose(NamedTuple):
    position: Tuple[float, float, float] = ZERO_VECTOR
    orientation: Tuple[float, float, float, float] = IDENTITY_QUATERNION

    @classmethod
    def from_values(cls, position, orientation=IDENTITY_QUATERNION):
        return cls(
            tuple(float(v) for v in position),
            tuple(float(v) for v in normalize_quaternion(orientation)),
        )

    def compose(self, other):
        """Return self * other, i.e. `other` expressed in the parent of self."""
        position = np.asarray(self.position) + rotate_vector(self.orientation, other.position)
        return Pose(
            tuple(float(v) for v in position),
            quaternion_multiply(self.orientation, other.orientation),
        )


IDENTITY_POSE = Pose()

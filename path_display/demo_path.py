import numpy as np

from path_display.geometry import Pose, quaternion_from_euler


def sine_path(num_poses, length=2.0, amplitude=0.3, wavelength=1.0, phase=0.0, z=0.0):
    """Poses along y = A sin(2 pi x / wavelength + phase), heading along the curve."""
    if num_poses <= 0:
        return ()
    xs = np.linspace(0.0, length, num_poses)
    k = 2.0 * np.pi / wavelength
    ys = amplitude * np.sin(k * xs + phase)
    # Tangent direction for the yaw of each pose
    dy_dx = amplitude * k * np.cos(k * xs + phase)
    yaws = np.arctan2(dy_dx, 1.0)

    return tuple(
        Pose((float(x), float(y), float(z)), quaternion_from_euler(0.0, 0.0, float(yaw)))
        for x, y, yaw in zip(xs, ys, yaws)
    )

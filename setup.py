from setuptools import find_packages, setup
import os
from glob import glob

package_name = 'path_display'

setup(
    name=package_name,
    version='0.1.0',
    packages=find_packages(exclude=['test']),
    data_files=[
        ('share/ament_index/resource_index/packages',
            ['resource/' + package_name]),
        ('share/' + package_name, ['package.xml']),
        # Config files
        (os.path.join('share', package_name, 'config'),
         glob(os.path.join('config', '*'))),
        # Launch files
        (os.path.join('share', package_name, 'launch'),
         glob(os.path.join('launch', '*'))),
    ],
    # rclpy, tf2_ros and the message packages come from the ROS distribution (package.xml).
    install_requires=['setuptools', 'numpy', 'scipy', 'PyYAML'],
    extras_require={
        'test': ['pytest'],
    },
    zip_safe=True,
    maintainer='aldoghry',
    maintainer_email='aldoghry@todo.todo',
    description='Live nav_msgs/Path visualization with pooled arrow and axis indicators',
    license='Apache-2.0',
    entry_points={
        'console_scripts': [
            'path_display_node = path_display.path_display_node:main',
            'fake_path_publisher = path_display.fake_path_publisher:main',
        ],
    },
)

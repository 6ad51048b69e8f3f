import os

from ament_index_python.packages import get_package_share_directory
from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.conditions import IfCondition
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    """
    Launches the path display, optionally with the fake path publisher
    so the display can be checked without a planner running.
    """
    default_params = os.path.join(
        get_package_share_directory('path_display'), 'config', 'path_display.yaml')

    params_file = LaunchConfiguration('params_file')
    use_fake_path = LaunchConfiguration('use_fake_path')

    # 1. Path display, publishing MarkerArray for RViz
    path_display_node = Node(
        package='path_display',
        executable='path_display_node',
        name='path_display_node',
        parameters=[params_file],
        output='screen'
    )

    # 2. Sine-shaped demo path on /path
    fake_path_node = Node(
        package='path_display',
        executable='fake_path_publisher',
        name='fake_path_publisher',
        condition=IfCondition(use_fake_path),
        output='screen'
    )

    return LaunchDescription([
        DeclareLaunchArgument('params_file', default_value=default_params,
                              description='Parameters for path_display_node'),
        DeclareLaunchArgument('use_fake_path', default_value='false',
                              description='Also start fake_path_publisher'),
        path_display_node,
        fake_path_node,
    ])

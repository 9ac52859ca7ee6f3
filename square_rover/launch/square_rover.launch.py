from launch import LaunchDescription
from launch.actions import DeclareLaunchArgument
from launch.substitutions import LaunchConfiguration
from launch_ros.actions import Node


def generate_launch_description():
    use_sim_time = LaunchConfiguration('use_sim_time')

    return LaunchDescription([
        DeclareLaunchArgument(
            'use_sim_time',
            default_value='false',
            description='Use the /clock topic instead of wall time'
        ),

        # Drive the square and report IR proximity warnings; no package given,
        # so the pip-installed console script is looked up on PATH
        Node(
            executable='square_rover',
            name='square_rover',
            output='screen',
            parameters=[{
                'use_sim_time': use_sim_time,
                'linear_speed': 0.05,
                'side_length': 0.5,
                'pause_duration': 1.0,
                'warning_threshold': 150.0,
                'loop_rate': 10.0,
            }]
        ),
    ])

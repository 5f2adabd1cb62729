"""
组件模块

这个模块包含组件生命周期和双目相机组件
"""

from questnav.core.behaviour import Behaviour, run_behaviour
from questnav.core.apriltag_detector import ApriltagDetector

__all__ = ['Behaviour', 'run_behaviour', 'ApriltagDetector']

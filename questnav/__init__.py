"""
QuestNav双目相机模块

打开左右两个USB相机并持续采集图像，保存每个相机的内参矩阵
"""

from questnav.core import ApriltagDetector, Behaviour, run_behaviour
from questnav.camera import CameraDevice, CameraIntrinsics, WebCamFeed, enumerate_devices

__all__ = ['ApriltagDetector', 'Behaviour', 'run_behaviour',
           'CameraDevice', 'CameraIntrinsics', 'WebCamFeed', 'enumerate_devices']

__version__ = '0.1.0'

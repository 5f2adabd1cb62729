"""
相机操作模块

这个模块包含相机枚举、图像采集和内参相关的类和函数
"""

from questnav.camera.devices import CameraDevice, enumerate_devices
from questnav.camera.intrinsics import CameraIntrinsics
from questnav.camera.webcam import WebCamFeed

__all__ = ['CameraDevice', 'enumerate_devices', 'CameraIntrinsics', 'WebCamFeed']

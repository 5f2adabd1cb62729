#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
双目AprilTag检测组件

启动时打开左右两个相机并开始采集，同时保存每个相机的内参。
每帧的update目前不做任何处理
"""

import logging

from questnav.camera import CameraIntrinsics, WebCamFeed, enumerate_devices
from questnav.core.behaviour import Behaviour
from questnav.exceptions import CameraStateError, NotEnoughCamerasError
from questnav.utils.config import create_default_config

logger = logging.getLogger(__name__)


class ApriltagDetector(Behaviour):
    '''左右相机采集组件'''

    def __init__(self, config=None, device_lister=enumerate_devices):
        '''
        参数:
            config: RigConfig，默认使用create_default_config()
            device_lister: 设备枚举函数，接收max_devices参数
        '''
        self.config = config or create_default_config()
        self._device_lister = device_lister

        self.left_camera = None
        self.right_camera = None
        self.left_intrinsics = CameraIntrinsics()
        self.right_intrinsics = CameraIntrinsics()

    @property
    def started(self):
        return self.left_camera is not None and self.right_camera is not None

    def _select_devices(self):
        left_id = self.config.left.device_id
        right_id = self.config.right.device_id
        if left_id is not None and right_id is not None:
            return left_id, right_id

        devices = self._device_lister(self.config.max_devices)
        indices = [d.index for d in devices]
        # 已指定的设备不参与自动分配
        free = [i for i in indices if i not in (left_id, right_id)]
        if left_id is None and right_id is None:
            if len(indices) < 2:
                raise NotEnoughCamerasError(len(indices))
            return indices[0], indices[1]
        if not free:
            raise NotEnoughCamerasError(len(indices))
        if left_id is None:
            return free[0], right_id
        return left_id, free[0]

    def _load_intrinsics(self, camera_config):
        if camera_config.camera_info_path:
            return CameraIntrinsics.from_camera_info(camera_config.camera_info_path)
        return CameraIntrinsics()

    def start(self):
        '''枚举相机，打开前两个作为左右相机并开始采集'''
        if self.started:
            raise CameraStateError("相机已经启动")

        left_intrinsics = self._load_intrinsics(self.config.left)
        right_intrinsics = self._load_intrinsics(self.config.right)

        left_id, right_id = self._select_devices()
        left = WebCamFeed(left_id, self.config.left.width, self.config.left.height,
                          self.config.left.fps, name="left")
        right = WebCamFeed(right_id, self.config.right.width, self.config.right.height,
                           self.config.right.fps, name="right")

        left.play()
        try:
            right.play()
        except BaseException:
            left.stop()
            raise

        self.left_camera = left
        self.right_camera = right
        self.left_intrinsics = left_intrinsics
        self.right_intrinsics = right_intrinsics
        logger.info(f"双目相机已启动: 左 {left_id}, 右 {right_id}")

    def update(self):
        '''每帧调用'''
        pass

    def stop(self):
        '''停止左右相机'''
        for camera in (self.left_camera, self.right_camera):
            if camera is not None:
                camera.stop()
        self.left_camera = None
        self.right_camera = None

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
相机设备枚举

OpenCV没有列出设备的接口，这里逐个尝试打开设备索引来判断相机是否存在
"""

from dataclasses import dataclass
import logging

import cv2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CameraDevice:
    """可用的相机设备"""
    index: int
    name: str
    backend: str = ""


def _backend_name(cap):
    try:
        return cap.getBackendName()
    except cv2.error:
        return ""


def enumerate_devices(max_devices=10):
    """
    枚举可用的相机设备

    参数:
        max_devices: 尝试的设备索引数量，检查 0..max_devices-1

    返回:
        按索引排序的CameraDevice列表
    """
    devices = []
    for index in range(max_devices):
        cap = cv2.VideoCapture(index)
        try:
            if cap.isOpened():
                backend = _backend_name(cap)
                devices.append(CameraDevice(index=index, name=f"camera{index}", backend=backend))
        finally:
            cap.release()

    logger.info(f"找到 {len(devices)} 个相机: {[d.index for d in devices]}")
    return devices

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
文件系统工具模块
处理目录创建和图像存档
"""

import logging
import os
from datetime import datetime

import cv2

logger = logging.getLogger(__name__)


def create_dirs_if_not_exist(path):
    """
    如果目录不存在则创建

    参数:
        path: 目录路径
    """
    if not os.path.exists(path):
        logger.info(f"创建目录: {path}")
        os.makedirs(path, exist_ok=True)


def save_stereo_pair(left, right, directory, timestamp=None):
    """
    保存一对左右图像

    参数:
        left: 左相机图像
        right: 右相机图像
        directory: 存档目录
        timestamp: 文件名时间戳，默认为当前时间

    返回:
        (左图路径, 右图路径)
    """
    if left is None or right is None:
        raise ValueError("左右图像都不能为空")

    create_dirs_if_not_exist(directory)
    if timestamp is None:
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S_%f')

    left_path = os.path.join(directory, f"{timestamp}_left.png")
    right_path = os.path.join(directory, f"{timestamp}_right.png")
    for path, image in ((left_path, left), (right_path, right)):
        if not cv2.imwrite(path, image):
            raise IOError(f"图像保存失败: {path}")

    logger.info(f"图像已保存至 {left_path}, {right_path}")
    return left_path, right_path

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
相机内参

内参保存在4x4矩阵中: 左上3x3为相机矩阵K, [3,3]为1。
未加载参数时矩阵全为0
"""

import logging

import cv2
import numpy as np

from questnav.utils.config import read_camera_info

logger = logging.getLogger(__name__)


class CameraIntrinsics(object):
    '''单个相机的内参矩阵和畸变系数'''

    def __init__(self, matrix=None, distortion=None):
        if matrix is None:
            matrix = np.zeros((4, 4), dtype=np.float64)
        matrix = np.asarray(matrix, dtype=np.float64)
        if matrix.shape != (4, 4):
            raise ValueError(f"内参矩阵必须是4x4, 实际为 {matrix.shape}")
        if distortion is None:
            distortion = np.zeros(5, dtype=np.float64)

        self.matrix = matrix
        self.distortion = np.asarray(distortion, dtype=np.float64).ravel()

    @classmethod
    def from_camera_matrix(cls, K, D=None):
        """
        从3x3相机矩阵创建内参

        参数:
            K: 3x3相机内参矩阵
            D: 畸变系数
        """
        K = np.asarray(K, dtype=np.float64)
        if K.shape != (3, 3):
            raise ValueError(f"相机矩阵必须是3x3, 实际为 {K.shape}")
        matrix = np.zeros((4, 4), dtype=np.float64)
        matrix[:3, :3] = K
        matrix[3, 3] = 1.0
        return cls(matrix, D)

    @classmethod
    def from_camera_info(cls, yaml_path):
        """从相机参数YAML文件读取内参"""
        K, D = read_camera_info(yaml_path)
        logger.info(f"读取相机参数: {yaml_path}")
        logger.debug(f"相机内参矩阵K:\n{K}\n畸变系数D: {D}")
        return cls.from_camera_matrix(K, D)

    @property
    def is_set(self):
        return bool(self.matrix[3, 3] != 0)

    @property
    def camera_matrix(self):
        return self.matrix[:3, :3].copy()

    @property
    def fx(self):
        return float(self.matrix[0, 0])

    @property
    def fy(self):
        return float(self.matrix[1, 1])

    @property
    def cx(self):
        return float(self.matrix[0, 2])

    @property
    def cy(self):
        return float(self.matrix[1, 2])

    def undistort(self, image, keep_fov=True, alpha=0.85):
        """图像畸变校正

        Args:
            image: 输入图像
            keep_fov: 是否保持视场角
            alpha: 视场保留比例

        Returns:
            校正后的图像，内参未设置时返回原图
        """
        if image is None or not self.is_set:
            return image

        K = self.camera_matrix
        if keep_fov:
            h, w = image.shape[:2]
            # 使用getOptimalNewCameraMatrix优化相机矩阵以保持视场角
            new_K, _ = cv2.getOptimalNewCameraMatrix(K, self.distortion, (w, h), alpha)
            return cv2.undistort(image, K, self.distortion, None, new_K)
        return cv2.undistort(image, K, self.distortion)

    def __repr__(self):
        if not self.is_set:
            return "CameraIntrinsics(unset)"
        return (f"CameraIntrinsics(fx={self.fx:.1f}, fy={self.fy:.1f}, "
                f"cx={self.cx:.1f}, cy={self.cy:.1f})")

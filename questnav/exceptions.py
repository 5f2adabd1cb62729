#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
异常类定义

按层级划分配置错误和相机错误，方便调用方分别处理
"""

from typing import Optional


class QuestNavError(Exception):
    """所有QuestNav错误的基类"""

    def __init__(self, message: str, device: Optional[int] = None):
        self.message = message
        self.device = device
        super().__init__(self.message)

    def __str__(self):
        if self.device is not None:
            return f"{self.message} (相机 {self.device})"
        return self.message


class ConfigurationError(QuestNavError, ValueError):
    """配置文件缺失或内容无效"""
    pass


class CameraError(QuestNavError):
    """相机相关错误的基类"""
    pass


class NotEnoughCamerasError(CameraError):
    """可用相机数量不足两个"""

    def __init__(self, found: int, required: int = 2):
        self.found = found
        self.required = required
        super().__init__(f"需要 {required} 个相机, 只找到 {found} 个")


class CameraOpenError(CameraError):
    """相机无法打开（不存在或被占用）"""
    pass


class CameraStateError(CameraError):
    """在错误的状态下调用了相机操作"""
    pass

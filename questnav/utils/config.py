#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
配置管理模块
处理双目相机、存档配置以及相机参数文件
"""

from dataclasses import dataclass, field
import json
import logging
from typing import Optional

import numpy as np
import yaml

from questnav.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """单个相机配置类"""
    device_id: Optional[int] = None          # None表示按枚举顺序选择
    width: int = 1280
    height: int = 720
    fps: int = 30
    camera_info_path: Optional[str] = None   # 相机参数文件路径
    undistort: bool = False                  # 是否校正畸变
    keep_fov: bool = True                    # 是否保持视场角
    alpha: float = 0.85                      # 视场保留比例


@dataclass
class ArchiveConfig:
    """图像存档配置类"""
    enable: bool = False
    preview: bool = True
    save_raw: bool = False
    preview_delay: int = 1
    path: str = "./data/stereo"


@dataclass
class RigConfig:
    """双目相机配置"""
    left: CameraConfig = field(default_factory=CameraConfig)
    right: CameraConfig = field(default_factory=CameraConfig)
    max_devices: int = 10
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)


def read_json(json_path):
    """
    读取JSON配置文件

    参数:
        json_path: JSON文件路径

    返回:
        解析后的JSON内容
    """
    with open(json_path, "r") as f:
        # 处理json文件可能包含注释的情况
        content = f.read()
        content = '\n'.join([line.split('//')[0] for line in content.split('\n')])
        data = json.loads(content)
    return data


def _matrix_data(data, key):
    entry = data[key]
    if not isinstance(entry, dict) or not isinstance(entry.get('data'), list):
        raise ConfigurationError(f"{key}缺少data列表")
    return entry['data']


def read_camera_info(yaml_path):
    """
    读取相机参数文件
    提取相机内参矩阵和畸变系数

    参数:
        yaml_path: 相机参数YAML文件路径

    返回:
        (K, D): 内参矩阵和畸变系数
    """
    try:
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigurationError(f"无法读取相机参数文件 {yaml_path}: {e}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"相机参数文件解析失败 {yaml_path}: {e}")

    if not isinstance(data, dict):
        raise ConfigurationError(f"相机参数文件格式错误: {yaml_path}")

    # 提取相机内参矩阵K
    if 'camera_matrix' in data:
        K_data = _matrix_data(data, 'camera_matrix')
        if len(K_data) != 9:
            raise ConfigurationError(f"camera_matrix需要9个元素, 实际为 {len(K_data)}")
        K = np.array(K_data, dtype=np.float64).reshape(3, 3)
    else:
        raise ConfigurationError("相机参数文件中找不到camera_matrix")

    # 提取畸变系数D
    if 'distortion_coefficients' in data:
        D = np.array(_matrix_data(data, 'distortion_coefficients'), dtype=np.float64)
    else:
        raise ConfigurationError("相机参数文件中找不到distortion_coefficients")

    return K, D


def _camera_config(data, name):
    if data is None:
        return CameraConfig()
    try:
        return CameraConfig(**data)
    except TypeError as e:
        raise ConfigurationError(f"{name}相机配置无效: {e}")


def load_config(config_path):
    """加载双目相机配置

    Args:
        config_path: 配置文件路径

    Returns:
        RigConfig
    """
    logger.info(f"读取配置文件: {config_path}")
    try:
        config = read_json(config_path)
    except FileNotFoundError:
        raise ConfigurationError(f"配置文件不存在: {config_path}")
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"配置文件解析失败: {e}")

    if not isinstance(config, dict):
        raise ConfigurationError(f"配置文件顶层必须是对象: {config_path}")

    camera_dict = config.get("Camera", {})
    if not isinstance(camera_dict, dict):
        raise ConfigurationError("Camera配置必须是对象")
    left = _camera_config(camera_dict.get("left"), "左")
    right = _camera_config(camera_dict.get("right"), "右")

    try:
        archive = ArchiveConfig(**config.get("Archive", {}))
    except TypeError as e:
        raise ConfigurationError(f"存档配置无效: {e}")

    try:
        max_devices = int(camera_dict.get("max_devices", 10))
    except (TypeError, ValueError):
        raise ConfigurationError(f"max_devices必须是整数: {camera_dict.get('max_devices')!r}")
    if max_devices < 2:
        raise ConfigurationError(f"max_devices至少为2, 实际为 {max_devices}")

    if left.device_id is not None and left.device_id == right.device_id:
        raise ConfigurationError(f"左右相机不能使用同一个设备ID: {left.device_id}")

    for name, camera in (("左", left), ("右", right)):
        logger.info(f"{name}相机: 设备 {camera.device_id if camera.device_id is not None else '自动'}, "
                    f"{camera.width}x{camera.height}@{camera.fps}")
        if camera.undistort:
            logger.info(f"  - 视场保持: {'开启' if camera.keep_fov else '关闭'}, alpha: {camera.alpha}")

    return RigConfig(left=left, right=right, max_devices=max_devices, archive=archive)


def create_default_config():
    """创建默认配置"""
    return RigConfig(
        left=CameraConfig(),
        right=CameraConfig(),
        max_devices=10,
        archive=ArchiveConfig()
    )

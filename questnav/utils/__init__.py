"""
工具函数模块

这个模块包含项目中使用的通用工具函数
"""

from questnav.utils.config import (ArchiveConfig, CameraConfig, RigConfig, create_default_config,
                                   load_config, read_camera_info, read_json)
from questnav.utils.filesystem import create_dirs_if_not_exist, save_stereo_pair

__all__ = ['ArchiveConfig', 'CameraConfig', 'RigConfig', 'create_default_config', 'load_config',
           'read_camera_info', 'read_json', 'create_dirs_if_not_exist', 'save_stereo_pair']

#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
双目相机预览程序

打开左右两个USB相机，并排显示两路图像

使用方法:
    python stereo_preview.py [--config CONFIG_PATH]

参数:
    --config: 配置文件路径(默认为config/questnav.json)
    --list-devices: 只列出可用相机
"""

import argparse
import logging
import sys

import cv2
import numpy as np

from questnav.camera import enumerate_devices
from questnav.core import ApriltagDetector, run_behaviour
from questnav.exceptions import CameraError, ConfigurationError
from questnav.utils.config import create_default_config, load_config
from questnav.utils.filesystem import save_stereo_pair

logger = logging.getLogger("stereo_preview")


def compose_preview(left, right, height=480):
    """将左右图像缩放到同一高度后水平拼接"""
    frames = []
    for frame in (left, right):
        if frame is None:
            frame = np.zeros((height, height * 4 // 3, 3), dtype=np.uint8)
        elif len(frame.shape) == 2:
            frame = cv2.cvtColor(frame, cv2.COLOR_GRAY2BGR)
        h, w = frame.shape[:2]
        if h != height:
            frame = cv2.resize(frame, (int(w * height / h), height))
        frames.append(frame)
    return np.hstack(frames)


def list_devices(max_devices):
    devices = enumerate_devices(max_devices)
    if not devices:
        print("没有找到可用相机")
        return
    for device in devices:
        print(f"{device.index}: {device.name} {device.backend}")


def main():
    """主程序入口"""
    parser = argparse.ArgumentParser(description='双目相机预览程序')
    parser.add_argument('--config', default='config/questnav.json',
                        help='配置文件路径(默认: config/questnav.json)')
    parser.add_argument('--list-devices', action='store_true',
                        help='列出可用相机后退出')
    parser.add_argument('--max-devices', type=int, default=None,
                        help='枚举的最大设备数量')
    parser.add_argument('--ticks', type=int, default=None,
                        help='运行的帧数(默认一直运行)')
    parser.add_argument('--verbose', action='store_true',
                        help='输出调试日志')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        print(f"配置读取错误: {e}")
        print("使用默认参数继续...")
        config = create_default_config()

    if args.max_devices is not None:
        config.max_devices = args.max_devices

    if args.list_devices:
        list_devices(config.max_devices)
        return 0

    detector = ApriltagDetector(config)
    archive = config.archive

    def on_tick(tick):
        _, left = detector.left_camera.read()
        _, right = detector.right_camera.read()
        if archive.enable and archive.save_raw and left is not None and right is not None:
            save_stereo_pair(left, right, archive.path)
        if not archive.preview:
            return True
        if config.left.undistort:
            left = detector.left_intrinsics.undistort(left, config.left.keep_fov, config.left.alpha)
        if config.right.undistort:
            right = detector.right_intrinsics.undistort(right, config.right.keep_fov, config.right.alpha)

        cv2.imshow("Stereo Preview", compose_preview(left, right))
        key = cv2.waitKey(archive.preview_delay) & 0xFF
        if key == ord('s'):
            if not archive.enable:
                print("存档未开启, 请在配置中设置 Archive.enable")
            elif left is not None and right is not None:
                save_stereo_pair(left, right, archive.path)
        elif key == ord('q'):
            return False
        return True

    print("开始双目采集...")
    print("按 's' 保存当前图像, 按 'q' 退出")
    try:
        run_behaviour(detector, max_ticks=args.ticks,
                      interval=0.0 if archive.preview else 1.0 / 30, on_tick=on_tick)
    except CameraError as e:
        print(f"相机错误: {e}")
        return 1
    except ConfigurationError as e:
        print(f"相机参数读取错误: {e}")
        return 1
    finally:
        if archive.preview:
            cv2.destroyAllWindows()
    return 0


if __name__ == "__main__":
    sys.exit(main())

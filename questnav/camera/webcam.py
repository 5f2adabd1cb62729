#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
USB相机图像流

每个WebCamFeed绑定一个相机设备，play()之后由后台线程持续读取，
调用方随时可以取到最新一帧
"""

import logging
import threading
import time

import cv2

from questnav.exceptions import CameraOpenError, CameraStateError

logger = logging.getLogger(__name__)


class WebCamFeed(object):
    '''单个相机的持续采集'''

    def __init__(self, device, width=1280, height=720, fps=30, name=None):
        '''
        初始化相机图像流

        参数:
            device: CameraDevice或设备索引
            width: 请求的图像宽度
            height: 请求的图像高度
            fps: 请求的帧率
            name: 日志中使用的名称
        '''
        self.device_index = getattr(device, 'index', device)
        self.requested_width = int(width)
        self.requested_height = int(height)
        self.requested_fps = int(fps)
        self.name = name or f"camera{self.device_index}"

        self._cap = None
        self._thread = None
        self._stop_event = threading.Event()
        self._first_frame = threading.Event()
        self._lock = threading.Lock()
        self._frame = None
        self._frame_count = 0
        self._failed_reads = 0

    @property
    def is_playing(self):
        return self._cap is not None and self._thread is not None and self._thread.is_alive()

    @property
    def frame_count(self):
        with self._lock:
            return self._frame_count

    @property
    def failed_reads(self):
        with self._lock:
            return self._failed_reads

    @property
    def width(self):
        """实际图像宽度，未开始采集时返回请求值"""
        if self._cap is None:
            return self.requested_width
        return int(self._cap.get(cv2.CAP_PROP_FRAME_WIDTH))

    @property
    def height(self):
        if self._cap is None:
            return self.requested_height
        return int(self._cap.get(cv2.CAP_PROP_FRAME_HEIGHT))

    def play(self):
        '''打开相机并开始后台采集'''
        if self._cap is not None:
            raise CameraStateError(f"{self.name} 已经在采集", device=self.device_index)
        if self._thread is not None and self._thread.is_alive():
            raise CameraStateError(f"{self.name} 上一个采集线程还未退出", device=self.device_index)

        logger.info(f"打开相机 {self.name} (设备 {self.device_index})...")
        cap = cv2.VideoCapture(self.device_index)
        if not cap.isOpened():
            cap.release()
            raise CameraOpenError(f"无法打开相机 {self.name}", device=self.device_index)

        # 设置相机分辨率和帧率
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.requested_width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.requested_height)
        cap.set(cv2.CAP_PROP_FPS, self.requested_fps)

        self._cap = cap
        # 每个采集线程使用自己的停止事件
        self._stop_event = threading.Event()
        self._first_frame.clear()
        self._thread = threading.Thread(target=self._capture_loop, args=(cap, self._stop_event),
                                        name=f"WebCamFeed-{self.name}", daemon=True)
        self._thread.start()
        logger.info(f"相机 {self.name} 开始采集, 分辨率 {self.width}x{self.height}")

    def _capture_loop(self, cap, stop_event):
        try:
            self._read_frames(cap, stop_event)
        finally:
            # 相机只在采集线程退出后释放
            cap.release()

    def _read_frames(self, cap, stop_event):
        failing = False
        while not stop_event.is_set():
            ret, frame = cap.read()
            if stop_event.is_set():
                break
            if not ret or frame is None:
                with self._lock:
                    self._failed_reads += 1
                if not failing:
                    logger.warning(f"无法读取相机帧: {self.name}")
                    failing = True
                # 避免设备断开时空转
                time.sleep(0.01)
                continue

            if failing:
                logger.info(f"相机 {self.name} 恢复读取")
                failing = False

            with self._lock:
                self._frame = frame
                self._frame_count += 1
            self._first_frame.set()

    def read(self):
        '''
        获取最新一帧

        返回:
            (帧计数, 图像副本)，还没有图像时为 (0, None)
        '''
        with self._lock:
            if self._frame is None:
                return self._frame_count, None
            return self._frame_count, self._frame.copy()

    def wait_for_frame(self, timeout=None):
        '''等待第一帧，超时返回False'''
        return self._first_frame.wait(timeout)

    def stop(self, timeout=2.0):
        '''停止采集并释放相机'''
        if self._cap is None:
            return

        self._stop_event.set()
        self._cap = None
        if self._thread is not None:
            self._thread.join(timeout)
            if self._thread.is_alive():
                # 线程退出时再释放相机，在此之前不能重新play()
                logger.warning(f"相机 {self.name} 采集线程未在 {timeout}s 内退出, 延迟释放相机")
                return
        self._thread = None
        logger.info(f"相机 {self.name} 已停止, 共采集 {self.frame_count} 帧")

    def __enter__(self):
        self.play()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.stop()

    def __repr__(self):
        state = "playing" if self.is_playing else "stopped"
        return f"WebCamFeed({self.name!r}, device={self.device_index}, {state})"

"""
测试公共夹具

用FakeVideoCapture代替cv2.VideoCapture，不需要真实相机
"""

import time

import cv2
import numpy as np
import pytest


class FakeVideoCapture:
    """模拟cv2.VideoCapture，available中的索引可以打开"""

    available = set()
    busy = set()
    failing_reads = set()
    opened = []
    read_delay = 0.001

    def __init__(self, index):
        self.index = index
        self.props = {cv2.CAP_PROP_FRAME_WIDTH: 640.0, cv2.CAP_PROP_FRAME_HEIGHT: 480.0}
        self.released = False
        self._open = index in self.available and index not in self.busy
        self.reads = 0
        FakeVideoCapture.opened.append(self)

    def isOpened(self):
        return self._open and not self.released

    def getBackendName(self):
        return "FAKE"

    def set(self, prop, value):
        self.props[prop] = float(value)
        return True

    def get(self, prop):
        return self.props.get(prop, 0.0)

    def read(self):
        time.sleep(self.read_delay)
        if not self.isOpened() or self.index in self.failing_reads:
            return False, None
        self.reads += 1
        h = int(self.props[cv2.CAP_PROP_FRAME_HEIGHT])
        w = int(self.props[cv2.CAP_PROP_FRAME_WIDTH])
        frame = np.full((h, w, 3), self.index, dtype=np.uint8)
        return True, frame

    def release(self):
        self.released = True


@pytest.fixture
def fake_capture(monkeypatch):
    """安装FakeVideoCapture，默认设备0和1可用"""
    FakeVideoCapture.available = {0, 1}
    FakeVideoCapture.busy = set()
    FakeVideoCapture.failing_reads = set()
    FakeVideoCapture.opened = []
    FakeVideoCapture.read_delay = 0.001
    monkeypatch.setattr(cv2, "VideoCapture", FakeVideoCapture)
    return FakeVideoCapture


@pytest.fixture
def camera_info_file(tmp_path):
    """写一个相机参数YAML文件"""
    path = tmp_path / "camera_info.yaml"
    path.write_text(
        "image_width: 640\n"
        "image_height: 480\n"
        "camera_name: test_camera\n"
        "camera_matrix:\n"
        "  rows: 3\n"
        "  cols: 3\n"
        "  data: [600.0, 0.0, 320.0, 0.0, 610.0, 240.0, 0.0, 0.0, 1.0]\n"
        "distortion_model: plumb_bob\n"
        "distortion_coefficients:\n"
        "  rows: 1\n"
        "  cols: 5\n"
        "  data: [0.1, -0.05, 0.0, 0.0, 0.0]\n"
    )
    return str(path)

"""
测试预览程序
"""

import sys
import time

import cv2
import numpy as np
import pytest

import stereo_preview


def test_compose_preview_matches_heights():
    left = np.zeros((240, 320, 3), dtype=np.uint8)
    right = np.zeros((480, 640), dtype=np.uint8)
    preview = stereo_preview.compose_preview(left, right, height=480)
    assert preview.shape == (480, 640 + 640, 3)


def test_compose_preview_missing_frame():
    preview = stereo_preview.compose_preview(None, None, height=120)
    assert preview.shape == (120, 320, 3)


def test_list_devices(fake_capture, monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", "missing.json",
                                      "--list-devices", "--max-devices", "3"])
    assert stereo_preview.main() == 0
    out = capsys.readouterr().out
    assert "使用默认参数继续" in out
    assert "0: camera0 FAKE" in out
    assert "1: camera1 FAKE" in out


def test_run_without_preview(fake_capture, monkeypatch, tmp_path):
    config = tmp_path / "rig.json"
    config.write_text('{"Archive": {"preview": false}}')
    monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", str(config), "--ticks", "2"])
    assert stereo_preview.main() == 0
    assert all(cap.released for cap in fake_capture.opened)


def test_run_with_too_few_cameras(fake_capture, monkeypatch, tmp_path):
    fake_capture.available = {0}
    config = tmp_path / "rig.json"
    config.write_text('{"Archive": {"preview": false}}')
    monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", str(config), "--ticks", "2"])
    assert stereo_preview.main() == 1


def test_run_with_missing_camera_info(fake_capture, monkeypatch, tmp_path, capsys):
    config = tmp_path / "rig.json"
    config.write_text('{"Camera": {"left": {"camera_info_path": "%s"}}, "Archive": {"preview": false}}'
                      % (tmp_path / "nope.yaml").as_posix())
    monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", str(config), "--ticks", "1"])
    assert stereo_preview.main() == 1
    assert "相机参数读取错误" in capsys.readouterr().out
    assert all(cap.released for cap in fake_capture.opened)


def test_bad_max_devices_falls_back_to_defaults(fake_capture, monkeypatch, tmp_path, capsys):
    config = tmp_path / "rig.json"
    config.write_text('{"Camera": {"max_devices": "many"}}')
    monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", str(config), "--list-devices"])
    assert stereo_preview.main() == 0
    assert "使用默认参数继续" in capsys.readouterr().out


class TestPreviewKeys:
    """预览窗口按键测试"""

    @pytest.fixture
    def gui(self, monkeypatch):
        shown = []
        monkeypatch.setattr(cv2, "imshow", lambda name, image: shown.append(image))
        monkeypatch.setattr(cv2, "destroyAllWindows", lambda: None)
        return shown

    def _run(self, monkeypatch, config, keys):
        monkeypatch.setattr(cv2, "waitKey", lambda delay: next(keys))
        monkeypatch.setattr(sys, "argv", ["stereo_preview.py", "--config", str(config), "--ticks", "500"])
        return stereo_preview.main()

    def test_q_quits(self, fake_capture, gui, monkeypatch, tmp_path):
        config = tmp_path / "rig.json"
        config.write_text("{}")
        keys = iter([ord('x'), ord('q')])
        assert self._run(monkeypatch, config, keys) == 0
        assert len(gui) == 2
        assert all(cap.released for cap in fake_capture.opened)

    def test_s_with_archive_disabled(self, fake_capture, gui, monkeypatch, tmp_path, capsys):
        config = tmp_path / "rig.json"
        config.write_text('{"Archive": {"path": "%s"}}' % (tmp_path / "archive").as_posix())
        keys = iter([ord('s'), ord('q')])
        assert self._run(monkeypatch, config, keys) == 0
        assert "存档未开启" in capsys.readouterr().out
        assert not (tmp_path / "archive").exists()

    def test_s_saves_stereo_pair(self, fake_capture, gui, monkeypatch, tmp_path):
        archive = tmp_path / "archive"
        config = tmp_path / "rig.json"
        config.write_text('{"Archive": {"enable": true, "path": "%s"}}' % archive.as_posix())

        def keys():
            # 等到两路图像都已采集并保存后再退出
            for _ in range(400):
                if archive.exists() and len(list(archive.glob("*.png"))) >= 2:
                    break
                time.sleep(0.005)
                yield ord('s')
            yield ord('q')

        assert self._run(monkeypatch, config, keys()) == 0
        assert {p.name.split("_")[-1] for p in archive.glob("*.png")} == {"left.png", "right.png"}

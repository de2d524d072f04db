import threading

import numpy as np
import pytest

from core.config import Settings
from core.models import Detection
import core.camera as camera_mod


class DummyCap:
    """Stands in for cv2.VideoCapture: always open, serves a fixed 640x480 frame."""
    def __init__(self, idx=0, opened=True, width=640, height=480):
        self.idx = idx
        self.opened = opened
        self.released = False
        self.frame = np.zeros((height, width, 3), dtype=np.uint8)
    def isOpened(self): return self.opened and not self.released
    def read(self):
        if self.released:
            return False, None
        return True, self.frame.copy()
    def get(self, code): return 0.0
    def release(self): self.released = True


class FakeClient:
    """Records submitted frames; returns canned results or raises."""
    def __init__(self, results=None, error=None, gate=None):
        self.results = results if results is not None else []
        self.error = error
        self.gate = gate
        self.calls = []
    def detect(self, data_uri):
        self.calls.append(data_uri)
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return list(self.results)


@pytest.fixture
def caps(monkeypatch):
    """Patch VideoCapture with DummyCap; returns the list of opened caps."""
    opened = []
    def factory(idx):
        cap = DummyCap(idx)
        opened.append(cap)
        return cap
    monkeypatch.setattr(camera_mod.cv2, "VideoCapture", factory)
    return opened


@pytest.fixture
def denied_camera(monkeypatch):
    monkeypatch.setattr(camera_mod.cv2, "VideoCapture", lambda idx: DummyCap(idx, opened=False))


@pytest.fixture
def settings():
    # long interval: the timer thread never fires on its own during a test
    return Settings(CAPTURE_INTERVAL=3600)


@pytest.fixture
def fake_client():
    return FakeClient(results=[Detection(label="Mask: 97.31%", box=[0.2, 0.2, 0.5, 0.6])])


@pytest.fixture
def make_client():
    return FakeClient


@pytest.fixture
def gate():
    return threading.Event()

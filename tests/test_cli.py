
import json

import cv2
import httpx
import numpy as np

from scripts.cli import main


def _mock_service(monkeypatch, results):
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={'results': results}))

    class MockClient(httpx.Client):
        def __init__(self, *args, **kwargs):
            kwargs['transport'] = transport
            super().__init__(*args, **kwargs)

    monkeypatch.setattr(httpx, 'Client', MockClient)


def test_detect_prints_listing(monkeypatch, tmp_path, capsys):
    img = tmp_path / 'face.jpg'
    cv2.imwrite(str(img), np.zeros((32, 32, 3), dtype=np.uint8))
    _mock_service(monkeypatch, [{'label': 'Mask: 97%', 'box': [50, 50, 200, 200]}])

    assert main(['--url', 'http://svc.local/detect-mask/', 'detect', '--image', str(img)]) == 0
    out = capsys.readouterr().out
    assert 'Label: Mask: 97%' in out
    assert 'Bounding Box: 50, 50, 200, 200' in out


def test_detect_json(monkeypatch, tmp_path, capsys):
    img = tmp_path / 'face.jpg'
    cv2.imwrite(str(img), np.zeros((32, 32, 3), dtype=np.uint8))
    _mock_service(monkeypatch, [{'label': 'No Mask', 'box': [0.1, 0.1, 0.2, 0.2]}])

    assert main(['detect', '--image', str(img), '--json']) == 0
    assert json.loads(capsys.readouterr().out) == [
        {'label': 'No Mask', 'confidence': None, 'box': [0.1, 0.1, 0.2, 0.2]}
    ]


def test_detect_unreadable_image(tmp_path):
    assert main(['detect', '--image', str(tmp_path / 'missing.jpg')]) == 2

import inspect
import io

import numpy as np
from fastapi.testclient import TestClient
from PIL import Image

from app.core.server import app
from pixel_scramble import utils

client = TestClient(app)


def _png_bytes():
    arr = np.arange(6 * 8 * 4, dtype=np.uint8).reshape(6, 8, 4)
    arr[..., 3] = 255
    buf = io.BytesIO()
    Image.fromarray(arr, 'RGBA').save(buf, format='PNG')
    return arr, buf.getvalue()


def test_scramble_then_descramble():
    arr, data = _png_bytes()
    r = client.post("/scramble", files={"file": ("a.png", data, "image/png")}, data={"seed": "77"})
    assert r.status_code == 200
    body = r.json()
    assert body["seed"] == 77
    assert utils.read_seed(body["scrambled_path"]) == 77

    with open(body["scrambled_path"], "rb") as f:
        r = client.post("/descramble", files={"file": ("s.png", f.read(), "image/png")})
    assert r.status_code == 200
    with Image.open(r.json()["descrambled_path"]) as img:
        assert np.array_equal(np.array(img.convert('RGBA')), arr)


def test_descramble_without_seed():
    _, data = _png_bytes()
    r = client.post("/descramble", files={"file": ("a.png", data, "image/png")})
    assert r.status_code == 400


def test_endpoints_run_in_threadpool():
    # plain functions are dispatched off the event loop by FastAPI
    from app.core import server
    assert not inspect.iscoroutinefunction(server.api_scramble)
    assert not inspect.iscoroutinefunction(server.api_descramble)

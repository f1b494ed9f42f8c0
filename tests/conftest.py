"""
Shared fixtures: Flask app on a temporary content root and image factories.
"""
import io
import os

import pytest
from PIL import Image

from shrink_backend import Config, create_app


def make_image(fmt='JPEG', size=(100, 100), color='red', mode='RGB', **save_kwargs):
    """Encode a solid-colour image and return its bytes."""
    img = Image.new(mode, size, color=color)
    buf = io.BytesIO()
    img.save(buf, format=fmt, **save_kwargs)
    return buf.getvalue()


def make_noise_jpeg(size=(1200, 1200), quality=100):
    """Random-noise JPEG; noise barely compresses so the file is large."""
    img = Image.frombytes('RGB', size, os.urandom(size[0] * size[1] * 3))
    buf = io.BytesIO()
    img.save(buf, format='JPEG', quality=quality, subsampling=0)
    return buf.getvalue()


def make_xpm(width=64, height=64):
    """Two-colour X11 pixmap; Pillow can read XPM but cannot write it."""
    rows = ['.' * (width // 2) + ' ' * (width - width // 2) for _ in range(height)]
    lines = [
        '/* XPM */',
        'static char *image[] = {',
        f'"{width} {height} 2 1",',
        '"  c #FFFFFF",',
        '". c #000000",',
    ]
    lines += [f'"{row}",' for row in rows]
    lines.append('};')
    return ('\n'.join(lines) + '\n').encode('ascii')


@pytest.fixture
def upload_dir(tmp_path):
    return tmp_path / 'uploads'


@pytest.fixture
def config(upload_dir):
    return Config(upload_dir=upload_dir, public_url='http://images.test/')


@pytest.fixture
def app(config):
    """Create Flask app for testing"""
    app = create_app(config)
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    """Create test client"""
    return app.test_client()

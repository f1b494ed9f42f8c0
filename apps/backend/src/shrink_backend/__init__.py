"""
Shrink Backend - Flask API for size-bounded image uploads

This app is deployed on the backend server. It:
1. Accepts image uploads from clients
2. Compresses them under the size target
3. Stores the derivatives and serves them back

Deployment:
    pip install shrink-app
    shrink-backend --port 8888
"""

from .app import create_app
from .config import Config

__all__ = ["create_app", "Config"]

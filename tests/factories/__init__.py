"""Re-export factory helpers for generating fake test data."""

# flake8: noqa: F401

from .media import FakeAssetStorage
from .user import create_fake_image, create_fake_user

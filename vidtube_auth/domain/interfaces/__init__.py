from .media import IAssetStorage
from .repositories import IUserRepository

__all__ = ["IAssetStorage", "IUserRepository"]

"""Domain value objects.

Value objects are immutable and compared by their attributes.
"""

from .assets import AssetUpload, StoredAsset
from .tokens import TokenClaims, TokenPair, TokenSigningConfig, TokenType

__all__ = [
    "AssetUpload",
    "StoredAsset",
    "TokenClaims",
    "TokenPair",
    "TokenSigningConfig",
    "TokenType",
]

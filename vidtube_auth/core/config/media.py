"""
Media host settings (Cloudinary).
"""
from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings


class MediaSettings(BaseSettings):
    """
    Defines credentials and limits for the external image host.

    Avatars and cover images are uploaded to Cloudinary; the service only keeps
    the public delivery URL on the user record.

    Security Note:
        - CLOUDINARY_API_SECRET signs every upload and destroy call and must
          never be logged.
    """
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: SecretStr = SecretStr("")
    CLOUDINARY_API_BASE_URL: str = "https://api.cloudinary.com/v1_1"
    CLOUDINARY_UPLOAD_FOLDER: str = "vidtube"
    MEDIA_UPLOAD_TIMEOUT_SECONDS: float = Field(gt=0, default=30.0)
    MEDIA_MAX_UPLOAD_BYTES: int = Field(ge=1, default=10 * 1024 * 1024)

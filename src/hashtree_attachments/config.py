"""Configuration for attachment handling using Pydantic Settings.

Values are read from HASHTREE_* environment variables and validated on
construction.
"""

from pydantic import PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import DEFAULT_PREVIEW_LENGTH, MAX_REFERENCE_LENGTH


class AttachmentConfig(BaseSettings):
    """Configuration for attachment references and uploads.

    Environment variables: HASHTREE_MAX_REFERENCE_LENGTH,
    HASHTREE_PREVIEW_MAX_LENGTH, HASHTREE_MAX_ATTACHMENT_SIZE.
    """

    model_config = SettingsConfigDict(
        env_prefix="HASHTREE_",
        case_sensitive=False,
        extra="ignore",
    )

    max_reference_length: PositiveInt = MAX_REFERENCE_LENGTH
    preview_max_length: PositiveInt = DEFAULT_PREVIEW_LENGTH
    max_attachment_size: PositiveInt = 100 * 1024 * 1024

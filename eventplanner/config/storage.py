"""Blob storage configuration."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_BUCKET_NAME = 'ebaplanner_event_images'
DEFAULT_UPLOAD_DIR = Path(__file__).parent.parent.parent / 'data' / 'uploads'
MAX_UPLOAD_BYTES = 10 * 1024 * 1024  # 10MB


@dataclass
class StorageConfig:
    """
    Blob storage configuration settings.

    Fields:
        bucket_name: Logical container all images are stored under
        upload_dir: Directory on disk that holds the bucket directories
        public_base_url: URL prefix the upload directory is served from
        max_upload_bytes: Largest accepted image upload
    """

    bucket_name: str = ""
    upload_dir: Optional[Path] = None
    public_base_url: str = ""
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    def __post_init__(self):
        """Load unset values from the environment."""
        if not self.bucket_name:
            self.bucket_name = os.environ.get('BLOB_BUCKET_NAME', DEFAULT_BUCKET_NAME)
        if self.upload_dir is None:
            self.upload_dir = Path(os.environ.get('UPLOAD_DIR', '') or DEFAULT_UPLOAD_DIR)
        if not self.public_base_url:
            self.public_base_url = os.environ.get('BLOB_PUBLIC_BASE_URL', '/uploads')
        self.upload_dir = Path(self.upload_dir)
        self.public_base_url = self.public_base_url.rstrip('/')

    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.bucket_name or '/' in self.bucket_name:
            raise ValueError("BLOB_BUCKET_NAME must be a non-empty name without slashes")
        if self.max_upload_bytes <= 0:
            raise ValueError("Maximum upload size must be positive")
        return True

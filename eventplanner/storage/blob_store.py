"""Blob storage for event images.

Objects live in a single bucket and are addressed by a generated name that
combines the upload time, a random suffix and the sanitized original
filename. Uploads return a public URL that embeds the bucket and object name;
deletion only accepts URLs produced by the same store.
"""

import logging
import re
import time
import uuid
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from ..exceptions import BlobStoreError

logger = logging.getLogger(__name__)

UNSAFE_FILENAME_CHARS = re.compile(r'[^A-Za-z0-9._-]')


def sanitize_filename(filename: Optional[str]) -> str:
    """Reduce an uploaded filename to a safe object name component."""
    name = (filename or '').replace('\\', '/').split('/')[-1]
    name = name.replace(' ', '_')
    name = UNSAFE_FILENAME_CHARS.sub('', name).lstrip('.')
    return name or 'upload'


def generate_object_name(filename: Optional[str]) -> str:
    """Unique object name derived from the upload time and the original filename."""
    millis = int(time.time() * 1000)
    return f"{millis}-{uuid.uuid4().hex[:8]}-{sanitize_filename(filename)}"


class BlobStore(ABC):
    """
    Base interface for blob stores.

    Subclasses only implement the raw object operations; URL building and
    the prefix check on deletion are shared.
    """

    def __init__(self, bucket_name: str, public_base_url: str):
        self.bucket_name = bucket_name
        self.public_base_url = public_base_url.rstrip('/')

    @property
    def url_prefix(self) -> str:
        return f"{self.public_base_url}/{self.bucket_name}/"

    def public_url(self, object_name: str) -> str:
        return f"{self.url_prefix}{object_name}"

    def object_name_from_url(self, url: Optional[str]) -> Optional[str]:
        """Extract the object name from a URL produced by this store, or None."""
        if not url or not url.startswith(self.url_prefix):
            return None
        object_name = url[len(self.url_prefix):]
        if not object_name or '/' in object_name or object_name in ('.', '..'):
            return None
        return object_name

    def upload(self, data: bytes, filename: Optional[str], content_type: Optional[str] = None) -> str:
        """
        Store an object and return its public URL.

        Raises:
            BlobStoreError: If the backend fails to store the object
        """
        object_name = generate_object_name(filename)
        try:
            self._put_object(object_name, data, content_type)
        except Exception as e:
            logger.error(f"Blob upload error for {object_name}: {e}")
            raise BlobStoreError(f"Error uploading {object_name}: {e}") from e
        url = self.public_url(object_name)
        logger.info(f"Upload successful, public URL: {url}")
        return url

    def delete(self, url: Optional[str]) -> bool:
        """
        Delete the object behind a URL produced by this store.

        Foreign or malformed URLs are ignored with a warning and backend
        failures are logged, so callers never fail because of a cleanup step.

        Returns:
            bool: Whether an object was deleted
        """
        object_name = self.object_name_from_url(url)
        if object_name is None:
            logger.warning(f"Invalid blob URL for deletion: {url}")
            return False
        try:
            logger.info(f"Attempting to delete blob object: {object_name}")
            self._delete_object(object_name)
        except Exception as e:
            logger.error(f"Failed to delete blob object {url}: {e}")
            return False
        logger.info(f"Successfully deleted blob object: {object_name}")
        return True

    @abstractmethod
    def _put_object(self, object_name: str, data: bytes, content_type: Optional[str]) -> None:
        pass

    @abstractmethod
    def _delete_object(self, object_name: str) -> None:
        pass

    @abstractmethod
    def exists(self, object_name: str) -> bool:
        pass


class FilesystemBlobStore(BlobStore):
    """
    Blob store writing objects into <root_dir>/<bucket_name>/.

    The root directory is served by the web application under
    public_base_url, so the generated URLs resolve to the stored files.
    """

    def __init__(self, root_dir: Path, bucket_name: str, public_base_url: str = '/uploads'):
        super().__init__(bucket_name, public_base_url)
        self.root_dir = Path(root_dir)
        self.bucket_dir = self.root_dir / bucket_name
        self.bucket_dir.mkdir(parents=True, exist_ok=True)

    def _put_object(self, object_name: str, data: bytes, content_type: Optional[str]) -> None:
        (self.bucket_dir / object_name).write_bytes(data)

    def _delete_object(self, object_name: str) -> None:
        (self.bucket_dir / object_name).unlink()

    def exists(self, object_name: str) -> bool:
        return (self.bucket_dir / object_name).is_file()

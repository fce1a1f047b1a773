"""Blob storage package."""

from .blob_store import BlobStore, FilesystemBlobStore, generate_object_name, sanitize_filename

__all__ = ['BlobStore', 'FilesystemBlobStore', 'generate_object_name', 'sanitize_filename']

# -*- coding: utf-8 -*-
import os
import random
import time
import logging
from flask import current_app
from werkzeug.utils import secure_filename
from app.utils.errors import UnsupportedFileType, FileTooLarge, StoredFileNotFound

logger = logging.getLogger(__name__)

# Extension -> MIME types accepted for it
ALLOWED_FILE_TYPES = {
    'pdf': {'application/pdf'},
    'jpg': {'image/jpeg', 'image/jpg', 'image/pjpeg'},
    'jpeg': {'image/jpeg', 'image/jpg', 'image/pjpeg'},
    'png': {'image/png'},
}


def resolve_download_name(filename):
    """Reduce a requested name to its last path component, accepting either separator."""
    name = (filename or '').replace('\\', '/').split('/')[-1]
    if name in ('', '.', '..'):
        return None
    return name


class UploadStore:
    """Validates and stores request attachments under a single directory."""

    def __init__(self, directory, max_size=5 * 1024 * 1024):
        self.directory = os.path.abspath(directory)
        self.max_size = max_size

    @property
    def prefix(self):
        return os.path.basename(self.directory)

    def validate(self, file):
        """Check extension, MIME type and size of an uploaded file without writing it."""
        if not file or not file.filename:
            return

        ext = os.path.splitext(file.filename)[1].lstrip('.').lower()
        mimetype = (file.mimetype or '').lower()
        if ext not in ALLOWED_FILE_TYPES or mimetype not in ALLOWED_FILE_TYPES[ext]:
            logger.warning(f"Rejected upload {file.filename!r} with type {mimetype!r}")
            raise UnsupportedFileType("Only PDF, JPG, JPEG, and PNG files are allowed")

        stream = file.stream
        stream.seek(0, os.SEEK_END)
        size = stream.tell()
        stream.seek(0)
        if size > self.max_size:
            logger.warning(f"Rejected upload {file.filename!r}: {size} bytes")
            raise FileTooLarge("File too large. Maximum size is 5MB")

    def generate_filename(self, original_name):
        ext = os.path.splitext(original_name)[1].lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10 ** 9)}"
        return secure_filename(f"{unique_suffix}{ext}")

    def save(self, file):
        """Write an already validated file and return its relative path."""
        if not file or not file.filename:
            return None

        os.makedirs(self.directory, exist_ok=True)
        filename = self.generate_filename(file.filename)
        while os.path.exists(os.path.join(self.directory, filename)):
            filename = self.generate_filename(file.filename)

        file.save(os.path.join(self.directory, filename))
        logger.info(f"Stored upload {file.filename!r} as {filename}")
        return f"{self.prefix}/{filename}"

    def accept(self, file):
        self.validate(file)
        return self.save(file)

    def discard(self, relative_path):
        """Remove a stored file; used when the record it belonged to was not created."""
        if not relative_path:
            return
        path = os.path.join(self.directory, os.path.basename(relative_path))
        if os.path.isfile(path):
            try:
                os.remove(path)
            except OSError as e:
                logger.warning(f"Failed to delete upload {path}: {e}")

    def locate(self, filename):
        """Return (name, absolute path) for a download request, or raise StoredFileNotFound."""
        name = resolve_download_name(filename)
        if name is None:
            raise StoredFileNotFound(filename)
        path = os.path.join(self.directory, name)
        if not os.path.isfile(path):
            logger.warning(f"Requested file not found: {path}")
            raise StoredFileNotFound(name)
        return name, path


def get_upload_store():
    return current_app.extensions['upload_store']

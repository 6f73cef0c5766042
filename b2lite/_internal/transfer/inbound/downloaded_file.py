######################################################################
#
# File: b2lite/_internal/transfer/inbound/downloaded_file.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
import os
from typing import BinaryIO

import requests

from b2lite._internal.exception import (
    B2ConnectionError,
    ChecksumMismatch,
    DestinationError,
    ValidationError,
)
from b2lite._internal.http_constants import (
    CONTENT_SHA1_HEADER_LOWER,
    DOWNLOAD_CHUNK_SIZE,
    LARGE_FILE_SHA1_HEADER_LOWER,
    NO_CHECKSUM,
    UNVERIFIED_CHECKSUM_PREFIX,
)
from b2lite._internal.utils import b2_url_decode, hex_sha1_of_file

logger = logging.getLogger(__name__)


def _strip_unverified_prefix(content_sha1: str | None) -> str | None:
    if content_sha1 is not None and content_sha1.startswith(UNVERIFIED_CHECKSUM_PREFIX):
        return content_sha1[len(UNVERIFIED_CHECKSUM_PREFIX):]
    return content_sha1


class DownloadedFile:
    """
    Result of a download: the response headers, and where and how much was written.

    :ivar local_path: path the content was saved to, ``None`` until :meth:`save_to` is called
    :ivar bytes_written: number of bytes written by :meth:`save` or :meth:`save_to`
    :ivar verified: ``True`` once :meth:`verify` has succeeded
    """

    def __init__(self, response: requests.Response, chunk_size: int = DOWNLOAD_CHUNK_SIZE):
        self.response = response
        self.headers = response.headers
        self.chunk_size = chunk_size
        self.local_path: str | None = None
        self.bytes_written = 0
        self.verified = False

    @property
    def file_id(self) -> str | None:
        return self.headers.get('x-bz-file-id')

    @property
    def file_name(self) -> str | None:
        file_name = self.headers.get('x-bz-file-name')
        return b2_url_decode(file_name) if file_name is not None else None

    @property
    def content_type(self) -> str | None:
        return self.headers.get('content-type')

    @property
    def content_length(self) -> int | None:
        content_length = self.headers.get('content-length')
        return int(content_length) if content_length is not None else None

    @property
    def content_sha1(self) -> str | None:
        """
        Whole-file SHA1 advertised by the service, without the ``unverified:`` marker.

        Large files have no whole-file checksum of their own; for them the checksum
        recorded in the ``large_file_sha1`` file info is used.
        """
        content_sha1 = _strip_unverified_prefix(self.headers.get(CONTENT_SHA1_HEADER_LOWER))
        if content_sha1 in (None, NO_CHECKSUM):
            content_sha1 = self.headers.get(LARGE_FILE_SHA1_HEADER_LOWER)
        return content_sha1

    def save(self, file: BinaryIO) -> int:
        """
        Read data from the response and write it to a file-like object.

        :return: number of bytes written
        :raises B2ConnectionError: if the connection broke while reading the body
        """
        bytes_written = 0
        try:
            for data in self.response.iter_content(chunk_size=self.chunk_size):
                file.write(data)
                bytes_written += len(data)
        except requests.RequestException as e:
            logger.debug('download interrupted after %d bytes', bytes_written, exc_info=True)
            raise B2ConnectionError(str(e)) from e
        self.bytes_written = bytes_written
        return bytes_written

    def save_to(self, path_: str | os.PathLike) -> None:
        """
        Save the content to a local file, truncating it if it already exists.

        :raises DestinationError: if the file cannot be opened, written or closed
        """
        try:
            with open(path_, 'wb') as file:
                self.save(file)
        except OSError as e:
            raise DestinationError(f'{os.fspath(path_)}: {e.strerror or e}') from e
        self.local_path = os.fspath(path_)

    def verify(self) -> None:
        """
        Recompute the SHA1 of the saved file and compare it with the advertised one.

        The file is left on disk when the check fails.

        :raises ValidationError: if nothing was saved to a local file yet
        :raises DestinationError: if the saved file cannot be read back
        :raises ChecksumMismatch: on mismatch, or if the service advertised no checksum
        """
        if self.local_path is None:
            raise ValidationError('save_to() must be called before verify()')
        expected = self.content_sha1
        try:
            actual = hex_sha1_of_file(self.local_path)
        except OSError as e:
            raise DestinationError(f'{self.local_path}: {e.strerror or e}') from e
        if expected is None or actual != expected:
            raise ChecksumMismatch(checksum_type='SHA1', expected=expected, actual=actual)
        self.verified = True

######################################################################
#
# File: b2lite/_internal/transfer/inbound/download_manager.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
import os

from b2lite._internal.exception import ValidationError
from b2lite._internal.http_constants import DOWNLOAD_CHUNK_SIZE
from b2lite._internal.utils import B2TraceMetaAbstract

from .downloaded_file import DownloadedFile

logger = logging.getLogger(__name__)


class DownloadManager(metaclass=B2TraceMetaAbstract):
    """
    Handle complex actions around downloads to free raw_api from that responsibility.
    """

    DOWNLOADED_FILE_CLASS = DownloadedFile

    def __init__(self, services, chunk_size: int = DOWNLOAD_CHUNK_SIZE):
        """
        :param b2lite._internal.api.Services services:
        :param chunk_size: size of the blocks read from the response and written to disk
        """
        self.services = services
        self.chunk_size = chunk_size

    @property
    def session(self):
        return self.services.session

    def get_file_stream(self, bucket_name: str, file_name: str):
        """
        Open a streaming download of a file by name.

        The caller owns the returned context manager and must close it.

        :return: context manager around the streamed :class:`requests.Response`
        """
        self._check_names(bucket_name, file_name)
        url = self.session.get_download_url_by_name(bucket_name, file_name)
        logger.debug('downloading %s', url)
        return self.session.download_file_from_url(url)

    def download_file(
        self,
        bucket_name: str,
        file_name: str,
        local_path: str | os.PathLike,
        verify: bool = False,
    ) -> DownloadedFile:
        """
        Download a file by name and save it to ``local_path``, replacing whatever was there.

        :param verify: recompute the SHA1 of the saved file and compare it with the one
                       advertised by the service
        :raises ValidationError: if a name or the local path is missing
        :raises DestinationError: if ``local_path`` cannot be opened for writing
        :raises B2ConnectionError: if the connection broke while the body was read
        :raises ChecksumMismatch: if ``verify`` is set and the content does not match
        """
        self._check_names(bucket_name, file_name)
        if not local_path:
            raise ValidationError('local path is required')

        with self.get_file_stream(bucket_name, file_name) as response:
            downloaded_file = self.DOWNLOADED_FILE_CLASS(response, self.chunk_size)
            downloaded_file.save_to(local_path)
        logger.info(
            'downloaded %s/%s to %s (%d bytes)',
            bucket_name,
            file_name,
            downloaded_file.local_path,
            downloaded_file.bytes_written,
        )

        if verify:
            downloaded_file.verify()
        return downloaded_file

    @classmethod
    def _check_names(cls, bucket_name, file_name):
        if not bucket_name:
            raise ValidationError('bucket name is required')
        if not file_name:
            raise ValidationError('file name is required')

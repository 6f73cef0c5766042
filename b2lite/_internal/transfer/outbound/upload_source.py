######################################################################
#
# File: b2lite/_internal/transfer/outbound/upload_source.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import io
import logging
import os

from b2lite._internal.exception import InvalidUploadSource
from b2lite._internal.utils import Sha1HexDigest, hex_sha1_of_file

logger = logging.getLogger(__name__)


class UploadSourceLocalFile:
    """
    A local file to be uploaded.

    Every method touches the file system again, so the methods may run concurrently
    and each upload attempt can get a stream of its own.
    """

    def __init__(self, local_path: os.PathLike | str):
        """
        :param local_path: Any path-like object that points to a file to be uploaded.
        """
        self.local_path = local_path

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__} local_path={self.local_path!r} id={id(self)}>'

    def get_content_sha1(self) -> Sha1HexDigest:
        try:
            return hex_sha1_of_file(self.local_path)
        except OSError as e:
            raise InvalidUploadSource(self._describe(e)) from e

    def get_content_length(self) -> int:
        try:
            return os.stat(self.local_path).st_size
        except OSError as e:
            raise InvalidUploadSource(self._describe(e)) from e

    def open(self) -> io.BufferedReader:
        try:
            return open(self.local_path, 'rb')
        except OSError as e:
            raise InvalidUploadSource(self._describe(e)) from e

    def stat_and_open(self) -> tuple[int, io.BufferedReader]:
        """
        Return the size of the file and a fresh binary stream positioned at its start.
        """
        content_length = self.get_content_length()
        return content_length, self.open()

    def _describe(self, error: OSError) -> str:
        return f'{os.fspath(self.local_path)}: {error.strerror or error}'

######################################################################
#
# File: b2lite/_internal/transfer/outbound/upload_request.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import os
from dataclasses import dataclass

from b2lite._internal.exception import ValidationError
from b2lite._internal.http_constants import DEFAULT_CONTENT_TYPE, DEFAULT_MAX_UPLOAD_ATTEMPTS


@dataclass
class UploadRequest:
    """
    Everything needed to upload one local file as one remote file.

    :ivar bucket_id: id of the destination bucket
    :ivar local_file_path: path of the file to read
    :ivar file_name: remote file name
    :ivar content_type: MIME type, ``b2/x-auto`` lets the service pick one
    :ivar max_retry_attempts: how many times the upload may be attempted (not retried) in total
    """
    bucket_id: str
    local_file_path: os.PathLike | str
    file_name: str
    content_type: str = DEFAULT_CONTENT_TYPE
    max_retry_attempts: int = DEFAULT_MAX_UPLOAD_ATTEMPTS

    def validate(self) -> None:
        missing = [
            name for name in ('bucket_id', 'local_file_path', 'file_name')
            if not getattr(self, name)
        ]
        if missing:
            raise ValidationError(f'missing required upload parameters: {", ".join(missing)}')
        if not self.content_type:
            raise ValidationError('content_type must not be empty')
        if not isinstance(self.max_retry_attempts, int) or self.max_retry_attempts < 1:
            raise ValidationError(
                f'max_retry_attempts must be a positive integer, not {self.max_retry_attempts!r}'
            )

######################################################################
#
# File: b2lite/exception.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from b2lite._internal.account_info.exception import MissingAccountData
from b2lite._internal.exception import AccessDenied
from b2lite._internal.exception import ApiError
from b2lite._internal.exception import AuthError
from b2lite._internal.exception import B2ConnectionError
from b2lite._internal.exception import B2Error
from b2lite._internal.exception import B2RequestTimeout
from b2lite._internal.exception import B2SimpleError
from b2lite._internal.exception import BadJson
from b2lite._internal.exception import BadRequest
from b2lite._internal.exception import BrokenPipe
from b2lite._internal.exception import BucketIdNotFound
from b2lite._internal.exception import CapExceeded
from b2lite._internal.exception import ChecksumMismatch
from b2lite._internal.exception import Conflict
from b2lite._internal.exception import ConnectionReset
from b2lite._internal.exception import DestinationError
from b2lite._internal.exception import DuplicateBucketName
from b2lite._internal.exception import FileNotPresent
from b2lite._internal.exception import IntegrityError
from b2lite._internal.exception import InvalidAuthToken
from b2lite._internal.exception import InvalidJsonResponse
from b2lite._internal.exception import InvalidUploadSource
from b2lite._internal.exception import NonExistentBucket
from b2lite._internal.exception import NonExistentFile
from b2lite._internal.exception import NotFoundError
from b2lite._internal.exception import PreconditionError
from b2lite._internal.exception import ResourceNotFound
from b2lite._internal.exception import ServiceError
from b2lite._internal.exception import TooManyRequests
from b2lite._internal.exception import TransportError
from b2lite._internal.exception import Unauthorized
from b2lite._internal.exception import UnknownError
from b2lite._internal.exception import UnknownHost
from b2lite._internal.exception import UnusableFileName
from b2lite._internal.exception import UploadCancelled
from b2lite._internal.exception import ValidationError
from b2lite._internal.exception import interpret_b2_error

__all__ = (
    'AccessDenied',
    'ApiError',
    'AuthError',
    'B2ConnectionError',
    'B2Error',
    'B2RequestTimeout',
    'B2SimpleError',
    'BadJson',
    'BadRequest',
    'BrokenPipe',
    'BucketIdNotFound',
    'CapExceeded',
    'ChecksumMismatch',
    'Conflict',
    'ConnectionReset',
    'DestinationError',
    'DuplicateBucketName',
    'FileNotPresent',
    'IntegrityError',
    'InvalidAuthToken',
    'InvalidJsonResponse',
    'InvalidUploadSource',
    'MissingAccountData',
    'NonExistentBucket',
    'NonExistentFile',
    'NotFoundError',
    'PreconditionError',
    'ResourceNotFound',
    'ServiceError',
    'TooManyRequests',
    'TransportError',
    'Unauthorized',
    'UnknownError',
    'UnknownHost',
    'UnusableFileName',
    'UploadCancelled',
    'ValidationError',
    'interpret_b2_error',
)

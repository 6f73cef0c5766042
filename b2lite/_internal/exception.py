######################################################################
#
# File: b2lite/_internal/exception.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
from abc import ABCMeta
from typing import Any

from .http_constants import (
    APPLICATION_ERROR_CODE,
    APPLICATION_ERROR_MESSAGE,
    APPLICATION_ERROR_STATUS,
)
from .utils import camelcase_to_underscore, trace_call

logger = logging.getLogger(__name__)


class B2Error(Exception, metaclass=ABCMeta):
    """
    Base class of every error raised by this library.

    Each error carries the normalized triple of ``status``, ``code`` and ``message``.
    ``status`` is the HTTP status of the service response, or 0 when no well-formed
    response was obtained (network failure, malformed body, invalid input, local checks).
    """

    DEFAULT_STATUS = APPLICATION_ERROR_STATUS
    DEFAULT_CODE = APPLICATION_ERROR_CODE
    DEFAULT_MESSAGE = APPLICATION_ERROR_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        code: str | None = None,
        status: int | None = None,
        raw_response: Any = None,
    ):
        if message is None:
            message = self.DEFAULT_MESSAGE
        self.message = message
        self.code = self.DEFAULT_CODE if code is None else code
        self.status = self.DEFAULT_STATUS if status is None else status
        self.raw_response = raw_response
        # the service MAY have asked to pause before issuing any more requests
        self.retry_after_seconds = None
        super().__init__(message)

    @property
    def prefix(self):
        """
        Nice, auto-generated error message prefix.

        >>> B2SimpleError().prefix
        'Simple error'
        >>> UploadCancelled().prefix
        'Upload cancelled'
        """
        prefix = self.__class__.__name__
        if prefix.startswith('B2'):
            prefix = prefix[2:]
        prefix = camelcase_to_underscore(prefix).replace('_', ' ')
        return prefix[0].upper() + prefix[1:]

    def as_dict(self) -> dict[str, Any]:
        return {'status': self.status, 'code': self.code, 'message': self.message}


class B2SimpleError(B2Error, metaclass=ABCMeta):
    """
    A B2Error with a message prefix.
    """

    def __str__(self):
        return f'{self.prefix}: {super().__str__()}'


class ValidationError(B2SimpleError):
    """
    Caller input is missing or malformed; nothing was sent to the service.
    """
    DEFAULT_MESSAGE = 'invalid input'


class UnusableFileName(ValidationError):
    """
    Raise when a remote file name doesn't meet the rules.

    https://www.backblaze.com/b2/docs/files.html
    """


class InvalidUploadSource(ValidationError):
    """
    The local file to upload cannot be read.
    """


class DestinationError(ValidationError):
    """
    The local path to download to cannot be written.
    """


class PreconditionError(B2SimpleError):
    """
    The operation was called on a session that has not been authorized.
    """
    DEFAULT_MESSAGE = 'session is not authorized, call authorize() first'


class UploadCancelled(B2SimpleError):
    DEFAULT_MESSAGE = 'the upload was cancelled before it completed'


class AuthError(B2Error):
    """
    The authorization call failed.  Carries the status, code and message of the
    underlying failure (status 0 when the service could not be reached).
    """

    @classmethod
    def from_error(cls, error: B2Error) -> AuthError:
        return cls(error.message, error.code, error.status, error.raw_response)

    def __str__(self):
        if self.status:
            return f'Authorization failed: {self.message} ({self.status} {self.code})'
        return f'Authorization failed: {self.message}'


class ApiError(B2Error):
    """
    The service answered with a non-200 status and a JSON error body.
    """
    DEFAULT_CODE = 'unknown'
    DEFAULT_MESSAGE = ''

    def __str__(self):
        return f'{self.message} ({self.code})'


class BadRequest(ApiError):
    DEFAULT_STATUS = 400
    DEFAULT_CODE = 'bad_request'


class BadJson(BadRequest):
    DEFAULT_CODE = 'bad_json'


class DuplicateBucketName(BadRequest):
    DEFAULT_CODE = 'duplicate_bucket_name'


class BucketIdNotFound(BadRequest):
    DEFAULT_CODE = 'bad_bucket_id'


class FileNotPresent(BadRequest):
    DEFAULT_CODE = 'file_not_present'


class Unauthorized(ApiError):
    DEFAULT_STATUS = 401
    DEFAULT_CODE = 'unauthorized'


class InvalidAuthToken(Unauthorized):
    """
    Specific type of Unauthorized that means the auth token is invalid or expired.
    This is not the case where the auth token is valid, but does not
    allow access.
    """
    DEFAULT_CODE = 'bad_auth_token'

    def __str__(self):
        return f'Invalid authorization token. Server said: {self.message} ({self.code})'


class AccessDenied(ApiError):
    DEFAULT_STATUS = 403
    DEFAULT_CODE = 'access_denied'


class CapExceeded(AccessDenied):
    DEFAULT_CODE = 'cap_exceeded'


class ResourceNotFound(ApiError):
    DEFAULT_STATUS = 404
    DEFAULT_CODE = 'not_found'


class Conflict(ApiError):
    DEFAULT_STATUS = 409
    DEFAULT_CODE = 'conflict'


class TooManyRequests(ApiError):
    DEFAULT_STATUS = 429
    DEFAULT_CODE = 'too_many_requests'

    def __init__(self, *args, retry_after_seconds: int | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        self.retry_after_seconds = retry_after_seconds


class ServiceError(ApiError):
    """
    Used for HTTP status codes 500 through 599.
    """
    DEFAULT_STATUS = 500
    DEFAULT_CODE = 'internal_error'

    def __str__(self):
        return '%d %s %s' % (self.status, self.code, self.message)


class TransportError(B2SimpleError):
    """
    The request never produced a well-formed service response.
    """


class B2ConnectionError(TransportError):
    pass


class B2RequestTimeout(TransportError):
    pass


class UnknownHost(TransportError):
    DEFAULT_MESSAGE = 'unable to resolve the host name of the service'


class BrokenPipe(TransportError):
    DEFAULT_MESSAGE = 'unable to send entire request'


class ConnectionReset(TransportError):
    DEFAULT_MESSAGE = 'connection reset'


class UnknownError(TransportError):
    pass


class InvalidJsonResponse(TransportError):
    """
    The body of a response could not be decoded as the expected JSON document.
    The HTTP status of that response, if any, is kept in ``http_status``.
    """
    UP_TO_BYTES_COUNT = 200

    def __init__(self, content: bytes, http_status: int | None = None, raw_response: Any = None):
        self.content = content
        self.http_status = http_status
        message = self.content[:self.UP_TO_BYTES_COUNT].decode('utf-8', errors='replace')
        if len(self.content) > self.UP_TO_BYTES_COUNT:
            message += '...'
        super().__init__(message, raw_response=raw_response)


class NotFoundError(B2SimpleError):
    """
    A name given by the caller could not be resolved to an identifier.
    """


class NonExistentBucket(NotFoundError):
    def __init__(self, bucket_name: str | None = None):
        super().__init__(f'no bucket named {bucket_name!r}')
        self.bucket_name = bucket_name


class NonExistentFile(NotFoundError):
    def __init__(self, file_name: str | None = None, bucket_id: str | None = None):
        super().__init__(f'Unable to locate file {file_name!r} in bucket {bucket_id!r}')
        self.file_name = file_name
        self.bucket_id = bucket_id


class IntegrityError(B2SimpleError):
    """
    Downloaded content does not match the checksum advertised by the service.
    """


class ChecksumMismatch(IntegrityError):
    def __init__(self, checksum_type: str, expected: str | None, actual: str):
        super().__init__(f'{checksum_type} sum mismatch: expected {expected}, got {actual}')
        self.checksum_type = checksum_type
        self.expected = expected
        self.actual = actual


def _file_id_or_name(post_params: dict[str, Any]) -> str | None:
    return post_params.get('fileId') or post_params.get('fileName')


@trace_call(logger)
def interpret_b2_error(
    status: int,
    code: str | None,
    message: str | None,
    response_headers: dict[str, Any],
    post_params: dict[str, Any] | None = None,
    raw_response: Any = None,
) -> ApiError:
    """
    Pick the ApiError subclass matching an error response of the service.

    ``status`` always becomes the status of the returned error.
    """
    post_params = post_params or {}
    details = dict(message=message, code=code, status=status, raw_response=raw_response)

    if status == 400 and code == 'bad_json':
        return BadJson(**details)
    elif (
        (status == 400 and code in ('no_such_file', 'file_not_present')) or
        (status == 404 and code == 'not_found')
    ):
        # delete_file_version returns 400 and "file_not_present"
        # get_file_info and downloads return 404 and "not_found"
        if message is None:
            details['message'] = f'File not present: {_file_id_or_name(post_params)}'
        return FileNotPresent(**details)
    elif status == 404:
        return ResourceNotFound(**details)
    elif status == 400 and code == 'duplicate_bucket_name':
        if message is None:
            details['message'] = f'Bucket name is already in use: {post_params.get("bucketName")}'
        return DuplicateBucketName(**details)
    elif status == 400 and code == 'bad_bucket_id':
        if message is None:
            details['message'] = f'Bucket does not exist: {post_params.get("bucketId")}'
        return BucketIdNotFound(**details)
    elif status == 400:
        return BadRequest(**details)
    elif status == 401 and code in ('bad_auth_token', 'expired_auth_token'):
        return InvalidAuthToken(**details)
    elif status == 401:
        return Unauthorized(**details)
    elif status == 403 and code in (
        'storage_cap_exceeded', 'transaction_cap_exceeded', 'download_cap_exceeded'
    ):
        return CapExceeded(**details)
    elif status == 403:
        return AccessDenied(**details)
    elif status == 409:
        return Conflict(**details)
    elif status == 429:
        return TooManyRequests(
            retry_after_seconds=_parse_retry_after(response_headers.get('retry-after')),
            **details,
        )
    elif 500 <= status < 600:
        return ServiceError(**details)
    return ApiError(**details)


def _parse_retry_after(value) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning('cannot parse retry-after header value: %r', value)
        return None

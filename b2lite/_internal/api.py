######################################################################
#
# File: b2lite/_internal/api.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
import os
import threading

from .api_config import DEFAULT_HTTP_API_CONFIG, B2HttpApiConfig
from .exception import NonExistentBucket, NonExistentFile, ValidationError
from .http_constants import DEFAULT_BUCKET_TYPE, DEFAULT_CONTENT_TYPE, DEFAULT_MAX_UPLOAD_ATTEMPTS, DEFAULT_REALM
from .session import B2Session
from .transfer.inbound.download_manager import DownloadManager
from .transfer.inbound.downloaded_file import DownloadedFile
from .transfer.outbound.upload_manager import UploadManager
from .transfer.outbound.upload_request import UploadRequest
from .types import (
    Bucket,
    FileVersion,
    ListBucketsResponse,
    ListFileNamesResponse,
    ListFileVersionsResponse,
    UploadUrl,
)
from .utils import B2TraceMeta, limit_trace_arguments
from .utils.typing import JSON

logger = logging.getLogger(__name__)


class Services:
    """ Gathers objects that provide high level logic over raw api usage. """
    UPLOAD_MANAGER_CLASS = staticmethod(UploadManager)
    DOWNLOAD_MANAGER_CLASS = staticmethod(DownloadManager)

    def __init__(self, api, max_upload_workers: int | None = None):
        """
        Initialize Services object using given session.

        :param b2lite.B2Api api:
        :param max_upload_workers: a number of threads preparing uploads
        """
        self.api = api
        self.session = api.session
        self.upload_manager = self.UPLOAD_MANAGER_CLASS(
            services=self, max_workers=max_upload_workers
        )
        self.download_manager = self.DOWNLOAD_MANAGER_CLASS(services=self)


class B2Api(metaclass=B2TraceMeta):
    """
    Provide access to B2 buckets and files.

    While :class:`b2lite.B2RawHTTPApi` provides direct access to the B2 web APIs, this
    class handles several things that simplify the task of uploading
    and downloading files:

    - refuses to talk to the service before :meth:`authorize` succeeded
    - re-acquires the authorization token when it expires
    - prepares uploads concurrently and retries them when an upload URL is busy
    - resolves file names to file ids
    - verifies downloaded content

    Results are the decoded JSON bodies returned by the service.
    """
    SESSION_CLASS = staticmethod(B2Session)
    SERVICES_CLASS = staticmethod(Services)

    @limit_trace_arguments(skip=('application_key',))
    def __init__(
        self,
        account_id: str | None,
        application_key: str | None,
        realm: str = DEFAULT_REALM,
        api_config: B2HttpApiConfig = DEFAULT_HTTP_API_CONFIG,
        max_upload_workers: int | None = None,
    ):
        """
        Initialize the API with account credentials; nothing is sent until :meth:`authorize`.

        :param account_id: account id (or application key id)
        :param application_key: the secret paired with ``account_id``
        :param realm: a realm name ("production", "staging", "dev") or a literal base URL
        :param api_config: low level transport configuration
        :param max_upload_workers: a number of threads preparing uploads
        :raises ValidationError: if ``max_upload_workers`` is less than 1
        """
        if max_upload_workers is not None and max_upload_workers < 1:
            raise ValidationError(
                f'max_upload_workers must be at least 1, not {max_upload_workers!r}'
            )
        self.session = self.SESSION_CLASS(
            account_id, application_key, realm=realm, api_config=api_config
        )
        self.api_config = api_config
        self.services = self.SERVICES_CLASS(api=self, max_upload_workers=max_upload_workers)

    @property
    def account_info(self):
        return self.session.account_info

    @property
    def raw_api(self):
        return self.session.raw_api

    @property
    def authorized(self) -> bool:
        return self.session.authorized

    def authorize(self) -> None:
        """
        Perform account authorization with the credentials given at construction.

        :raises AuthError: if the credentials were rejected or the service could not be reached
        """
        self.session.authorize()

    def get_account_id(self) -> str:
        """
        Return the account ID.
        """
        return self.account_info.get_account_id()

    @property
    def minimum_part_size(self) -> int:
        return self.account_info.get_minimum_part_size()

    # buckets

    def list_buckets(self, bucket_name: str | None = None) -> ListBucketsResponse | Bucket | None:
        """
        List the buckets of the account.

        :param bucket_name: if given, return only the bucket with exactly this name,
                            or ``None`` if there is no such bucket
        :return: the whole response (``{'buckets': [...]}``), or a single bucket dict when filtering
        """
        response = self.session.list_buckets()
        if bucket_name is None:
            return response
        for bucket in response['buckets']:
            if bucket['bucketName'] == bucket_name:
                return bucket
        return None

    def create_bucket(self, bucket_name: str, bucket_type: str = DEFAULT_BUCKET_TYPE) -> Bucket:
        """
        Create a bucket.

        :param bucket_name: bucket name
        :param bucket_type: ``"allPublic"`` or ``"allPrivate"``
        """
        if not bucket_name:
            raise ValidationError('bucket name is required')
        return self.session.create_bucket(bucket_name, bucket_type or DEFAULT_BUCKET_TYPE)

    # files

    def list_file_names(
        self,
        bucket_id: str,
        start_file_name: str | None = None,
        max_file_count: int | None = None,
        depth: int | None = None,
        prefix: str | None = None,
        delimiter: str | None = None,
    ) -> ListFileNamesResponse:
        """
        List one page of file names.  To get the next page, call again with
        ``start_file_name`` set to the ``nextFileName`` of the response.
        """
        if not bucket_id:
            raise ValidationError('bucket id is required')
        return self.session.list_file_names(
            bucket_id,
            start_file_name=start_file_name,
            max_file_count=max_file_count,
            prefix=prefix,
            delimiter=delimiter,
            depth=depth,
        )

    def list_file_versions(
        self,
        bucket_id: str,
        start_file_name: str | None = None,
        start_file_id: str | None = None,
        max_file_count: int | None = None,
        strict: bool = False,
        prefix: str | None = None,
        delimiter: str | None = None,
    ) -> ListFileVersionsResponse:
        """
        List one page of file versions.

        :param strict: keep only the versions named exactly ``start_file_name``;
                       only the returned page is searched, and the ``nextFileName`` /
                       ``nextFileId`` cursors are returned unchanged
        :param delimiter: roll up the names below the first delimiter after ``prefix`` into folders
        """
        if not bucket_id:
            raise ValidationError('bucket id is required')
        response = self.session.list_file_versions(
            bucket_id,
            start_file_name=start_file_name,
            start_file_id=start_file_id,
            max_file_count=max_file_count,
            prefix=prefix,
            delimiter=delimiter,
        )
        if strict:
            response = dict(response)
            response['files'] = [
                file_version for file_version in response['files']
                if file_version['fileName'] == start_file_name
            ]
        return response

    def get_file_info(
        self,
        file_id: str | None = None,
        file_name: str | None = None,
        bucket_id: str | None = None,
        bucket_name: str | None = None,
    ) -> FileVersion:
        """
        Return the description of a file version, found by id or by name.

        Without ``file_id``, ``file_name`` is resolved within the bucket given by
        ``bucket_id`` or, failing that, ``bucket_name``.  The most recent version
        with that exact name is described.

        :raises ValidationError: if neither a file id nor a file name with a bucket is given
        :raises NonExistentBucket: if ``bucket_name`` does not name a bucket
        :raises NonExistentFile: if no version has exactly that name
        """
        if file_id:
            return self.session.get_file_info_by_id(file_id)
        if not file_name or not (bucket_id or bucket_name):
            raise ValidationError('either a file id, or a file name and a bucket, is required')

        if not bucket_id:
            bucket = self.list_buckets(bucket_name)
            if bucket is None:
                raise NonExistentBucket(bucket_name)
            bucket_id = bucket['bucketId']

        file_id = self._find_file_id(bucket_id, file_name)
        return self.session.get_file_info_by_id(file_id)

    def _find_file_id(self, bucket_id: str, file_name: str) -> str:
        response = self.list_file_versions(bucket_id, start_file_name=file_name, strict=True)
        if not response['files']:
            raise NonExistentFile(file_name, bucket_id)
        return response['files'][0]['fileId']

    def delete_file(self, file_id: str, file_name: str) -> JSON:
        """
        Delete one version of a file; other versions with the same name are kept.
        """
        if not file_id or not file_name:
            raise ValidationError('file id and file name are required')
        return self.session.delete_file_version(file_id, file_name)

    # upload

    def get_upload_url(self, bucket_id: str) -> UploadUrl:
        """
        Get a fresh upload endpoint of a bucket.

        :return: ``{'bucketId': ..., 'uploadUrl': ..., 'authorizationToken': ...}``
        """
        if not bucket_id:
            raise ValidationError('bucket id is required')
        return self.session.get_upload_url(bucket_id)

    def upload_file(
        self,
        bucket_id: str,
        local_file_path: str | os.PathLike,
        file_name: str,
        content_type: str | None = None,
        max_retry_attempts: int = DEFAULT_MAX_UPLOAD_ATTEMPTS,
        *,
        cancel_event: threading.Event | None = None,
    ) -> FileVersion:
        """
        Upload a local file.

        :param bucket_id: id of the destination bucket
        :param local_file_path: path of the file to upload
        :param file_name: name of the file in the bucket
        :param content_type: MIME type, ``b2/x-auto`` (detect on the service side) if not given
        :param max_retry_attempts: how many times the upload may be attempted
        :param cancel_event: set it to stop retrying
        :return: the description of the new file version
        """
        upload_request = UploadRequest(
            bucket_id=bucket_id,
            local_file_path=local_file_path,
            file_name=file_name,
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            max_retry_attempts=max_retry_attempts,
        )
        return self.services.upload_manager.upload_file(upload_request, cancel_event=cancel_event)

    # download

    def get_download_url_by_name(self, bucket_name: str, file_name: str) -> str:
        """
        Return the URL to download the given file from.
        """
        return self.session.get_download_url_by_name(bucket_name, file_name)

    def get_file_stream(self, bucket_name: str, file_name: str):
        """
        Start downloading a file and return the streamed response.

        Use the result as a context manager to close the connection::

            with b2_api.get_file_stream('photos', 'img.png') as response:
                for chunk in response.iter_content(chunk_size=65536):
                    ...
        """
        return self.services.download_manager.get_file_stream(bucket_name, file_name)

    def download_file(
        self,
        bucket_name: str,
        file_name: str,
        local_path: str | os.PathLike,
        verify: bool = False,
    ) -> DownloadedFile:
        """
        Download a file and save it to ``local_path``.

        :param verify: check the SHA1 of the saved file against the one advertised by the service
        :raises ChecksumMismatch: if ``verify`` is set and the checksums differ; the file is kept
        """
        return self.services.download_manager.download_file(
            bucket_name, file_name, local_path, verify=verify
        )

    # download authorization

    def get_auth_token(self, bucket_id: str, file_name_prefix: str, duration: int) -> str:
        """
        Return a token that allows downloading files whose names start with ``file_name_prefix``.

        :param duration: validity of the token, in seconds
        """
        if not bucket_id or file_name_prefix is None or not duration:
            raise ValidationError('bucket id, file name prefix and duration are required')
        response = self.session.get_download_authorization(bucket_id, file_name_prefix, duration)
        return response['authorizationToken']

    get_authorization_token = get_auth_token

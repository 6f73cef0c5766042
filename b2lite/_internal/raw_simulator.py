######################################################################
#
# File: b2lite/_internal/raw_simulator.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import itertools
import logging
import re

from requests.structures import CaseInsensitiveDict

from .b2http import ResponseContextManager
from .exception import (
    BadRequest,
    BucketIdNotFound,
    DuplicateBucketName,
    FileNotPresent,
    InvalidAuthToken,
    ResourceNotFound,
    Unauthorized,
)
from .http_constants import BUCKET_TYPE_ALL_PRIVATE, BUCKET_TYPE_ALL_PUBLIC, DEFAULT_CONTENT_TYPE
from .raw_api import AbstractRawApi, check_b2_filename
from .utils import b2_url_decode, b2_url_encode, hex_sha1_of_bytes

logger = logging.getLogger(__name__)


class FileSimulator:
    """
    One version of a file: either an upload, or a deletion marker.
    """

    def __init__(
        self,
        account_id,
        bucket,
        file_id,
        action,
        name,
        content_type,
        content_sha1,
        data_bytes,
        upload_timestamp,
    ):
        self.account_id = account_id
        self.bucket = bucket
        self.file_id = file_id
        self.action = action
        self.name = name
        self.content_type = content_type
        self.content_sha1 = content_sha1
        if content_sha1 and content_sha1 != 'none' and len(content_sha1) != 40:
            raise ValueError(content_sha1)
        self.data_bytes = data_bytes
        self.upload_timestamp = upload_timestamp

    def sort_key(self):
        """
        Return a key that can be used to sort the files in a
        bucket in the order that b2_list_file_versions returns them.
        """
        return (self.name, self.file_id)

    def is_visible(self):
        return self.action == 'upload'

    def as_download_headers(self) -> CaseInsensitiveDict:
        return CaseInsensitiveDict(
            {
                'content-length': str(len(self.data_bytes)),
                'content-type': self.content_type,
                'x-bz-content-sha1': self.content_sha1,
                'x-bz-file-id': self.file_id,
                'x-bz-file-name': b2_url_encode(self.name),
                'x-bz-upload-timestamp': str(self.upload_timestamp),
            }
        )

    def as_upload_result(self):
        return dict(
            fileId=self.file_id,
            fileName=self.name,
            accountId=self.account_id,
            bucketId=self.bucket.bucket_id,
            contentLength=len(self.data_bytes) if self.data_bytes is not None else 0,
            contentType=self.content_type,
            contentSha1=self.content_sha1,
            fileInfo={},
            action=self.action,
            uploadTimestamp=self.upload_timestamp,
        )  # yapf: disable

    def as_list_files_dict(self):
        result = self.as_upload_result()
        result['size'] = result.pop('contentLength')
        return result


class FakeResponse:
    status_code = 200

    def __init__(self, file_sim, url):
        self.data_bytes = file_sim.data_bytes
        self.headers = file_sim.as_download_headers()
        self.url = url
        self.closed = False

    def iter_content(self, chunk_size=1):
        for offset in range(0, len(self.data_bytes), chunk_size):
            yield self.data_bytes[offset:offset + chunk_size]

    def close(self):
        self.closed = True


class BucketSimulator:

    # File IDs start at 9999 and count down, so they sort in the order
    # returned by list_file_versions. The IDs are strings.
    FIRST_FILE_NUMBER = 9999

    FILE_SIMULATOR_CLASS = FileSimulator
    RESPONSE_CLASS = FakeResponse

    def __init__(self, api, account_id, bucket_id, bucket_name, bucket_type):
        assert bucket_type in [BUCKET_TYPE_ALL_PRIVATE, BUCKET_TYPE_ALL_PUBLIC]
        self.api = api
        self.account_id = account_id
        self.bucket_id = bucket_id
        self.bucket_name = bucket_name
        self.bucket_type = bucket_type
        self.revision = 1
        self.upload_url_counter = itertools.count()
        self.file_id_counter = itertools.count(self.FIRST_FILE_NUMBER, -1)
        self.upload_timestamp_counter = itertools.count(5000)
        # File IDs and names are stored as strings
        self.file_id_to_file: dict[str, FileSimulator] = dict()
        self.file_name_and_id_to_file: dict[tuple[str, str], FileSimulator] = dict()

    def bucket_dict(self):
        return dict(
            accountId=self.account_id,
            bucketName=self.bucket_name,
            bucketId=self.bucket_id,
            bucketType=self.bucket_type,
            bucketInfo={},
            revision=self.revision,
        )

    def get_file(self, file_id, file_name) -> FileSimulator:
        try:
            return self.file_name_and_id_to_file[(file_name, file_id)]
        except KeyError:
            raise FileNotPresent(f'File not present: {file_name} {file_id}')

    def delete_file_version(self, file_id, file_name):
        key = (file_name, file_id)
        file_sim = self.get_file(file_id, file_name)
        del self.file_name_and_id_to_file[key]
        del self.file_id_to_file[file_id]
        return dict(fileId=file_id, fileName=file_name, uploadTimestamp=file_sim.upload_timestamp)

    def download_file_by_name(self, file_name, url):
        for (name, _), file_sim in sorted(self.file_name_and_id_to_file.items()):
            if name == file_name:
                if not file_sim.is_visible():
                    break
                return ResponseContextManager(self.RESPONSE_CLASS(file_sim, url))
        raise FileNotPresent(f'File not present: {file_name}', 'not_found', 404)

    def get_file_info_by_id(self, file_id):
        try:
            return self.file_id_to_file[file_id].as_upload_result()
        except KeyError:
            raise FileNotPresent(f'File not present: {file_id}', 'not_found', 404)

    def get_upload_url(self, account_auth_token):
        upload_id = next(self.upload_url_counter)
        upload_url = 'https://upload.example.com/%s/%d/%s' % (
            self.bucket_id, upload_id, account_auth_token
        )
        return dict(bucketId=self.bucket_id, uploadUrl=upload_url, authorizationToken=upload_url)

    def list_file_names(self, start_file_name=None, max_file_count=None, prefix=None):
        start_file_name = start_file_name or ''
        max_file_count = max_file_count or 100
        result_files = []
        next_file_name = None
        prev_file_name = None
        for key in sorted(self.file_name_and_id_to_file):
            (file_name, file_id) = key
            if start_file_name <= file_name and file_name != prev_file_name:
                if prefix is not None and not file_name.startswith(prefix):
                    continue
                prev_file_name = file_name
                file_sim = self.file_name_and_id_to_file[key]
                if file_sim.is_visible():
                    result_files.append(file_sim.as_list_files_dict())
                    if len(result_files) == max_file_count:
                        next_file_name = file_sim.name + ' '
                        break
                else:
                    logger.debug('skipping invisible file during listing: %s', key)
        return dict(files=result_files, nextFileName=next_file_name)

    def list_file_versions(
        self, start_file_name=None, start_file_id=None, max_file_count=None, prefix=None
    ):
        start_file_name = start_file_name or ''
        start_file_id = start_file_id or ''
        max_file_count = max_file_count or 100
        result_files = []
        next_file_name = None
        next_file_id = None
        for key in sorted(self.file_name_and_id_to_file):
            (file_name, file_id) = key
            if (start_file_name < file_name) or (
                start_file_name == file_name and
                (start_file_id == '' or int(start_file_id) <= int(file_id))
            ):
                if prefix is not None and not file_name.startswith(prefix):
                    continue
                file_sim = self.file_name_and_id_to_file[key]
                if len(result_files) == max_file_count:
                    next_file_name = file_sim.name
                    next_file_id = file_sim.file_id
                    break
                result_files.append(file_sim.as_list_files_dict())
        return dict(files=result_files, nextFileName=next_file_name, nextFileId=next_file_id)

    def upload_file(self, file_name, content_length, content_type, content_sha1, data_stream):
        data_bytes = data_stream.read()
        if len(data_bytes) != content_length:
            raise BadRequest(
                f'Content-Length {content_length} does not match the {len(data_bytes)} bytes sent'
            )
        computed_sha1 = hex_sha1_of_bytes(data_bytes)
        if content_sha1 != computed_sha1:
            raise BadRequest('Sha1 did not match data received')
        file_id = str(next(self.file_id_counter))
        if content_type == DEFAULT_CONTENT_TYPE:
            content_type = 'application/octet-stream'
        file_sim = self.FILE_SIMULATOR_CLASS(
            self.account_id,
            self,
            file_id,
            'upload',
            file_name,
            content_type,
            content_sha1,
            data_bytes,
            next(self.upload_timestamp_counter),
        )
        self.file_id_to_file[file_id] = file_sim
        self.file_name_and_id_to_file[file_sim.sort_key()] = file_sim
        return file_sim.as_upload_result()


class RawSimulator(AbstractRawApi):
    """
    Implement the same interface as B2RawHTTPApi by simulating all of the
    calls and keeping state in memory.

    The intended use for this class is for unit tests that test things
    built on top of B2RawHTTPApi.
    """

    BUCKET_SIMULATOR_CLASS = BucketSimulator
    API_URL = 'http://api.example.com'
    DOWNLOAD_URL = 'http://download.example.com'

    MIN_PART_SIZE = 200

    UPLOAD_URL_MATCHER = re.compile(r'https://upload.example.com/([^/]*)/([^/]*)/([^/]*)')
    DOWNLOAD_URL_MATCHER = re.compile(
        DOWNLOAD_URL + '/file/(?P<bucket_name>[^/]+)/(?P<file_name>.+)$'
    )

    def __init__(self, b2_http=None):
        self.b2_http = b2_http

        # Map from account id to its master application key
        self.account_id_to_key: dict[str, str] = dict()

        # Map from auth token to the account it was issued for
        self.auth_token_to_account_id: dict[str, str] = dict()

        # Set of auth tokens that have expired
        self.expired_auth_tokens = set()

        self.auth_token_counter = 0
        self.account_counter = 0
        self.current_token = None

        self.bucket_name_to_bucket: dict[str, BucketSimulator] = dict()
        self.bucket_id_to_bucket: dict[str, BucketSimulator] = dict()
        self.bucket_id_counter = iter(range(100))
        self.file_id_to_bucket_id: dict[str, str] = {}
        self.upload_errors = []

    def expire_auth_token(self, auth_token):
        """
        Simulate the auth token expiring.

        The next call that tries to use this auth token will get an
        expired_auth_token error.
        """
        assert auth_token in self.auth_token_to_account_id
        self.expired_auth_tokens.add(auth_token)

    def create_account(self):
        """
        Simulate creating an account.

        Return (accountId, masterApplicationKey) for a newly created account.
        """
        account_id = 'account-%d' % (self.account_counter,)
        master_key = 'masterKey-%d' % (self.account_counter,)
        self.account_counter += 1
        self.account_id_to_key[account_id] = master_key
        return (account_id, master_key)

    def set_upload_errors(self, errors):
        """
        Store a sequence of exceptions to raise on upload.  Each one will
        be raised in turn, until they are all gone.  Then the next upload
        will succeed.
        """
        assert len(self.upload_errors) == 0
        self.upload_errors = errors

    def authorize_account(self, realm_url, account_id, application_key):
        key = self.account_id_to_key.get(account_id)
        if key is None:
            raise Unauthorized('application key ID not valid', 'unauthorized')
        if application_key != key:
            raise Unauthorized('secret key is wrong', 'unauthorized')
        auth_token = 'auth_token_%d' % (self.auth_token_counter,)
        self.current_token = auth_token
        self.auth_token_counter += 1
        self.auth_token_to_account_id[auth_token] = account_id
        return dict(
            accountId=account_id,
            authorizationToken=auth_token,
            apiUrl=self.API_URL,
            downloadUrl=self.DOWNLOAD_URL,
            minimumPartSize=self.MIN_PART_SIZE,
            recommendedPartSize=self.MIN_PART_SIZE,
            absoluteMinimumPartSize=self.MIN_PART_SIZE,
        )

    def create_bucket(self, api_url, account_auth_token, account_id, bucket_name, bucket_type):
        if not re.match(r'^[-a-zA-Z0-9]*$', bucket_name):
            raise BadRequest('bucket name must be letters, digits or dashes', 'bad_request')
        if bucket_type not in (BUCKET_TYPE_ALL_PRIVATE, BUCKET_TYPE_ALL_PUBLIC):
            raise BadRequest(f'Invalid bucketType: {bucket_type}', 'bad_request')
        self._assert_account_auth(api_url, account_auth_token, account_id)
        if bucket_name in self.bucket_name_to_bucket:
            raise DuplicateBucketName(f'Bucket name is already in use: {bucket_name}')
        bucket_id = 'bucket_' + str(next(self.bucket_id_counter))
        bucket = self.BUCKET_SIMULATOR_CLASS(self, account_id, bucket_id, bucket_name, bucket_type)
        self.bucket_name_to_bucket[bucket_name] = bucket
        self.bucket_id_to_bucket[bucket_id] = bucket
        return bucket.bucket_dict()

    def delete_file_version(self, api_url, account_auth_token, file_id, file_name):
        bucket_id = self.file_id_to_bucket_id.get(file_id)
        if bucket_id is None:
            raise FileNotPresent(f'File not present: {file_name} {file_id}')
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return bucket.delete_file_version(file_id, file_name)

    def download_file_from_url(self, account_auth_token_or_none: str | None, url: str):
        matcher = self.DOWNLOAD_URL_MATCHER.match(url)
        assert matcher is not None, url
        bucket_name = matcher.group('bucket_name')
        file_name = b2_url_decode(matcher.group('file_name'))
        bucket = self.bucket_name_to_bucket.get(bucket_name)
        if bucket is None:
            raise ResourceNotFound(f'Bucket does not exist: {bucket_name}')
        if bucket.bucket_type != BUCKET_TYPE_ALL_PUBLIC:
            self._assert_account_auth(self.API_URL, account_auth_token_or_none, bucket.account_id)
        return bucket.download_file_by_name(file_name, url)

    def get_download_authorization(
        self, api_url, account_auth_token, bucket_id, file_name_prefix, valid_duration_in_seconds
    ):
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return {
            'bucketId':
                bucket_id,
            'fileNamePrefix':
                file_name_prefix,
            'authorizationToken':
                'fake_download_auth_token_%s_%s_%d' % (
                    bucket_id,
                    b2_url_encode(file_name_prefix),
                    valid_duration_in_seconds,
                )
        }

    def get_file_info_by_id(self, api_url, account_auth_token, file_id):
        bucket_id = self.file_id_to_bucket_id.get(file_id)
        if bucket_id is None:
            raise FileNotPresent(f'File not present: {file_id}', 'not_found', 404)
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return bucket.get_file_info_by_id(file_id)

    def get_upload_url(self, api_url, account_auth_token, bucket_id):
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return bucket.get_upload_url(account_auth_token)

    def list_buckets(self, api_url, account_auth_token, account_id):
        self._assert_account_auth(api_url, account_auth_token, account_id)
        sorted_buckets = [
            self.bucket_name_to_bucket[name] for name in sorted(self.bucket_name_to_bucket)
        ]
        return dict(
            buckets=[
                bucket.bucket_dict() for bucket in sorted_buckets if bucket.account_id == account_id
            ]
        )

    def list_file_names(
        self,
        api_url,
        account_auth_token,
        bucket_id,
        start_file_name=None,
        max_file_count=None,
        prefix=None,
        delimiter=None,
        depth=None,
    ):
        """
        ``delimiter`` and ``depth`` are accepted but not simulated.
        """
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return bucket.list_file_names(start_file_name, max_file_count, prefix)

    def list_file_versions(
        self,
        api_url,
        account_auth_token,
        bucket_id,
        start_file_name=None,
        start_file_id=None,
        max_file_count=None,
        prefix=None,
        delimiter=None,
    ):
        bucket = self._get_bucket_by_id(bucket_id)
        self._assert_account_auth(api_url, account_auth_token, bucket.account_id)
        return bucket.list_file_versions(start_file_name, start_file_id, max_file_count, prefix)

    def upload_file(
        self,
        upload_url: str,
        upload_auth_token: str,
        file_name: str,
        content_length: int,
        content_type: str,
        content_sha1: str,
        data_stream,
    ):
        assert upload_url == upload_auth_token
        check_b2_filename(file_name)
        url_match = self.UPLOAD_URL_MATCHER.match(upload_url)
        if url_match is None:
            raise BadRequest(f'bad upload url: {upload_url}', 'bad_request')
        if self.upload_errors:
            raise self.upload_errors.pop(0)
        bucket_id, _, account_auth_token = url_match.groups()
        if account_auth_token in self.expired_auth_tokens:
            raise InvalidAuthToken('auth token expired', 'expired_auth_token')
        bucket = self._get_bucket_by_id(bucket_id)

        # we don't really need headers further on
        # but we still simulate their calculation
        _ = self.get_upload_file_headers(
            upload_auth_token=upload_auth_token,
            file_name=file_name,
            content_length=content_length,
            content_type=content_type,
            content_sha1=content_sha1,
        )

        response = bucket.upload_file(
            file_name, content_length, content_type, content_sha1, data_stream
        )
        self.file_id_to_bucket_id[response['fileId']] = bucket_id
        return response

    def _assert_account_auth(self, api_url, account_auth_token, account_id):
        if account_auth_token is None:
            raise Unauthorized('missing authorization token', 'unauthorized')
        if account_auth_token in self.expired_auth_tokens:
            raise InvalidAuthToken('auth token expired', 'expired_auth_token')
        token_account_id = self.auth_token_to_account_id.get(account_auth_token)
        if token_account_id is None:
            raise InvalidAuthToken('auth token not valid', 'bad_auth_token')
        assert api_url == self.API_URL
        if token_account_id != account_id:
            raise Unauthorized('', 'unauthorized')

    def _get_bucket_by_id(self, bucket_id) -> BucketSimulator:
        if bucket_id not in self.bucket_id_to_bucket:
            raise BucketIdNotFound(f'Bucket does not exist: {bucket_id}')
        return self.bucket_id_to_bucket[bucket_id]

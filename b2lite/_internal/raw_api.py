######################################################################
#
# File: b2lite/_internal/raw_api.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import base64
from abc import ABCMeta, abstractmethod
from logging import getLogger

from .exception import UnusableFileName
from .http_constants import API_VERSION, CONTENT_SHA1_HEADER, FILE_NAME_HEADER
from .types import (
    AuthorizeAccountResponse,
    Bucket,
    DownloadAuthorization,
    FileVersion,
    ListBucketsResponse,
    ListFileNamesResponse,
    ListFileVersionsResponse,
    UploadUrl,
)
from .utils import b2_url_encode
from .utils.typing import JSON

logger = getLogger(__name__)


def check_b2_filename(filename):
    """
    Raise an appropriate exception with details if the filename is unusable.

    See https://www.backblaze.com/b2/docs/files.html for the rules.

    :param filename: a proposed filename in unicode
    :return: None if the filename is usable
    """
    if not isinstance(filename, str):
        raise UnusableFileName("Filename must be a string.")
    encoded_name = filename.encode('utf-8')
    length_in_bytes = len(encoded_name)
    if length_in_bytes < 1:
        raise UnusableFileName("Filename must be at least 1 character.")
    if length_in_bytes > 1024:
        raise UnusableFileName("Filename is too long (can be at most 1024 bytes).")
    lowest_unicode_value = ord(min(filename))
    if lowest_unicode_value < 32:
        message = "Filename {!r} contains code {} (hex {:02x}), less than 32.".format(
            filename, lowest_unicode_value, lowest_unicode_value
        )
        raise UnusableFileName(message)
    # No DEL for you.
    if '\x7f' in filename:
        raise UnusableFileName("DEL character (0x7f) not allowed.")
    if filename[0] == '/' or filename[-1] == '/':
        raise UnusableFileName("Filename may not start or end with '/'.")
    if '//' in filename:
        raise UnusableFileName("Filename may not contain \"//\".")
    long_segment = max([len(segment.encode('utf-8')) for segment in filename.split('/')])
    if long_segment > 250:
        raise UnusableFileName("Filename segment too long (maximum 250 bytes in utf-8).")


class AbstractRawApi(metaclass=ABCMeta):
    """
    Direct access to the B2 web apis.
    """

    @abstractmethod
    def authorize_account(
        self, realm_url, account_id, application_key
    ) -> AuthorizeAccountResponse:
        pass

    @abstractmethod
    def create_bucket(self, api_url, account_auth_token, account_id, bucket_name,
                      bucket_type) -> Bucket:
        pass

    @abstractmethod
    def delete_file_version(self, api_url, account_auth_token, file_id, file_name) -> JSON:
        pass

    @abstractmethod
    def download_file_from_url(self, account_auth_token_or_none: str | None, url: str):
        pass

    @abstractmethod
    def get_download_authorization(
        self, api_url, account_auth_token, bucket_id, file_name_prefix, valid_duration_in_seconds
    ) -> DownloadAuthorization:
        pass

    @abstractmethod
    def get_file_info_by_id(self, api_url: str, account_auth_token: str,
                            file_id: str) -> FileVersion:
        pass

    @abstractmethod
    def get_upload_url(self, api_url, account_auth_token, bucket_id) -> UploadUrl:
        pass

    @abstractmethod
    def list_buckets(self, api_url, account_auth_token, account_id) -> ListBucketsResponse:
        pass

    @abstractmethod
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
    ) -> ListFileNamesResponse:
        pass

    @abstractmethod
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
    ) -> ListFileVersionsResponse:
        pass

    @classmethod
    def get_upload_file_headers(
        cls,
        upload_auth_token: str,
        file_name: str,
        content_length: int,
        content_type: str,
        content_sha1: str,
    ) -> dict:
        return {
            'Authorization': upload_auth_token,
            'Content-Length': str(content_length),
            FILE_NAME_HEADER: b2_url_encode(file_name),
            'Content-Type': content_type,
            CONTENT_SHA1_HEADER: content_sha1,
        }

    @abstractmethod
    def upload_file(
        self,
        upload_url,
        upload_auth_token,
        file_name,
        content_length,
        content_type,
        content_sha1,
        data_stream,
    ) -> FileVersion:
        pass

    def get_download_url_by_name(self, download_url, bucket_name, file_name):
        return download_url + '/file/' + bucket_name + '/' + b2_url_encode(file_name)


class B2RawHTTPApi(AbstractRawApi):
    """
    Provide access to the B2 web APIs, exactly as they are provided by b2.

    Requires that you provide all necessary URLs and auth tokens for each call.

    Each API call decodes the returned JSON and returns a dict.

    For details on what each method does, see the B2 docs:
        https://www.backblaze.com/b2/docs/

    This class is intended to be a super-simple, very thin layer on top
    of the HTTP calls.  It can be mocked-out for testing higher layers.
    And this class can be tested by exercising each call just once,
    which is relatively quick.
    """

    def __init__(self, b2_http):
        self.b2_http = b2_http

    def _get_url(self, base_url: str, endpoint: str) -> str:
        return f'{base_url}/b2api/{API_VERSION}/{endpoint}'

    def _post_json(self, base_url: str, endpoint: str, auth: str, **params) -> JSON:
        """
        A helper method for calling an API with the given auth and params.

        Parameters set to None are left out of the request body.

        :param base_url: something like "https://api001.backblazeb2.com/"
        :param auth: passed in Authorization header
        :param endpoint: example: "b2_create_bucket"
        :param args: the rest of the parameters are passed to b2
        :return: the decoded JSON response
        """
        url = self._get_url(base_url, endpoint)
        headers = {'Authorization': auth}
        params = {key: value for key, value in params.items() if value is not None}
        return self.b2_http.post_json_return_json(url, headers, params)

    def _get_json(self, base_url: str, endpoint: str, auth: str, **params) -> JSON:
        url = self._get_url(base_url, endpoint)
        headers = {'Authorization': auth}
        params = {key: value for key, value in params.items() if value is not None}
        return self.b2_http.get_json_return_json(url, headers, params=params)

    def authorize_account(self, realm_url, account_id, application_key):
        auth = f"Basic {base64.b64encode(f'{account_id}:{application_key}'.encode()).decode()}"
        return self._get_json(realm_url, 'b2_authorize_account', auth)

    def create_bucket(self, api_url, account_auth_token, account_id, bucket_name, bucket_type):
        return self._post_json(
            api_url,
            'b2_create_bucket',
            account_auth_token,
            accountId=account_id,
            bucketName=bucket_name,
            bucketType=bucket_type,
        )

    def delete_file_version(self, api_url, account_auth_token, file_id, file_name):
        return self._post_json(
            api_url,
            'b2_delete_file_version',
            account_auth_token,
            fileId=file_id,
            fileName=file_name,
        )

    def download_file_from_url(self, account_auth_token_or_none: str | None, url: str):
        """
        Issue a streaming request for download of a file, potentially authorized.

        :param account_auth_token_or_none: an optional account auth token to pass in
        :param url: the full URL to download from
        :return: context manager of the streamed response
        """
        request_headers = {}
        if account_auth_token_or_none is not None:
            request_headers['Authorization'] = account_auth_token_or_none
        return self.b2_http.get_content(url, request_headers)

    def get_download_authorization(
        self, api_url, account_auth_token, bucket_id, file_name_prefix, valid_duration_in_seconds
    ):
        return self._post_json(
            api_url,
            'b2_get_download_authorization',
            account_auth_token,
            bucketId=bucket_id,
            fileNamePrefix=file_name_prefix,
            validDurationInSeconds=valid_duration_in_seconds,
        )

    def get_file_info_by_id(self, api_url: str, account_auth_token: str, file_id: str):
        return self._post_json(api_url, 'b2_get_file_info', account_auth_token, fileId=file_id)

    def get_upload_url(self, api_url, account_auth_token, bucket_id):
        return self._post_json(api_url, 'b2_get_upload_url', account_auth_token, bucketId=bucket_id)

    def list_buckets(self, api_url, account_auth_token, account_id):
        return self._get_json(api_url, 'b2_list_buckets', account_auth_token, accountId=account_id)

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
        return self._post_json(
            api_url,
            'b2_list_file_names',
            account_auth_token,
            bucketId=bucket_id,
            startFileName=start_file_name,
            maxFileCount=max_file_count,
            prefix=prefix,
            delimiter=delimiter,
            depth=depth,
        )

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
        return self._post_json(
            api_url,
            'b2_list_file_versions',
            account_auth_token,
            bucketId=bucket_id,
            startFileName=start_file_name,
            startFileId=start_file_id,
            maxFileCount=max_file_count,
            prefix=prefix,
            delimiter=delimiter,
        )

    def upload_file(
        self,
        upload_url,
        upload_auth_token,
        file_name,
        content_length,
        content_type,
        content_sha1,
        data_stream,
    ):
        """
        Upload one, small file to b2.

        :param upload_url: the upload_url from b2_get_upload_url
        :param upload_auth_token: the auth token from b2_get_upload_url
        :param file_name: the name of the B2 file
        :param content_length: number of bytes in the file
        :param content_type: MIME type
        :param content_sha1: hex SHA1 of the contents of the file
        :param data_stream: a file like object from which the contents of the file can be read
        :return: the decoded JSON description of the new file version
        """
        # Raise UnusableFileName if the file_name doesn't meet the rules.
        check_b2_filename(file_name)
        headers = self.get_upload_file_headers(
            upload_auth_token=upload_auth_token,
            file_name=file_name,
            content_length=content_length,
            content_type=content_type,
            content_sha1=content_sha1,
        )
        return self.b2_http.post_content_return_json(upload_url, headers, data_stream)

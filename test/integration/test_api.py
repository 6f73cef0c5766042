######################################################################
#
# File: test/integration/test_api.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import pytest

from b2lite import B2Api
from b2lite.exception import AuthError, FileNotPresent, NonExistentFile

from .helpers import random_file_name


def test_authorize(b2_api, b2_auth_data):
    assert b2_api.authorized
    assert b2_api.get_account_id()
    assert b2_api.minimum_part_size > 0


def test_authorize_rejected(b2_auth_data):
    b2_api = B2Api(b2_auth_data[0], 'not-the-key')

    with pytest.raises(AuthError) as exc:
        b2_api.authorize()

    assert exc.value.status == 401
    assert not b2_api.authorized


def test_list_buckets(b2_api, bucket):
    response = b2_api.list_buckets()

    assert bucket['bucketId'] in [b['bucketId'] for b in response['buckets']]


def test_upload_download_delete(b2_api, bucket, tmp_path):
    data = b'integration test content\n' * 1000
    local_file = tmp_path / 'source.txt'
    local_file.write_bytes(data)
    file_name = random_file_name() + '/with space.txt'

    file_version = b2_api.upload_file(bucket['bucketId'], str(local_file), file_name, 'text/plain')
    try:
        assert file_version['fileName'] == file_name
        assert file_version['contentLength'] == len(data)

        assert b2_api.get_file_info(file_id=file_version['fileId'])['fileName'] == file_name
        by_name = b2_api.get_file_info(file_name=file_name, bucket_name=bucket['bucketName'])
        assert by_name['fileId'] == file_version['fileId']

        target = tmp_path / 'target.txt'
        downloaded_file = b2_api.download_file(
            bucket['bucketName'], file_name, str(target), verify=True
        )
        assert downloaded_file.verified
        assert target.read_bytes() == data

        listing = b2_api.list_file_names(bucket['bucketId'], prefix=file_name)
        assert [f['fileName'] for f in listing['files']] == [file_name]
    finally:
        b2_api.delete_file(file_version['fileId'], file_name)

    with pytest.raises(NonExistentFile):
        b2_api.get_file_info(file_name=file_name, bucket_id=bucket['bucketId'])
    with pytest.raises(FileNotPresent):
        b2_api.download_file(bucket['bucketName'], file_name, str(tmp_path / 'gone.txt'))


def test_get_auth_token(b2_api, bucket):
    token = b2_api.get_auth_token(bucket['bucketId'], random_file_name(), 60)

    assert token

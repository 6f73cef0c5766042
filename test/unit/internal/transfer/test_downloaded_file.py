######################################################################
#
# File: test/unit/internal/transfer/test_downloaded_file.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import errno
import io

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from b2lite import DownloadedFile
from b2lite._internal.utils import hex_sha1_of_bytes
from b2lite.exception import (
    B2ConnectionError,
    ChecksumMismatch,
    DestinationError,
    ValidationError,
)

DATA = b'hello world'
DATA_SHA1 = hex_sha1_of_bytes(DATA)


@pytest.fixture
def make_response(mocker):
    def make(headers, chunks=(DATA,)):
        response = mocker.MagicMock(name='FakeResponse', spec=requests.Response)
        response.headers = CaseInsensitiveDict(headers)
        response.iter_content.return_value = iter(chunks)
        return response

    return make


class TestDownloadedFile:
    def test_headers(self, make_response):
        downloaded_file = DownloadedFile(
            make_response(
                {
                    'Content-Length': '11',
                    'Content-Type': 'text/plain',
                    'X-Bz-Content-Sha1': DATA_SHA1,
                    'X-Bz-File-Id': 'f1',
                    'X-Bz-File-Name': 'dir/a%20b.txt',
                }
            )
        )

        assert downloaded_file.content_length == 11
        assert downloaded_file.content_type == 'text/plain'
        assert downloaded_file.content_sha1 == DATA_SHA1
        assert downloaded_file.file_id == 'f1'
        assert downloaded_file.file_name == 'dir/a b.txt'

    @pytest.mark.parametrize(
        'headers,expected',
        [
            ({'x-bz-content-sha1': DATA_SHA1}, DATA_SHA1),
            ({'x-bz-content-sha1': 'unverified:' + DATA_SHA1}, DATA_SHA1),
            (
                {
                    'x-bz-content-sha1': 'none',
                    'x-bz-info-large_file_sha1': DATA_SHA1
                },
                DATA_SHA1,
            ),
            ({'x-bz-content-sha1': 'none'}, None),
            ({}, None),
        ],
    )
    def test_content_sha1(self, make_response, headers, expected):
        assert DownloadedFile(make_response(headers)).content_sha1 == expected

    def test_save(self, make_response):
        downloaded_file = DownloadedFile(make_response({}, chunks=[b'hello', b' ', b'world']))
        buffer = io.BytesIO()

        assert downloaded_file.save(buffer) == len(DATA)
        assert buffer.getvalue() == DATA
        assert downloaded_file.bytes_written == len(DATA)

    def test_save_connection_broken(self, make_response):
        def broken_stream():
            yield b'hello'
            raise requests.exceptions.ChunkedEncodingError('connection broken')

        downloaded_file = DownloadedFile(make_response({}, chunks=broken_stream()))

        with pytest.raises(B2ConnectionError) as exc:
            downloaded_file.save(io.BytesIO())

        assert exc.value.status == 0
        assert 'connection broken' in str(exc.value)

    def test_save_to_and_verify(self, make_response, tmp_path):
        target = tmp_path / 'target.txt'
        downloaded_file = DownloadedFile(make_response({'x-bz-content-sha1': DATA_SHA1}))

        downloaded_file.save_to(target)
        downloaded_file.verify()

        assert downloaded_file.local_path == str(target)
        assert downloaded_file.verified

    def test_verify_large_file(self, make_response, tmp_path):
        downloaded_file = DownloadedFile(
            make_response(
                {
                    'x-bz-content-sha1': 'none',
                    'x-bz-info-large_file_sha1': DATA_SHA1
                }
            )
        )

        downloaded_file.save_to(tmp_path / 'target.txt')
        downloaded_file.verify()

        assert downloaded_file.verified

    def test_verify_without_advertised_checksum(self, make_response, tmp_path):
        target = tmp_path / 'target.txt'
        downloaded_file = DownloadedFile(make_response({'x-bz-content-sha1': 'none'}))
        downloaded_file.save_to(target)

        with pytest.raises(ChecksumMismatch) as exc:
            downloaded_file.verify()

        assert exc.value.expected is None
        assert exc.value.actual == DATA_SHA1
        assert not downloaded_file.verified
        assert target.read_bytes() == DATA

    def test_close_failure(self, mocker, make_response, tmp_path):
        target_file = mocker.MagicMock(name='target_file')
        target_file.__enter__.return_value = target_file
        target_file.__exit__.side_effect = OSError(errno.EIO, 'Input/output error')
        mocker.patch(
            'b2lite._internal.transfer.inbound.downloaded_file.open',
            create=True,
            return_value=target_file,
        )
        downloaded_file = DownloadedFile(make_response({'x-bz-content-sha1': DATA_SHA1}))

        with pytest.raises(DestinationError) as exc:
            downloaded_file.save_to(tmp_path / 'target.txt')

        assert 'Input/output error' in str(exc.value)
        assert downloaded_file.local_path is None

    def test_verify_before_save(self, make_response):
        downloaded_file = DownloadedFile(make_response({'x-bz-content-sha1': DATA_SHA1}))

        with pytest.raises(ValidationError):
            downloaded_file.verify()

        assert not downloaded_file.verified

    def test_verify_saved_file_gone(self, make_response, tmp_path):
        target = tmp_path / 'target.txt'
        downloaded_file = DownloadedFile(make_response({'x-bz-content-sha1': DATA_SHA1}))
        downloaded_file.save_to(target)
        target.unlink()

        with pytest.raises(DestinationError) as exc:
            downloaded_file.verify()

        assert exc.value.status == 0
        assert not downloaded_file.verified

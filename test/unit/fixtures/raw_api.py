######################################################################
#
# File: test/unit/fixtures/raw_api.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import pytest

from b2lite import B2RawHTTPApi


@pytest.fixture
def fake_b2_raw_api_responses():
    return {
        'authorize_account': {
            'accountId': '6012deadbeef',
            'authorizationToken': '4_1111111111111111111111111_11111111_111111_1111_1111111111111_1111_11111111=',
            'apiUrl': 'https://api000.backblazeb2.xyz:8180',
            'downloadUrl': 'https://f000.backblazeb2.xyz:8180',
            'minimumPartSize': 5000000,
            'recommendedPartSize': 100000000,
            'absoluteMinimumPartSize': 5000000,
        },
        'list_buckets': {
            'buckets': [
                {
                    'accountId': '6012deadbeef',
                    'bucketId': 'b1',
                    'bucketName': 'photos',
                    'bucketType': 'allPrivate',
                },
            ],
        },
    }


@pytest.fixture
def fake_b2_raw_api(mocker, fake_b2http, fake_b2_raw_api_responses):
    raw_api = mocker.MagicMock(name='FakeB2RawHTTPApi', spec=B2RawHTTPApi)
    raw_api.b2_http = fake_b2http
    raw_api.authorize_account.return_value = fake_b2_raw_api_responses['authorize_account']
    raw_api.list_buckets.return_value = fake_b2_raw_api_responses['list_buckets']
    raw_api.get_download_url_by_name.side_effect = (
        lambda download_url, bucket_name, file_name: B2RawHTTPApi.get_download_url_by_name(
            raw_api, download_url, bucket_name, file_name
        )
    )
    return raw_api

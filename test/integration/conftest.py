######################################################################
#
# File: test/integration/conftest.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import os

import pytest

from .helpers import authorize


def pytest_collection_modifyitems(items):
    for item in items:
        item.add_marker(pytest.mark.integration)


@pytest.fixture(scope='session')
def b2_auth_data():
    try:
        return os.environ['B2_TEST_APPLICATION_KEY_ID'], os.environ['B2_TEST_APPLICATION_KEY']
    except KeyError:
        pytest.skip('B2_TEST_APPLICATION_KEY_ID and B2_TEST_APPLICATION_KEY must be set')


@pytest.fixture(scope='session')
def b2_api(b2_auth_data):
    b2_api = authorize(b2_auth_data)
    yield b2_api
    b2_api.services.upload_manager.shutdown_thread_pool()


@pytest.fixture(scope='session')
def bucket(b2_api):
    bucket_name = os.environ.get('B2_TEST_BUCKET_NAME')
    if not bucket_name:
        pytest.skip('B2_TEST_BUCKET_NAME must name an existing bucket writable by the test key')
    bucket = b2_api.list_buckets(bucket_name)
    if bucket is None:
        pytest.fail(f'bucket {bucket_name!r} does not exist')
    return bucket

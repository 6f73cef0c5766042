######################################################################
#
# File: test/unit/conftest.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import pytest

from b2lite import B2Api, B2HttpApiConfig, RawSimulator

pytest.register_assert_rewrite('test.unit')


@pytest.fixture
def raw_simulator():
    return RawSimulator()


@pytest.fixture
def simulator_api_config(raw_simulator):
    return B2HttpApiConfig(_raw_api_class=lambda b2_http: raw_simulator)


@pytest.fixture
def unauthorized_b2api(raw_simulator, simulator_api_config):
    account_id, master_key = raw_simulator.create_account()
    return B2Api(account_id, master_key, api_config=simulator_api_config)


@pytest.fixture
def b2api(unauthorized_b2api):
    unauthorized_b2api.authorize()
    yield unauthorized_b2api
    unauthorized_b2api.services.upload_manager.shutdown_thread_pool()


@pytest.fixture
def b2api_simulator(b2api):
    return b2api.raw_api


@pytest.fixture
def bucket(b2api):
    return b2api.create_bucket('test-bucket', 'allPublic')


@pytest.fixture
def write_local_file(tmp_path):
    def write(name: str, data: bytes):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return write

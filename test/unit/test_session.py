######################################################################
#
# File: test/unit/test_session.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import pytest

from b2lite import B2HttpApiConfig, B2Session
from b2lite.exception import (
    AuthError,
    B2ConnectionError,
    InvalidAuthToken,
    MissingAccountData,
    PreconditionError,
    Unauthorized,
    ValidationError,
)

from .fixtures import *  # noqa


class TestAuthorize:
    @pytest.fixture(autouse=True)
    def setup(self, b2_session, fake_b2_raw_api, fake_b2_raw_api_responses):
        self.b2_session = b2_session
        self.raw_api = fake_b2_raw_api
        self.auth_response = fake_b2_raw_api_responses['authorize_account']

    def test_simple_authorization(self):
        assert not self.b2_session.authorized

        self.b2_session.authorize()

        self.raw_api.authorize_account.assert_called_once_with(
            'https://api.backblazeb2.com', '6012deadbeef', 'secret-key'
        )
        account_info = self.b2_session.account_info
        assert self.b2_session.authorized
        assert account_info.get_account_auth_token() == self.auth_response['authorizationToken']
        assert account_info.get_api_url() == self.auth_response['apiUrl']
        assert account_info.get_download_url() == self.auth_response['downloadUrl']
        assert account_info.get_minimum_part_size() == self.auth_response['minimumPartSize']

    @pytest.mark.parametrize(
        'realm,realm_url',
        [
            ('dev', 'http://api.backblazeb2.xyz:8180'),
            ('staging', 'https://api.backblaze.net'),
            ('http://localhost:8180', 'http://localhost:8180'),
        ],
    )
    def test_realm(self, fake_b2_raw_api, realm, realm_url):
        b2_session = B2Session(
            'id',
            'key',
            realm=realm,
            api_config=B2HttpApiConfig(_raw_api_class=lambda b2_http: fake_b2_raw_api),
        )

        b2_session.authorize()

        fake_b2_raw_api.authorize_account.assert_called_once_with(realm_url, 'id', 'key')

    def test_rejected_credentials(self):
        self.raw_api.authorize_account.side_effect = Unauthorized(
            'secret key is wrong', 'unauthorized', 401
        )

        with pytest.raises(AuthError) as exc:
            self.b2_session.authorize()

        assert exc.value.status == 401
        assert exc.value.code == 'unauthorized'
        assert exc.value.message == 'secret key is wrong'
        assert not self.b2_session.authorized

    def test_service_unreachable(self):
        self.raw_api.authorize_account.side_effect = B2ConnectionError('connection refused')

        with pytest.raises(AuthError) as exc:
            self.b2_session.authorize()

        assert exc.value.status == 0
        assert not self.b2_session.authorized

    def test_failure_keeps_previous_authorization(self):
        self.b2_session.authorize()
        self.raw_api.authorize_account.side_effect = B2ConnectionError('connection refused')

        with pytest.raises(AuthError):
            self.b2_session.authorize()

        assert self.b2_session.authorized
        assert self.b2_session.account_info.get_api_url() == self.auth_response['apiUrl']

    def test_incomplete_response(self):
        response = dict(self.auth_response)
        del response['downloadUrl']
        self.raw_api.authorize_account.return_value = response

        with pytest.raises(AuthError) as exc:
            self.b2_session.authorize()

        assert 'downloadUrl' in str(exc.value)
        assert exc.value.status == 0
        assert not self.b2_session.authorized

    @pytest.mark.parametrize('account_id,application_key', [(None, 'key'), ('id', ''), (None, None)])
    def test_missing_credentials(self, fake_b2_raw_api, account_id, application_key):
        b2_session = B2Session(
            account_id,
            application_key,
            api_config=B2HttpApiConfig(_raw_api_class=lambda b2_http: fake_b2_raw_api),
        )

        with pytest.raises(ValidationError):
            b2_session.authorize()

        fake_b2_raw_api.authorize_account.assert_not_called()


class TestPrecondition:
    @pytest.mark.parametrize(
        'method_name,args',
        [
            ('create_bucket', ('photos', 'allPrivate')),
            ('delete_file_version', ('f1', 'a.txt')),
            ('download_file_from_url', ('https://f000.example.com/file/photos/a.txt',)),
            ('get_download_authorization', ('b1', 'a/', 60)),
            ('get_download_url_by_name', ('photos', 'a.txt')),
            ('get_file_info_by_id', ('f1',)),
            ('get_upload_url', ('b1',)),
            ('list_buckets', ()),
            ('list_file_names', ('b1',)),
            ('list_file_versions', ('b1',)),
            ('upload_file', ('https://pod/', 'token', 'a.txt', 0, 'b2/x-auto', 'none', None)),
        ],
    )
    def test_unauthorized_session_makes_no_call(self, b2_session, fake_b2_raw_api, method_name, args):
        with pytest.raises(PreconditionError):
            getattr(b2_session, method_name)(*args)

        assert fake_b2_raw_api.mock_calls == []

    def test_missing_account_data_is_a_precondition_error(self, b2_session):
        with pytest.raises(PreconditionError):
            b2_session.account_info.get_api_url()

        assert issubclass(MissingAccountData, PreconditionError)


class TestCalls:
    def test_account_token_call(self, authorized_b2_session, fake_b2_raw_api, fake_b2_raw_api_responses):
        auth = fake_b2_raw_api_responses['authorize_account']

        authorized_b2_session.create_bucket('photos', 'allPublic')

        fake_b2_raw_api.create_bucket.assert_called_once_with(
            auth['apiUrl'], auth['authorizationToken'], '6012deadbeef', 'photos', 'allPublic'
        )

    def test_default_token_call(self, authorized_b2_session, fake_b2_raw_api, fake_b2_raw_api_responses):
        auth = fake_b2_raw_api_responses['authorize_account']

        authorized_b2_session.get_upload_url('b1')

        fake_b2_raw_api.get_upload_url.assert_called_once_with(
            auth['apiUrl'], auth['authorizationToken'], 'b1'
        )

    def test_download_url(self, authorized_b2_session, fake_b2_raw_api_responses):
        auth = fake_b2_raw_api_responses['authorize_account']

        assert authorized_b2_session.get_download_url_by_name('photos', 'a b.txt') == (
            auth['downloadUrl'] + '/file/photos/a%20b.txt'
        )


class TestReauthorization:
    def test_expired_token_is_renewed_once(self, authorized_b2_session, fake_b2_raw_api):
        fake_b2_raw_api.list_buckets.side_effect = [
            InvalidAuthToken('token expired', 'expired_auth_token', 401),
            {'buckets': []},
        ]

        assert authorized_b2_session.list_buckets() == {'buckets': []}

        assert fake_b2_raw_api.authorize_account.call_count == 2
        assert fake_b2_raw_api.list_buckets.call_count == 2

    def test_second_rejection_is_raised(self, authorized_b2_session, fake_b2_raw_api):
        fake_b2_raw_api.list_buckets.side_effect = InvalidAuthToken(
            'token expired', 'expired_auth_token', 401
        )

        with pytest.raises(InvalidAuthToken) as exc:
            authorized_b2_session.list_buckets()

        assert exc.value.status == 401
        assert fake_b2_raw_api.authorize_account.call_count == 2
        assert fake_b2_raw_api.list_buckets.call_count == 2

    def test_other_errors_are_not_retried(self, authorized_b2_session, fake_b2_raw_api):
        fake_b2_raw_api.list_buckets.side_effect = Unauthorized('no access', 'unauthorized', 401)

        with pytest.raises(Unauthorized):
            authorized_b2_session.list_buckets()

        assert fake_b2_raw_api.authorize_account.call_count == 1

    def test_upload_is_not_reauthorized(self, authorized_b2_session, fake_b2_raw_api):
        fake_b2_raw_api.upload_file.side_effect = InvalidAuthToken(
            'token expired', 'expired_auth_token', 401
        )

        with pytest.raises(InvalidAuthToken):
            authorized_b2_session.upload_file(
                'https://pod/', 'token', 'a.txt', 0, 'b2/x-auto', 'none', None
            )

        assert fake_b2_raw_api.authorize_account.call_count == 1

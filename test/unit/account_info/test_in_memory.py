######################################################################
#
# File: test/unit/account_info/test_in_memory.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import pytest

from b2lite import InMemoryAccountInfo
from b2lite.exception import MissingAccountData, PreconditionError

from ..test_base import TestBase


class TestInMemoryAccountInfo(TestBase):
    def setUp(self):
        self.account_info = InMemoryAccountInfo('account-id', 'secret', 'https://realm.example.com')

    def _set_auth_data(self):
        self.account_info.set_auth_data(
            auth_token='token',
            api_url='https://api.example.com',
            download_url='https://download.example.com',
            minimum_part_size=100,
        )

    def test_credentials(self):
        self.assertEqual(('account-id', 'secret'), self.account_info.get_credentials())
        self.assertEqual('account-id', self.account_info.get_account_id())
        self.assertEqual('https://realm.example.com', self.account_info.get_realm_url())

    def test_not_authorized(self):
        self.assertFalse(self.account_info.is_authorized())
        for getter in (
            self.account_info.get_account_auth_token,
            self.account_info.get_api_url,
            self.account_info.get_download_url,
            self.account_info.get_minimum_part_size,
        ):
            with self.assertRaises(MissingAccountData):
                getter()

    def test_missing_account_data_message(self):
        with self.assertRaises(MissingAccountData, 'Missing account data: api_url'):
            self.account_info.get_api_url()

    def test_set_auth_data(self):
        self._set_auth_data()

        self.assertTrue(self.account_info.is_authorized())
        self.assertEqual('token', self.account_info.get_account_auth_token())
        self.assertEqual('https://api.example.com', self.account_info.get_api_url())
        self.assertEqual('https://download.example.com', self.account_info.get_download_url())
        self.assertEqual(100, self.account_info.get_minimum_part_size())

    def test_set_auth_data_replaces_everything(self):
        self._set_auth_data()

        self.account_info.set_auth_data('token2', 'https://api2', 'https://download2', 200)

        self.assertEqual('token2', self.account_info.get_account_auth_token())
        self.assertEqual('https://api2', self.account_info.get_api_url())
        self.assertEqual('https://download2', self.account_info.get_download_url())
        self.assertEqual(200, self.account_info.get_minimum_part_size())

    def test_clear(self):
        self._set_auth_data()

        self.account_info.clear()

        self.assertFalse(self.account_info.is_authorized())
        with self.assertRaises(MissingAccountData):
            self.account_info.get_account_auth_token()
        self.assertEqual(('account-id', 'secret'), self.account_info.get_credentials())


def test_missing_account_id():
    account_info = InMemoryAccountInfo(None, None, 'https://realm.example.com')

    with pytest.raises(PreconditionError) as exc:
        account_info.get_account_id()

    assert exc.value.key == 'account_id'
    assert account_info.get_credentials() == (None, None)

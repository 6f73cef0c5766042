######################################################################
#
# File: b2lite/_internal/account_info/in_memory.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from functools import wraps
from typing import NamedTuple

from .exception import MissingAccountData


def _raise_missing_if_result_is_none(function):
    """
    Raise MissingAccountData if function's result is None.
    """

    @wraps(function)
    def inner(*args, **kwargs):
        assert function.__name__.startswith('get_')
        result = function(*args, **kwargs)
        if result is None:
            # assumes that it is a "get_field_name"
            raise MissingAccountData(function.__name__[4:])
        return result

    return inner


class _AuthData(NamedTuple):
    auth_token: str
    api_url: str
    download_url: str
    minimum_part_size: int


class InMemoryAccountInfo:
    """
    Keeps the credentials and the result of the last successful authorization in memory.

    Credentials never change after construction.  The authorization result is replaced
    as a whole by :meth:`set_auth_data`, so readers never observe a half-updated state.
    """

    def __init__(self, account_id: str | None, application_key: str | None, realm_url: str):
        self._account_id = account_id
        self._application_key = application_key
        self._realm_url = realm_url
        self._auth: _AuthData | None = None

    def set_auth_data(
        self,
        auth_token: str,
        api_url: str,
        download_url: str,
        minimum_part_size: int,
    ) -> None:
        self._auth = _AuthData(auth_token, api_url, download_url, minimum_part_size)

    def clear(self) -> None:
        self._auth = None

    def is_authorized(self) -> bool:
        return self._auth is not None

    def _get_auth_field(self, name):
        if self._auth is None:
            return None
        return getattr(self._auth, name)

    @_raise_missing_if_result_is_none
    def get_account_id(self):
        return self._account_id

    def get_credentials(self) -> tuple[str | None, str | None]:
        return self._account_id, self._application_key

    def get_realm_url(self):
        return self._realm_url

    @_raise_missing_if_result_is_none
    def get_account_auth_token(self):
        return self._get_auth_field('auth_token')

    @_raise_missing_if_result_is_none
    def get_api_url(self):
        return self._get_auth_field('api_url')

    @_raise_missing_if_result_is_none
    def get_download_url(self):
        return self._get_auth_field('download_url')

    @_raise_missing_if_result_is_none
    def get_minimum_part_size(self):
        return self._get_auth_field('minimum_part_size')

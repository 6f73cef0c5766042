######################################################################
#
# File: b2lite/_internal/session.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
from functools import partial

from b2lite._internal.account_info.in_memory import InMemoryAccountInfo
from b2lite._internal.api_config import DEFAULT_HTTP_API_CONFIG, B2HttpApiConfig
from b2lite._internal.b2http import B2Http
from b2lite._internal.exception import (
    AuthError,
    B2Error,
    InvalidAuthToken,
    PreconditionError,
    ValidationError,
)
from b2lite._internal.http_constants import DEFAULT_REALM, REALM_URLS

logger = logging.getLogger(__name__)


class B2Session:
    """
    A facade that supplies the correct api_url and account_auth_token
    to methods of underlying raw_api and reauthorizes if necessary.

    Every method other than :meth:`authorize` refuses to run before the session
    has been authorized, without touching the network.
    """
    B2HTTP_CLASS = staticmethod(B2Http)

    def __init__(
        self,
        account_id: str | None,
        application_key: str | None,
        realm: str = DEFAULT_REALM,
        api_config: B2HttpApiConfig = DEFAULT_HTTP_API_CONFIG,
    ):
        """
        :param account_id: account id (or application key id) used to authorize
        :param application_key: the secret paired with ``account_id``
        :param realm: a realm name ("production", "staging", "dev") or a literal base URL of the
                      authorization endpoint
        :param api_config: low level transport configuration
        """
        self.raw_api = api_config.raw_api_class(self.B2HTTP_CLASS(api_config))
        self.account_info = InMemoryAccountInfo(
            account_id, application_key, REALM_URLS.get(realm, realm)
        )

    @property
    def authorized(self) -> bool:
        return self.account_info.is_authorized()

    def authorize(self) -> None:
        """
        Perform account authorization with the credentials given at construction.

        Either every derived field is stored, or (on failure) the previous state is kept.

        :raises ValidationError: if the account id or the application key is missing
        :raises AuthError: if the service rejected the credentials or could not be reached
        """
        account_id, application_key = self.account_info.get_credentials()
        if not account_id or not application_key:
            raise ValidationError('account id and application key are required to authorize')

        try:
            response = self.raw_api.authorize_account(
                self.account_info.get_realm_url(), account_id, application_key
            )
        except B2Error as e:
            logger.debug('authorization failed', exc_info=True)
            raise AuthError.from_error(e) from e

        try:
            auth_data = dict(
                auth_token=response['authorizationToken'],
                api_url=response['apiUrl'],
                download_url=response['downloadUrl'],
                minimum_part_size=response['minimumPartSize'],
            )
        except (KeyError, TypeError) as e:
            raise AuthError(
                f'authorization response is missing {e}', raw_response=response
            ) from e

        self.account_info.set_auth_data(**auth_data)

    def create_bucket(self, bucket_name, bucket_type):
        return self._wrap_account_token(self.raw_api.create_bucket, bucket_name, bucket_type)

    def delete_file_version(self, file_id, file_name):
        return self._wrap_default_token(self.raw_api.delete_file_version, file_id, file_name)

    def download_file_from_url(self, url):
        self._check_authorized()
        return self._reauthorization_loop(
            lambda: self.raw_api.download_file_from_url(
                self.account_info.get_account_auth_token(), url
            )
        )

    def get_download_authorization(self, bucket_id, file_name_prefix, valid_duration_in_seconds):
        return self._wrap_default_token(
            self.raw_api.get_download_authorization,
            bucket_id,
            file_name_prefix,
            valid_duration_in_seconds,
        )

    def get_download_url_by_name(self, bucket_name, file_name):
        self._check_authorized()
        return self.raw_api.get_download_url_by_name(
            self.account_info.get_download_url(), bucket_name, file_name
        )

    def get_file_info_by_id(self, file_id: str):
        return self._wrap_default_token(self.raw_api.get_file_info_by_id, file_id)

    def get_upload_url(self, bucket_id):
        return self._wrap_default_token(self.raw_api.get_upload_url, bucket_id)

    def list_buckets(self):
        return self._wrap_account_token(self.raw_api.list_buckets)

    def list_file_names(
        self,
        bucket_id,
        start_file_name=None,
        max_file_count=None,
        prefix=None,
        delimiter=None,
        depth=None,
    ):
        return self._wrap_default_token(
            self.raw_api.list_file_names,
            bucket_id,
            start_file_name=start_file_name,
            max_file_count=max_file_count,
            prefix=prefix,
            delimiter=delimiter,
            depth=depth,
        )

    def list_file_versions(
        self,
        bucket_id,
        start_file_name=None,
        start_file_id=None,
        max_file_count=None,
        prefix=None,
        delimiter=None,
    ):
        return self._wrap_default_token(
            self.raw_api.list_file_versions,
            bucket_id,
            start_file_name=start_file_name,
            start_file_id=start_file_id,
            max_file_count=max_file_count,
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
        Upload a stream using an upload endpoint obtained from :meth:`get_upload_url`.

        The upload endpoint carries its own token, so a rejected token is not
        repaired by reauthorizing the account.
        """
        self._check_authorized()
        return self.raw_api.upload_file(
            upload_url,
            upload_auth_token,
            file_name,
            content_length,
            content_type,
            content_sha1,
            data_stream,
        )

    def _check_authorized(self):
        if not self.authorized:
            raise PreconditionError()

    def _wrap_default_token(self, raw_api_method, *args, **kwargs):
        self._check_authorized()
        callback = partial(self._api_token_callback, raw_api_method, *args, **kwargs)
        return self._reauthorization_loop(callback)

    def _wrap_account_token(self, raw_api_method, *args, **kwargs):
        self._check_authorized()
        callback = partial(self._account_token_callback, raw_api_method, *args, **kwargs)
        return self._reauthorization_loop(callback)

    def _api_token_callback(self, raw_api_method, *args, **kwargs):
        api_url = self.account_info.get_api_url()
        account_auth_token = self.account_info.get_account_auth_token()
        return raw_api_method(api_url, account_auth_token, *args, **kwargs)

    def _account_token_callback(self, raw_api_method, *args, **kwargs):
        api_url = self.account_info.get_api_url()
        account_auth_token = self.account_info.get_account_auth_token()
        account_id = self.account_info.get_account_id()
        return raw_api_method(api_url, account_auth_token, account_id, *args, **kwargs)

    def _reauthorization_loop(self, callback):
        auth_failure_encountered = False
        while 1:
            try:
                return callback()
            except InvalidAuthToken:
                if not auth_failure_encountered:
                    auth_failure_encountered = True
                    logger.info('authorization token rejected, reauthorizing')
                    self.authorize()
                    continue
                raise

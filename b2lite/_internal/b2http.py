######################################################################
#
# File: b2lite/_internal/b2http.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import io
import json
import logging
import socket
from typing import Any, Callable

import requests
from typing_extensions import Literal

from b2lite.version import USER_AGENT

from .api_config import DEFAULT_HTTP_API_CONFIG, B2HttpApiConfig
from .exception import (
    B2ConnectionError,
    B2Error,
    B2RequestTimeout,
    BrokenPipe,
    ConnectionReset,
    InvalidJsonResponse,
    UnknownError,
    UnknownHost,
    interpret_b2_error,
)
from .utils.typing import JSON

logger = logging.getLogger(__name__)


class ResponseContextManager:
    """
    A context manager that closes a requests.Response when done.
    """

    def __init__(self, response: requests.Response):
        self.response = response

    def __enter__(self) -> requests.Response:
        return self.response

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.response.close()
        return None


class B2Http:
    """
    A wrapper for the requests module.  Provides the operations
    needed to access B2 and turns every failure into a B2Error.

    The operations supported are:

    - get_json_return_json
    - post_json_return_json
    - post_content_return_json
    - get_content

    The methods that return JSON either return a Python dict or
    raise a subclass of B2Error.  They can be used like this:

    .. code-block:: python

       try:
           response_dict = b2_http.post_json_return_json(url, headers, params)
           ...
       except B2Error as e:
           ...

    No request is ever retried at this level; retry policy belongs to the callers.
    """

    def __init__(self, api_config: B2HttpApiConfig = DEFAULT_HTTP_API_CONFIG):
        """
        Initialize with a reference to the requests module, which makes
        it easy to mock for testing.
        """
        self.user_agent = self._get_user_agent(api_config.user_agent_append)
        self.session = api_config.http_session_factory()
        self.connection_timeout = api_config.connection_timeout
        self.read_timeout = api_config.read_timeout
        self.upload_timeout = api_config.upload_timeout

    def request(
        self,
        method: Literal['POST', 'GET'],
        url: str,
        headers: dict[str, str],
        data: io.IOBase | bytes | None = None,
        params: dict[str, Any] | None = None,
        *,
        stream: bool = False,
        _timeout: float | None = None,
    ) -> requests.Response:
        """
        Use like this:

        .. code-block:: python

           try:
               response = b2_http.request('POST', url, headers, data)
               ...
           except B2Error as e:
               ...

        :param method: uppercase HTTP method name
        :param url: a URL to call
        :param headers: headers to send.
        :param data: raw bytes or a file-like object to send
        :param params: a dict that will be converted to query string for GET requests or
                       is used to describe the error of a POST request
        :param stream: if True, the response will be streamed
        :param _timeout: a read timeout for the request in seconds if not default
        :return: a response with status 200
        :raises: B2Error if the request fails
        """
        method = method.upper()
        request_headers = {**headers, 'User-Agent': self.user_agent}

        def do_request():
            return self.session.request(
                method,
                url,
                headers=request_headers,
                data=data,
                params=params if method == 'GET' else None,
                timeout=(self.connection_timeout, _timeout or self.read_timeout),
                stream=stream,
            )

        return self._translate_errors(do_request, params)

    def request_content_return_json(
        self,
        method: Literal['POST', 'GET'],
        url: str,
        headers: dict[str, str],
        data: io.IOBase | bytes | None = None,
        params: dict[str, Any] | None = None,
        *,
        _timeout: float | None = None,
    ) -> JSON:
        """
        Perform the request and decode its JSON body.

        :param method: uppercase HTTP method name
        :param url: a URL to call
        :param headers: headers to send.
        :param data: raw bytes or a file-like object to send
        :return: decoded JSON
        :raises InvalidJsonResponse: if the body of a 200 response is not JSON
        """
        response = self.request(
            method,
            url,
            headers={
                **headers, 'Accept': 'application/json'
            },
            data=data,
            params=params,
            _timeout=_timeout,
        )
        try:
            return json.loads(response.content.decode('utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.error('failed to decode response: %r', response.content)
            raise InvalidJsonResponse(
                response.content, http_status=response.status_code, raw_response=response
            )
        finally:
            response.close()

    def get_json_return_json(self, url: str, headers: dict[str, str], params=None) -> JSON:
        """
        Use like this:

        .. code-block:: python

           try:
               response_dict = b2_http.get_json_return_json(url, headers, {'accountId': account_id})
               ...
           except B2Error as e:
               ...

        :param str url: a URL to call
        :param dict headers: headers to send.
        :param dict params: a dict that will be converted to the query string
        :return: the decoded JSON document
        """
        return self.request_content_return_json('GET', url, headers, params=params)

    def post_content_return_json(
        self,
        url: str,
        headers: dict[str, str],
        data: bytes | io.IOBase,
        post_params: dict[str, Any] | None = None,
        _timeout: float | None = None,
    ) -> JSON:
        """
        Use like this:

        .. code-block:: python

           try:
               response_dict = b2_http.post_content_return_json(url, headers, data)
               ...
           except B2Error as e:
               ...

        :param str url: a URL to call
        :param dict headers: headers to send.
        :param data: a file-like object to send
        :return: a dict that is the decoded JSON
        """
        return self.request_content_return_json(
            'POST', url, headers, data, post_params, _timeout=_timeout or self.upload_timeout
        )

    def post_json_return_json(self, url, headers, params):
        """
        Use like this:

        .. code-block:: python

           try:
               response_dict = b2_http.post_json_return_json(url, headers, params)
               ...
           except B2Error as e:
               ...

        :param str url: a URL to call
        :param dict headers: headers to send.
        :param dict params: a dict that will be converted to JSON
        :return: the decoded JSON document
        :rtype: dict
        """
        data = json.dumps(params).encode()
        return self.request_content_return_json(
            'POST',
            url,
            {
                **headers,
                'Content-Type': 'application/json',
            },
            data,
            params,
        )

    def get_content(self, url, headers):
        """
        Fetches content from a URL.

        Use like this:

        .. code-block:: python

           try:
               with b2_http.get_content(url, headers) as response:
                   for byte_data in response.iter_content(chunk_size=1024):
                       ...
           except B2Error as e:
               ...

        The response object is only guaranteed to have:
            - headers
            - iter_content()

        :param str url: a URL to call
        :param dict headers: headers to send
        :return: Context manager that returns an object that supports iter_content()
        """
        response = self.request('GET', url, headers=headers, stream=True)
        return ResponseContextManager(response)

    @classmethod
    def _get_user_agent(cls, user_agent_append):
        if user_agent_append:
            return f'{USER_AGENT} {user_agent_append}'
        return USER_AGENT

    @classmethod
    def _translate_errors(cls, fcn: Callable, post_params: dict[str, Any] | None = None):
        """
        Call the given function, turning any exception raised into the right
        kind of B2Error.

        :param dict post_params: request parameters
        """
        response = None
        try:
            response = fcn()
            if response.status_code != 200:
                # Decode the error object returned by the service
                try:
                    error = json.loads(response.content.decode('utf-8'))
                    if not isinstance(error, dict):
                        raise ValueError('json error value is not a dict')
                except (json.JSONDecodeError, UnicodeDecodeError, ValueError):
                    logger.error(
                        'failed to decode error response (status %s): %r', response.status_code,
                        response.content
                    )
                    raise InvalidJsonResponse(
                        response.content, http_status=response.status_code, raw_response=response
                    )
                extra_error_keys = error.keys() - ('code', 'status', 'message')
                if extra_error_keys:
                    logger.debug(
                        'received error has extra (unsupported) keys: %s', extra_error_keys
                    )
                if str(error.get('status', response.status_code)) != str(response.status_code):
                    logger.warning(
                        'Inconsistent status codes returned by the server %r != %r',
                        error.get('status'), response.status_code
                    )

                raise interpret_b2_error(
                    response.status_code,
                    str(error['code']) if 'code' in error else None,
                    str(error['message']) if 'message' in error else None,
                    response.headers,
                    post_params,
                    raw_response=response,
                )
            return response

        except B2Error:
            raise  # pass through exceptions from just above

        except requests.ConnectionError as e0:
            e1 = e0.args[0] if e0.args else None
            if isinstance(e1, requests.packages.urllib3.exceptions.MaxRetryError):
                msg = str(e1.args[0])
                if 'nodename nor servname provided, or not known' in msg or 'Name or service not known' in msg:
                    raise UnknownHost()
            elif isinstance(e1, requests.packages.urllib3.exceptions.ProtocolError):
                e2 = e1.args[1] if len(e1.args) >= 2 else None
                if isinstance(e2, socket.error):
                    if len(e2.args) >= 2 and e2.args[1] == 'Broken pipe':
                        raise BrokenPipe()
            raise B2ConnectionError(str(e0))

        except requests.Timeout as e:
            raise B2RequestTimeout(str(e))

        except Exception as e:
            text = repr(e)

            # urllib3 doesn't always translate ECONNRESET into something requests understands.
            # The text from one such error looks like this: SysCallError(104, 'ECONNRESET')
            if text.startswith('SysCallError'):
                if 'ECONNRESET' in text:
                    raise ConnectionReset()

            logger.exception('_translate_errors has intercepted an unexpected exception')
            raise UnknownError(text)

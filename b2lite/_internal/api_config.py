######################################################################
#
# File: b2lite/_internal/api_config.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

from typing import Callable

import requests

from .raw_api import AbstractRawApi, B2RawHTTPApi


class B2HttpApiConfig:

    DEFAULT_RAW_API_CLASS = B2RawHTTPApi

    CONNECTION_TIMEOUT = 3 + 6 + 12 + 24 + 1  # 4 standard tcp retransmissions + 1s latency
    READ_TIMEOUT = 128
    UPLOAD_TIMEOUT = 128

    def __init__(
        self,
        http_session_factory: Callable[[], requests.Session] = requests.Session,
        user_agent_append: str | None = None,
        connection_timeout: float = CONNECTION_TIMEOUT,
        read_timeout: float = READ_TIMEOUT,
        upload_timeout: float = UPLOAD_TIMEOUT,
        _raw_api_class: Callable[..., AbstractRawApi] | None = None,
    ):
        """
        A structure with params to be passed to low level API.

        :param http_session_factory: a callable that returns a requests.Session object (or a compatible one)
        :param user_agent_append: if provided, the string will be appended to the User-Agent
        :param connection_timeout: seconds to wait for a connection to be established
        :param read_timeout: seconds to wait for the service between bytes of a control-plane or download response
        :param upload_timeout: seconds to wait for the service between bytes of an upload response
        :param _raw_api_class: AbstractRawApi-compliant class (or factory), called with a B2Http instance
        """
        self.http_session_factory = http_session_factory
        self.user_agent_append = user_agent_append
        self.connection_timeout = connection_timeout
        self.read_timeout = read_timeout
        self.upload_timeout = upload_timeout
        self.raw_api_class = _raw_api_class or self.DEFAULT_RAW_API_CLASS


DEFAULT_HTTP_API_CONFIG = B2HttpApiConfig()

######################################################################
#
# File: b2lite/_internal/utils/__init__.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import hashlib
import logging
import re
from typing import Any, NewType
from urllib.parse import quote, unquote_plus

from logfury.v1 import DefaultTraceAbstractMeta, DefaultTraceMeta, limit_trace_arguments, trace_call

__all__ = [
    'B2TraceMeta',
    'B2TraceMetaAbstract',
    'Sha1HexDigest',
    'b2_url_decode',
    'b2_url_encode',
    'camelcase_to_underscore',
    'hex_sha1_of_bytes',
    'hex_sha1_of_file',
    'hex_sha1_of_stream',
    'limit_trace_arguments',
    'trace_call',
]

logger = logging.getLogger(__name__)

Sha1HexDigest = NewType('Sha1HexDigest', str)
ReadOnlyStream = Any


def b2_url_encode(s):
    """
    URL-encode a unicode string to be sent to B2 in an HTTP header or a download URL.

    :param s: a unicode string to encode
    :type s: str
    :return: URL-encoded string
    :rtype: str
    """
    return quote(s.encode('utf-8'))


def b2_url_decode(s):
    """
    Decode a Unicode string returned from B2 in an HTTP header.

    :param s: a unicode string to decode
    :type s: str
    :return: a Python unicode string.
    :rtype: str
    """
    return unquote_plus(s)


SHA1_BLOCK_SIZE = 1024 * 1024


def hex_sha1_of_stream(
    input_stream: ReadOnlyStream,
    block_size: int = SHA1_BLOCK_SIZE,
) -> Sha1HexDigest:
    """
    Read the stream to its end, one block at a time, and return its hex SHA1 checksum.
    """
    digest = hashlib.sha1()
    for data in iter(lambda: input_stream.read(block_size), b''):
        digest.update(data)
    return Sha1HexDigest(digest.hexdigest())


def hex_sha1_of_file(path_) -> Sha1HexDigest:
    with open(path_, 'rb') as file:
        return hex_sha1_of_stream(file)


def hex_sha1_of_bytes(data: bytes) -> Sha1HexDigest:
    """
    Return the 40-character hex SHA1 checksum of the data.
    """
    return Sha1HexDigest(hashlib.sha1(data).hexdigest())


_CAMELCASE_TO_UNDERSCORE_RE = re.compile('((?<=[a-z0-9])[A-Z]|(?!^)[A-Z](?=[a-z]))')


def camelcase_to_underscore(input_):
    """
    Convert a camel-cased string to a string with underscores.

    :param input_: an input string
    :type input_: str
    :return: string with underscores
    :rtype: str
    """
    return _CAMELCASE_TO_UNDERSCORE_RE.sub(r'_\1', input_).lower()


class B2TraceMeta(DefaultTraceMeta):
    """
    Trace all public method calls, except for ones with names that begin with `get_`.
    """
    pass


class B2TraceMetaAbstract(DefaultTraceAbstractMeta):
    """
    Default class for tracers, to be set as
    a metaclass for abstract base classes.
    """
    pass

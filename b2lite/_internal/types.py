######################################################################
#
# File: b2lite/_internal/types.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
"""
Shapes of the JSON documents exchanged with the service.

The service may add fields at any time; everything not listed here is passed
through to the caller untouched.
"""
from typing import List, Optional

from annotated_types import Ge
from typing_extensions import Annotated, Literal, NotRequired, TypedDict

__all__ = [
    "AuthorizeAccountResponse",
    "Bucket",
    "BucketType",
    "DownloadAuthorization",
    "FileVersion",
    "ListBucketsResponse",
    "ListFileNamesResponse",
    "ListFileVersionsResponse",
    "NotRequired",
    "PositiveInt",
    "TypedDict",
    "UploadUrl",
]

PositiveInt = Annotated[int, Ge(0)]

BucketType = Literal['allPublic', 'allPrivate']


class AuthorizeAccountResponse(TypedDict):
    accountId: str
    apiUrl: str
    authorizationToken: str
    downloadUrl: str
    minimumPartSize: PositiveInt
    recommendedPartSize: NotRequired[PositiveInt]
    absoluteMinimumPartSize: NotRequired[PositiveInt]


class Bucket(TypedDict):
    accountId: NotRequired[str]
    bucketId: str
    bucketName: str
    bucketType: BucketType
    bucketInfo: NotRequired[dict]
    revision: NotRequired[int]


class ListBucketsResponse(TypedDict):
    buckets: List[Bucket]


class FileVersion(TypedDict):
    fileId: str
    fileName: str
    action: NotRequired[str]
    accountId: NotRequired[str]
    bucketId: NotRequired[str]
    contentSha1: NotRequired[str]
    contentLength: NotRequired[int]
    contentType: NotRequired[str]
    fileInfo: NotRequired[dict]
    size: NotRequired[int]
    uploadTimestamp: NotRequired[int]


class ListFileNamesResponse(TypedDict):
    files: List[FileVersion]
    nextFileName: Optional[str]


class ListFileVersionsResponse(TypedDict):
    files: List[FileVersion]
    nextFileName: Optional[str]
    nextFileId: Optional[str]


class UploadUrl(TypedDict):
    bucketId: str
    uploadUrl: str
    authorizationToken: str


class DownloadAuthorization(TypedDict):
    bucketId: str
    fileNamePrefix: str
    authorizationToken: str

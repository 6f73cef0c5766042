######################################################################
#
# File: b2lite/_internal/transfer/outbound/upload_manager.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import as_completed
from contextlib import ExitStack

from b2lite._internal.exception import B2Error, UploadCancelled
from b2lite._internal.http_constants import UPLOAD_RETRY_BASE_DELAY
from b2lite._internal.raw_api import check_b2_filename
from b2lite._internal.types import FileVersion

from ...utils.thread_pool import ThreadPoolMixin
from .upload_request import UploadRequest
from .upload_source import UploadSourceLocalFile

logger = logging.getLogger(__name__)


class UploadManager(ThreadPoolMixin):
    """
    Handle the actions around an upload to free raw_api from that responsibility.

    An upload is prepared by three tasks running concurrently on the thread pool
    (fetching an upload endpoint, hashing the file, measuring and opening the file),
    then attempted up to ``max_retry_attempts`` times with exponential backoff.
    """

    RETRY_BASE_DELAY = UPLOAD_RETRY_BASE_DELAY
    UPLOAD_SOURCE_CLASS = staticmethod(UploadSourceLocalFile)

    def __init__(self, services, **kwargs):
        """
        :param b2lite._internal.api.Services services:
        """
        self.services = services
        super().__init__(**kwargs)

    @property
    def session(self):
        return self.services.session

    def upload_file(
        self,
        upload_request: UploadRequest,
        cancel_event: threading.Event | None = None,
    ) -> FileVersion:
        """
        Upload a local file.

        :param upload_request: what to upload and where
        :param cancel_event: once set, no further attempt is started and the pending backoff is interrupted
        :return: the description of the new file version, as returned by the service
        :raises ValidationError: before any I/O, if the request is incomplete
        :raises UploadCancelled: if ``cancel_event`` was set
        :raises B2Error: the first preparation error, or the error of the last attempt
        """
        upload_request.validate()
        check_b2_filename(upload_request.file_name)
        upload_source = self.UPLOAD_SOURCE_CLASS(upload_request.local_file_path)

        with ExitStack() as stack:
            upload_url, content_sha1, content_length, stream = self._prepare(
                upload_request, upload_source, stack
            )
            return self._upload_with_retries(
                upload_request,
                upload_source,
                upload_url,
                content_sha1,
                content_length,
                stream,
                stack,
                cancel_event,
            )

    def _prepare(self, upload_request: UploadRequest, upload_source, stack: ExitStack):
        """
        Run the preparation tasks concurrently and wait for all of them.

        A stream opened by a successful task is registered in ``stack`` even if
        another task failed, so it gets closed either way.
        """
        futures = {
            self._thread_pool.submit(self.session.get_upload_url, upload_request.bucket_id):
                'upload_url',
            self._thread_pool.submit(upload_source.get_content_sha1):
                'content_sha1',
            self._thread_pool.submit(upload_source.stat_and_open):
                'file',
        }
        results = {}
        first_error = None
        for future in as_completed(futures):
            try:
                results[futures[future]] = future.result()
            except Exception as e:
                # re-raised once every task is done
                logger.debug('upload preparation step %s failed', futures[future], exc_info=True)
                if first_error is None:
                    first_error = e

        if 'file' in results:
            stack.enter_context(results['file'][1])
        if first_error is not None:
            raise first_error

        content_length, stream = results['file']
        return results['upload_url'], results['content_sha1'], content_length, stream

    def _upload_with_retries(
        self,
        upload_request: UploadRequest,
        upload_source,
        upload_url,
        content_sha1,
        content_length,
        stream,
        stack: ExitStack,
        cancel_event: threading.Event | None,
    ) -> FileVersion:
        last_error = None
        for attempt in range(upload_request.max_retry_attempts):
            if attempt:
                self._pause_before_retry(attempt - 1, cancel_event)
                stream.close()
                stream = stack.enter_context(upload_source.open())
            if cancel_event is not None and cancel_event.is_set():
                raise UploadCancelled()
            try:
                return self.session.upload_file(
                    upload_url['uploadUrl'],
                    upload_url['authorizationToken'],
                    upload_request.file_name,
                    content_length,
                    upload_request.content_type,
                    content_sha1,
                    stream,
                )
            except B2Error as e:
                logger.debug(
                    'upload attempt %d of %d for %r failed',
                    attempt + 1,
                    upload_request.max_retry_attempts,
                    upload_request.file_name,
                    exc_info=True,
                )
                last_error = e
        raise last_error

    def _pause_before_retry(self, retry_number: int, cancel_event: threading.Event | None):
        """
        Wait before retry ``retry_number`` (counted from 0): 50ms, then 100ms, 200ms and so on.
        """
        sleep_duration = self.RETRY_BASE_DELAY * 2**retry_number
        logger.info('Pausing thread for %s seconds before retrying the upload', sleep_duration)
        if cancel_event is None:
            time.sleep(sleep_duration)
        elif cancel_event.wait(sleep_duration):
            raise UploadCancelled()

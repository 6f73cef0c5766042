######################################################################
#
# File: b2lite/_internal/utils/thread_pool.py
#
# Copyright 2026 Backblaze Inc. All Rights Reserved.
#
# License https://www.backblaze.com/using_b2_code.html
#
######################################################################
from __future__ import annotations

import os
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable

from typing_extensions import Protocol

from b2lite._internal.utils import B2TraceMetaAbstract


class ThreadPoolExecutorProtocol(Protocol):
    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        ...

    def get_size(self) -> int:
        """Return the current size of the thread pool."""

    def shutdown(self) -> None:
        """Release the worker threads."""


class LazyThreadPool:
    """
    Thread pool that starts its workers on the first submitted task.
    """

    _THREAD_POOL_FACTORY = ThreadPoolExecutor

    def __init__(self, max_workers: int | None = None, **kwargs):
        if max_workers is None:
            max_workers = min(
                32, (os.cpu_count() or 1) + 4
            )  # same default as in ThreadPoolExecutor
        self._max_workers = max_workers
        self._thread_pool: ThreadPoolExecutor | None = None
        super().__init__(**kwargs)

    def submit(self, fn: Callable, *args, **kwargs) -> Future:
        if self._thread_pool is None:
            self._thread_pool = self._THREAD_POOL_FACTORY(
                self._max_workers, thread_name_prefix='b2lite'
            )
        return self._thread_pool.submit(fn, *args, **kwargs)

    def get_size(self) -> int:
        """Return the current size of the thread pool."""
        return self._max_workers

    def shutdown(self) -> None:
        if self._thread_pool is not None:
            self._thread_pool.shutdown(wait=True)
            self._thread_pool = None


class ThreadPoolMixin(metaclass=B2TraceMetaAbstract):
    """
    Mixin class with ThreadPoolExecutor.
    """

    DEFAULT_THREAD_POOL_CLASS = LazyThreadPool

    def __init__(
        self,
        thread_pool: ThreadPoolExecutorProtocol | None = None,
        max_workers: int | None = None,
        **kwargs,
    ):
        """
        :param thread_pool: thread pool to be used
        :param max_workers: maximum number of worker threads (ignored if thread_pool is not None)
        """
        self._thread_pool = (
            thread_pool
            if thread_pool is not None else self.DEFAULT_THREAD_POOL_CLASS(max_workers=max_workers)
        )
        super().__init__(**kwargs)

    def get_thread_pool_size(self) -> int:
        return self._thread_pool.get_size()

    def shutdown_thread_pool(self) -> None:
        self._thread_pool.shutdown()

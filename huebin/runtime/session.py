# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Background execution for one image.

An ImageSession owns a validated pixel buffer and runs analyze()/extract()
on a concurrent.futures executor so an interactive host is never blocked.
At most one analysis and one extraction may be in flight at a time; a
second request of the same kind is refused rather than queued.

Jobs cannot be cancelled once started. Each job runs to completion or fails
with a single exception, delivered through its Future.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from huebin.errors import JobInProgressError
from huebin.measure.pipeline import OptionsInput, analyze, extract
from huebin.measure.scan import PixelBuffer, as_pixel_array
from huebin.runtime.serializers import SerializerFormat, to_error_message, to_message
from huebin.schema import AnalysisResult, ExtractionResult, RunOptions

logger = logging.getLogger(__name__)

ANALYSIS = "analysis"
EXTRACTION = "extraction"


class ImageSession:
    """
    Runs the colour pipeline for a single image off the caller's thread.

    Args:
        buffer: RGBA8 pixel data; validated immediately
        width: Image width in pixels
        height: Image height in pixels
        executor: Executor to run jobs on. When omitted the session creates
            its own two-worker thread pool and shuts it down on close().

    Example:
        >>> with ImageSession(pixels, width, height) as session:
        ...     preview = session.submit_analysis({"threshold": 10}).result()
        ...     colours = session.submit_extraction(options).result()
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        width: int,
        height: int,
        *,
        executor: Optional[Executor] = None,
    ) -> None:
        # Jobs read a private snapshot of the pixels
        self._pixels = as_pixel_array(buffer, width, height).copy()
        self._pixels.flags.writeable = False
        self.width = int(width)
        self.height = int(height)

        self._owns_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(
            max_workers=2, thread_name_prefix="huebin"
        )
        self._lock = threading.Lock()
        self._active: dict[str, Future] = {}

    # -- submission ---------------------------------------------------------

    def submit_analysis(
        self,
        options: OptionsInput = None,
        **kwargs,
    ) -> Future[AnalysisResult]:
        """Start analyze() in the background. Extra kwargs go to analyze()."""
        return self._submit(ANALYSIS, analyze, options, kwargs)

    def submit_extraction(
        self,
        options: OptionsInput = None,
        **kwargs,
    ) -> Future[ExtractionResult]:
        """Start extract() in the background. Extra kwargs go to extract()."""
        return self._submit(EXTRACTION, extract, options, kwargs)

    def _submit(
        self,
        kind: str,
        fn: Callable,
        options: OptionsInput,
        kwargs: dict,
    ) -> Future:
        # Options are validated here so bad input fails in the caller's thread
        opts = RunOptions.coerce(options)

        with self._lock:
            running = self._active.get(kind)
            if running is not None and not running.done():
                logger.warning("Refusing %s: previous job still running", kind)
                raise JobInProgressError(f"An {kind} job is already in progress")

            future = self._executor.submit(
                fn, self._pixels, self.width, self.height, opts, **kwargs
            )
            self._active[kind] = future

        logger.debug("Submitted %s job for %dx%d image", kind, self.width, self.height)
        return future

    # -- state --------------------------------------------------------------

    def is_busy(self, kind: Optional[str] = None) -> bool:
        """True while a job (of the given kind, or any kind) is unfinished."""
        with self._lock:
            futures = (
                [self._active.get(kind)] if kind is not None else list(self._active.values())
            )
        return any(f is not None and not f.done() for f in futures)

    def close(self, wait: bool = True) -> None:
        """Shut down the session's own executor (injected executors are left alone)."""
        if self._owns_executor:
            self._executor.shutdown(wait=wait)

    def __enter__(self) -> ImageSession:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def result_message(
    future: Future,
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    hex_only: bool = False,
    request_id: str | None = None,
) -> str:
    """
    Wait for a job and render its outcome as a host message.

    Successful jobs become a completion message; any exception becomes the
    structured error message.
    """
    try:
        result = future.result()
    except Exception as e:
        logger.debug("Job failed: %s", e, exc_info=True)
        return to_error_message(e, format=format, request_id=request_id)
    return to_message(result, format=format, hex_only=hex_only, request_id=request_id)

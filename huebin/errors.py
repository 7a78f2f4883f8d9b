# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Error types raised by Huebin.

Every failure reaches the caller as a single exception; the pipeline never
returns a partial result.
"""

from __future__ import annotations


class HuebinError(Exception):
    """Base class for all Huebin errors."""


class InvalidInputError(HuebinError, ValueError):
    """Malformed pixel buffer, dimensions or run options."""


class ComputationFault(HuebinError, RuntimeError):
    """
    Unexpected failure inside the pipeline.

    Valid input never produces this; it signals a programming error and is
    always chained to the exception that caused it.
    """


class JobInProgressError(HuebinError, RuntimeError):
    """A job of the same kind is already running for this image session."""

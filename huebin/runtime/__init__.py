# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Host-facing runtime for Huebin.

- ImageSession: run analysis/extraction off the caller's thread, one job of
  each kind at a time
- Serializers: completion and error message envelopes for the host

The runtime never modifies result content.
"""

from huebin.runtime.serializers import (
    SerializerFormat,
    to_error_message,
    to_message,
)
from huebin.runtime.session import ImageSession, result_message

__all__ = [
    "ImageSession",
    "result_message",
    "to_message",
    "to_error_message",
    "SerializerFormat",
]

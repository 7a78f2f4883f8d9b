# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Serializers for delivering results to the host layer.

All serializers preserve results exactly -- no modification or inference.
"""

from huebin.runtime.serializers.base import SerializerFormat
from huebin.runtime.serializers.message import to_error_message, to_message

__all__ = [
    "SerializerFormat",
    "to_message",
    "to_error_message",
]

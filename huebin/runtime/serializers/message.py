# Copyright (c) 2026 Huebin
# SPDX-License-Identifier: MIT

"""
Message envelopes for hosts that run the pipeline off their main thread.

A job reports back with exactly one message:

    {"type": "analysisComplete", "data": {...}}
    {"type": "extractionComplete", "data": {...}}
    {"type": "error", "error": "..."}

The data payload is the result's to_dict() (camelCase keys). Serializers
never modify result content.
"""

from __future__ import annotations

import json
from typing import Union

from huebin.runtime.serializers.base import SerializerFormat
from huebin.schema import AnalysisResult, ExtractionResult

ANALYSIS_COMPLETE = "analysisComplete"
EXTRACTION_COMPLETE = "extractionComplete"
ERROR = "error"

_UNKNOWN_ERROR = "An unknown error occurred."


def to_message(
    result: Union[AnalysisResult, ExtractionResult],
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    hex_only: bool = False,
    request_id: str | None = None,
) -> str:
    """Serialize a result as a completion message.

    Args:
        result: AnalysisResult or ExtractionResult.
        format: Output format (JSON or JSON_PRETTY).
        hex_only: For extraction results, render each colour as
            ``"#rrggbb (12.50%)"`` instead of a full record. Ignored for
            analysis results.
        request_id: Optional identifier echoed back to the host.

    Returns:
        JSON string.

    Example::

        {
          "type": "extractionComplete",
          "data": {
            "categorizedResults": {
              "Red": [{"rgb": [255, 0, 0], "hex": "#ff0000",
                       "decimal": 16711680, "count": 1, "percentage": "50.00"}]
            },
            "finalUniqueCount": 1,
            "totalPixelCount": 2
          }
        }
    """
    if isinstance(result, AnalysisResult):
        data = {"type": ANALYSIS_COMPLETE, "data": result.to_dict()}
    elif isinstance(result, ExtractionResult):
        data = {
            "type": EXTRACTION_COMPLETE,
            "data": _build_extraction_data(result, hex_only=hex_only),
        }
    else:
        raise TypeError(
            f"Expected AnalysisResult or ExtractionResult, got {type(result)}"
        )

    if request_id:
        data["requestId"] = request_id

    return _dump(data, format)


def to_error_message(
    error: Union[BaseException, str],
    *,
    format: SerializerFormat = SerializerFormat.JSON,
    request_id: str | None = None,
) -> str:
    """Serialize a failure as the single structured error message."""
    message = str(error) or _UNKNOWN_ERROR
    data: dict = {"type": ERROR, "error": message}
    if request_id:
        data["requestId"] = request_id
    return _dump(data, format)


def _build_extraction_data(result: ExtractionResult, hex_only: bool) -> dict:
    if not hex_only:
        return result.to_dict()

    def format_record(record) -> str:
        pct = record.percentage if record.percentage is not None else "N/A"
        suffix = "" if pct == "N/A" else "%"
        return f"{record.hex} ({pct}{suffix})"

    return {
        "categorizedResults": {
            category.value: [format_record(r) for r in records]
            for category, records in result.categorized_results.items()
        },
        "finalUniqueCount": result.final_unique_count,
        "totalPixelCount": result.total_pixel_count,
    }


def _dump(data: dict, format: SerializerFormat) -> str:
    if format == SerializerFormat.JSON_PRETTY:
        return json.dumps(data, indent=2)
    return json.dumps(data, separators=(",", ":"))

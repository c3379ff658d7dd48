# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Built-in streaming endpoint descriptors.

Each client builds its own read-only table; nothing here is shared
mutable state.
"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..core.constants import (
    FILTER_PARAMETERS,
    FILTER_STREAM_URL,
    FIREHOSE_STREAM_URL,
    SAMPLE_STREAM_URL,
)
from ..core.types import Endpoint

FILTER = "Filter"
FIREHOSE = "Firehose"
SAMPLE = "Sample"


def default_streams() -> Mapping[str, Endpoint]:
    """Return a fresh read-only name -> Endpoint table."""
    return MappingProxyType(
        {
            FILTER: Endpoint.post(FILTER_STREAM_URL),
            FIREHOSE: Endpoint.get(FIREHOSE_STREAM_URL),
            SAMPLE: Endpoint.get(SAMPLE_STREAM_URL),
        }
    )


def validate_filter_form(form: Optional[Mapping[str, Any]]) -> None:
    """
    The Filter stream needs at least one of follow, track or locations.

    Raises:
        ValueError: No filter predicate has a value
    """
    form = form or {}
    if not any(form.get(name) for name in FILTER_PARAMETERS):
        raise ValueError(
            "the Filter stream requires at least one of: "
            + ", ".join(FILTER_PARAMETERS)
        )


__all__ = ["FILTER", "FIREHOSE", "SAMPLE", "default_streams", "validate_filter_form"]

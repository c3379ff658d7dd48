# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""Record schema and timestamp parsing."""

from .timefmt import parse_twitter_time
from .status import (
    RecordError,
    TweetHashTag,
    TweetMedia,
    TweetUrl,
    TweetUserMention,
    TwitterCoordinate,
    TwitterEntity,
    TwitterPlace,
    TwitterStatus,
    TwitterUser,
)

__all__ = [
    "parse_twitter_time",
    "RecordError",
    "TwitterStatus",
    "TwitterUser",
    "TwitterCoordinate",
    "TwitterPlace",
    "TwitterEntity",
    "TweetHashTag",
    "TweetMedia",
    "TweetUrl",
    "TweetUserMention",
]

# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Constants and default values for the streaming twitter library.

All tunable defaults live here; ConfigLoader applies environment
overrides on top of them.
"""

# =============================================================================
# OAUTH ENDPOINTS
# =============================================================================

REQUEST_TOKEN_URL = "https://api.twitter.com/oauth/request_token"
AUTHORIZE_URL = "https://api.twitter.com/oauth/authorize"
ACCESS_TOKEN_URL = "https://api.twitter.com/oauth/access_token"

# Out-of-band callback: the user is shown a PIN instead of being redirected
OAUTH_CALLBACK_OOB = "oob"

# =============================================================================
# STREAMING ENDPOINTS
# =============================================================================

FILTER_STREAM_URL = "https://stream.twitter.com/1.1/statuses/filter.json"
FIREHOSE_STREAM_URL = "https://stream.twitter.com/1.1/statuses/firehose.json"
SAMPLE_STREAM_URL = "https://stream.twitter.com/1.1/statuses/sample.json"

USERS_LOOKUP_URL = "https://api.twitter.com/1.1/users/lookup.json"

# At least one of these must be sent to the Filter stream
FILTER_PARAMETERS = ("follow", "track", "locations")

# =============================================================================
# API STATUS CODES
# =============================================================================

# https://dev.twitter.com/docs/streaming-apis/response-codes
API_ERROR_MESSAGES = {
    401: "Incorrect username or password.",
    403: "Access to resource is forbidden.",
    404: "Resource does not exist.",
    406: (
        "One or more required parameters are missing or are not suitable "
        "(see relevant stream API for more information)."
    ),
    413: "A parameter list is too long (contact Twitter for increased access).",
    416: "Range unacceptable.",
    420: "Rate limited.",
}

# =============================================================================
# TOKEN STORAGE
# =============================================================================

TOKEN_FILE_PERMISSION = 0o600
TOKEN_ROLE_APP = "App"
TOKEN_ROLE_USER = "User"
DEFAULT_TOKEN_FILE = "tokens.json"

# =============================================================================
# TRANSPORT DEFAULTS
# =============================================================================

DEFAULT_CONNECT_TIMEOUT = 10.0
# Twitter sends a keep-alive newline every 30 seconds; 90s is their stall limit
DEFAULT_READ_TIMEOUT = 90.0
DEFAULT_QUEUE_SIZE = 1
# Characters a single stream value may hold before it is dropped
MAX_VALUE_SIZE = 1 << 20
DEFAULT_USER_AGENT = "streaming-twitter/0.3.0"

# Environment variable prefix for configuration overrides
ENV_PREFIX = "STREAMING_TWITTER_"

# Logging
LIB_LOGGER_NAME = "streaming_twitter"

__all__ = [
    "REQUEST_TOKEN_URL",
    "AUTHORIZE_URL",
    "ACCESS_TOKEN_URL",
    "OAUTH_CALLBACK_OOB",
    "FILTER_STREAM_URL",
    "FIREHOSE_STREAM_URL",
    "SAMPLE_STREAM_URL",
    "USERS_LOOKUP_URL",
    "FILTER_PARAMETERS",
    "API_ERROR_MESSAGES",
    "TOKEN_FILE_PERMISSION",
    "TOKEN_ROLE_APP",
    "TOKEN_ROLE_USER",
    "DEFAULT_TOKEN_FILE",
    "DEFAULT_CONNECT_TIMEOUT",
    "DEFAULT_READ_TIMEOUT",
    "DEFAULT_QUEUE_SIZE",
    "MAX_VALUE_SIZE",
    "DEFAULT_USER_AGENT",
    "ENV_PREFIX",
    "LIB_LOGGER_NAME",
]

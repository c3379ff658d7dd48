# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

import pytest

from streaming_twitter.core import (
    APIError,
    CredentialError,
    DecodeError,
    StreamEOFError,
    StreamingTwitterError,
    TransportError,
    UnexpectedEOFError,
    classify_status,
    is_terminal,
)
from streaming_twitter.core.constants import API_ERROR_MESSAGES


class TestClassifyStatus:
    @pytest.mark.parametrize(
        "code,message",
        [
            (401, "Incorrect username or password."),
            (403, "Access to resource is forbidden."),
            (404, "Resource does not exist."),
            (413, "A parameter list is too long (contact Twitter for increased access)."),
            (416, "Range unacceptable."),
            (420, "Rate limited."),
        ],
    )
    def test_documented_statuses(self, code, message):
        error = classify_status(code)
        assert isinstance(error, APIError)
        assert error.code == code
        assert error.message == message
        assert str(error) == f"{message} ({code})"

    def test_406_message(self):
        error = classify_status(406)
        assert error.message.startswith("One or more required parameters are missing")
        assert str(error).endswith("(406)")

    def test_table_has_seven_entries(self):
        assert sorted(API_ERROR_MESSAGES) == [401, 403, 404, 406, 413, 416, 420]

    @pytest.mark.parametrize("code", [200, 201, 302, 400, 429, 500, 503])
    def test_other_statuses_pass_through(self, code):
        assert classify_status(code) is None


class TestTaxonomy:
    def test_all_errors_share_a_base(self):
        for error in (
            APIError(401, "x"),
            CredentialError("x"),
            DecodeError("x"),
            TransportError(OSError("x")),
        ):
            assert isinstance(error, StreamingTwitterError)

    def test_transport_error_message_is_cause_message(self):
        cause = ConnectionResetError("connection reset by peer")
        error = TransportError(cause)
        assert str(error) == "connection reset by peer"
        assert error.cause is cause

    def test_eof_messages(self):
        assert str(StreamEOFError()) == "EOF"
        assert str(UnexpectedEOFError()) == "unexpected EOF"

    def test_terminal_classification(self):
        assert not is_terminal(DecodeError("bad record"))
        assert is_terminal(StreamEOFError())
        assert is_terminal(UnexpectedEOFError())
        assert is_terminal(TransportError(OSError("down")))
        assert is_terminal(APIError(420, "Rate limited."))

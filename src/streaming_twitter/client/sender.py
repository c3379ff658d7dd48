# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
Signed request sending and response status classification.

Shared by the one-shot REST path and the streaming path: both get back an
open, unread response or one of TransportError / APIError.
"""

import logging
from typing import Any, Mapping, Optional

import httpx
from authlib.integrations.httpx_client import OAuth1Auth

from ..core.constants import LIB_LOGGER_NAME
from ..core.errors import CredentialError, TransportError, classify_status
from ..core.types import AccessMethod, Credentials, Endpoint

lib_logger = logging.getLogger(LIB_LOGGER_NAME)

FormValues = Mapping[str, Any]


class RequestSender:
    """
    Send one request for an Endpoint.

    GET sends the form values as query parameters, POST as a form-encoded
    body; both are signed with OAuth 1.0a (HMAC-SHA1, header signature)
    using the application and user credentials. CUSTOM endpoints call
    their transport function instead.

    The caller owns the returned response and must close it.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        app: Optional[Credentials] = None,
        user: Optional[Credentials] = None,
    ):
        self._http = http
        self._user = user
        self._auth: Optional[OAuth1Auth] = None
        if app is not None and app.is_complete and user is not None and user.is_complete:
            self._auth = OAuth1Auth(
                app.token,
                app.secret,
                token=user.token,
                token_secret=user.secret,
            )

    @property
    def can_sign(self) -> bool:
        return self._auth is not None

    async def send(
        self, endpoint: Endpoint, form: Optional[FormValues] = None
    ) -> httpx.Response:
        """
        Send the request and classify the response status.

        Raises:
            CredentialError: GET/POST requested before authentication
            TransportError: No response was obtained
            APIError: The status is one of the documented API errors
                (the response has already been closed)
        """
        values = dict(form or {})
        custom = endpoint.method is AccessMethod.CUSTOM
        if not custom and self._auth is None:
            raise CredentialError("client has no app and user credentials to sign with")

        try:
            if custom:
                response = await endpoint.transport(
                    self._http, self._user, endpoint.url, values
                )
            else:
                response = await self._http.send(
                    self._build_request(endpoint, values), auth=self._auth, stream=True
                )
        except Exception as e:
            lib_logger.debug(f"{endpoint} failed: {type(e).__name__}: {e}")
            raise TransportError(e) from e

        lib_logger.debug(f"{endpoint} -> {response.status_code}")

        error = classify_status(response.status_code)
        if error is not None:
            await response.aclose()
            lib_logger.warning(f"{endpoint}: {error}")
            raise error
        return response

    def _build_request(self, endpoint: Endpoint, values: FormValues) -> httpx.Request:
        if endpoint.method is AccessMethod.POST:
            return self._http.build_request("POST", endpoint.url, data=values)
        return self._http.build_request("GET", endpoint.url, params=values)


__all__ = ["RequestSender", "FormValues"]

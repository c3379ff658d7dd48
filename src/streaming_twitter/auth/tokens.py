# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

# src/streaming_twitter/auth/tokens.py

import inspect
import logging
from typing import Optional

import httpx
from authlib.common.errors import AuthlibBaseError
from authlib.integrations.httpx_client import AsyncOAuth1Client

from ..core.config import ClientConfig, load_config
from ..core.constants import LIB_LOGGER_NAME, OAUTH_CALLBACK_OOB
from ..core.errors import AuthorizationError, CredentialError
from ..core.types import Credentials
from .store import TokenStore
from .verifier import ConsoleVerifier, VerificationCodeProvider

lib_logger = logging.getLogger(LIB_LOGGER_NAME)


class ClientTokens:
    """
    Produces the user access token needed to sign API requests.

    The application token (consumer key/secret) is obtained from Twitter and
    written by hand into the ``App`` entry of the token store. The user's
    token is requested through the three-legged OAuth 1.0a handshake the
    first time, then written back to the store and reused afterwards.

    Usage:
        tokens = ClientTokens(FileTokenStore("tokens.json"))
        user = await tokens.acquire()
        app = tokens.app
    """

    def __init__(
        self,
        store: TokenStore,
        verifier: Optional[VerificationCodeProvider] = None,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            store: Where the App/User credential document lives
            verifier: Supplies the PIN shown after authorization.
                Defaults to an interactive console prompt.
            config: Endpoint URLs and timeouts; defaults to load_config()
            transport: httpx transport for the handshake requests (tests
                inject httpx.MockTransport here)
        """
        self._store = store
        self._verifier = verifier or ConsoleVerifier()
        self._config = config or load_config()
        self._transport = transport
        self.app: Optional[Credentials] = None
        self.user: Optional[Credentials] = None

    async def acquire(self) -> Credentials:
        """
        Return a usable user token, authorizing the user if needed.

        The application entry is validated on every call, even when a user
        token is already stored, so a corrupted App entry never slips
        through to request signing.

        Raises:
            StoreError: The store could not be read, or the new token
                could not be saved
            CredentialError: The App entry is missing or incomplete
            AuthorizationError: The handshake with Twitter failed
        """
        bundle = self._store.load()

        app = bundle.app
        if app is None:
            raise CredentialError('missing "App" token')
        if not app.is_complete:
            raise CredentialError("missing app's Token or Secret")
        self.app = app

        if bundle.user is not None and bundle.user.is_complete:
            lib_logger.debug("Using stored user token")
            self.user = bundle.user
            return bundle.user

        lib_logger.info("No user token stored, starting authorization")
        user = await self._authorize(app)

        # Only reached after a successful exchange
        self._store.save(bundle.with_user(user))
        lib_logger.info("User token saved")

        self.user = user
        return user

    async def _authorize(self, app: Credentials) -> Credentials:
        """Run request-token -> user authorization -> access-token."""
        timeout = httpx.Timeout(self._config.connect_timeout)
        try:
            async with AsyncOAuth1Client(
                app.token,
                app.secret,
                redirect_uri=OAUTH_CALLBACK_OOB,
                transport=self._transport,
                timeout=timeout,
            ) as oauth:
                request_token = await oauth.fetch_request_token(
                    self._config.request_token_url
                )
                lib_logger.debug("Obtained temporary credentials")

                authorization_url = oauth.create_authorization_url(
                    self._config.authorize_url, request_token["oauth_token"]
                )
                code = await self._verification_code(authorization_url)
                if not code:
                    raise AuthorizationError("no verification code supplied")

                token = await oauth.fetch_access_token(
                    self._config.access_token_url, verifier=code
                )
        except AuthorizationError:
            raise
        except EOFError as e:
            raise AuthorizationError("no verification code supplied", e) from e
        except (httpx.HTTPError, AuthlibBaseError, ValueError, KeyError) as e:
            raise AuthorizationError(f"Authorization failed: {e}", e) from e

        user = Credentials(
            token=token.get("oauth_token", ""),
            secret=token.get("oauth_token_secret", ""),
        )
        if not user.is_complete:
            raise AuthorizationError("access token response is missing the token or secret")

        screen_name = token.get("screen_name")
        if screen_name:
            lib_logger.info(f"Authorization complete for @{screen_name}")
        else:
            lib_logger.info("Authorization complete")
        return user

    async def _verification_code(self, authorization_url: str) -> str:
        result = self._verifier(authorization_url)
        if inspect.isawaitable(result):
            result = await result
        return (result or "").strip()


__all__ = ["ClientTokens"]

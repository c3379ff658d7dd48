# SPDX-License-Identifier: LGPL-3.0-only
# Copyright (c) 2026 Mirrowel

"""
StreamClient - the public facade.

Holds the credentials, the HTTP client, the built-in stream table and the
two shared output queues (errors and finished). Every call made through a
client reports failures and completion on those same queues; records go
to a queue chosen per call.
"""

import asyncio
import logging
from typing import Any, Callable, Mapping, Optional

import httpx

from ..auth.tokens import ClientTokens
from ..core.config import ClientConfig, load_config
from ..core.constants import LIB_LOGGER_NAME
from ..core.types import Credentials, Endpoint, Finished
from ..models.status import TwitterStatus
from .rest import run_rest
from .sender import FormValues, RequestSender
from .stream import RecordFactory, run_stream
from .streams import FILTER, default_streams, validate_filter_form
from .types import StreamHandle

lib_logger = logging.getLogger(LIB_LOGGER_NAME)


class StreamClient:
    """
    Client for the Twitter streaming and REST APIs.

    Usage:
        async with StreamClient() as client:
            await client.authenticate(ClientTokens(FileTokenStore("tokens.json")))
            handle = client.filter_stream({"track": "python"})
            while True:
                status = await handle.records.get()
                ...

    Errors and Finished signals from every call arrive on ``client.errors``
    and ``client.finished``. Callers must keep draining both (queues are
    bounded by ``config.queue_size``, 1 by default, so an undrained queue
    pauses the producing call).
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        http: Optional[httpx.AsyncClient] = None,
        streams: Optional[Mapping[str, Endpoint]] = None,
    ):
        """
        Args:
            config: Client configuration; defaults to load_config()
            http: HTTP client to use. When None the client creates (and
                later closes) its own.
            streams: Replacement stream table; defaults to the built-in
                Filter, Firehose and Sample descriptors
        """
        self.config = config or load_config()
        self._owns_http = http is None
        if http is None:
            http = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    self.config.read_timeout, connect=self.config.connect_timeout
                ),
                headers={"User-Agent": self.config.user_agent},
            )
        self.http = http
        self.streams: Mapping[str, Endpoint] = (
            default_streams() if streams is None else streams
        )

        self.errors: "asyncio.Queue[BaseException]" = asyncio.Queue(
            maxsize=self.config.queue_size
        )
        self.finished: "asyncio.Queue[Finished]" = asyncio.Queue(
            maxsize=self.config.queue_size
        )

        self._app: Optional[Credentials] = None
        self._user: Optional[Credentials] = None
        self._sender = RequestSender(self.http)

    # =========================================================================
    # CREDENTIALS
    # =========================================================================

    @property
    def app(self) -> Optional[Credentials]:
        return self._app

    @property
    def user(self) -> Optional[Credentials]:
        return self._user

    @property
    def is_authenticated(self) -> bool:
        return self._sender.can_sign

    async def authenticate(self, tokens: ClientTokens) -> Credentials:
        """
        Obtain the user token and keep both credentials for signing.

        Must not run while calls are active on this client.

        Raises:
            StoreError, CredentialError, AuthorizationError: see
            ClientTokens.acquire()
        """
        user = await tokens.acquire()
        self._app = tokens.app
        self._user = user
        self._sender = RequestSender(self.http, self._app, self._user)
        lib_logger.debug("Client authenticated")
        return user

    # =========================================================================
    # CALLS
    # =========================================================================

    def resolve(self, name: str) -> Endpoint:
        """Look up a stream by name (``Filter``, ``Firehose``, ``Sample``)."""
        try:
            return self.streams[name]
        except KeyError:
            raise KeyError(
                f"unknown stream {name!r}; known: {', '.join(self.streams)}"
            ) from None

    async def rest(
        self,
        endpoint: Endpoint,
        form: Optional[FormValues] = None,
        into: Any = None,
        model: Optional[Callable[[Any], Any]] = None,
    ) -> Any:
        """One-shot request; see run_rest()."""
        return await run_rest(
            self._sender,
            self.errors,
            self.finished,
            endpoint,
            form,
            into=into,
            model=model,
        )

    async def run_stream(
        self,
        out: "asyncio.Queue[Any]",
        endpoint: Endpoint,
        form: Optional[FormValues] = None,
        cancel: Optional[asyncio.Event] = None,
        record_factory: RecordFactory = TwitterStatus.from_dict,
    ) -> None:
        """Run the stream loop on the current task; see stream.run_stream()."""
        await run_stream(
            self._sender,
            out,
            self.errors,
            self.finished,
            endpoint,
            form,
            cancel=cancel,
            record_factory=record_factory,
        )

    def stream(
        self,
        endpoint: Endpoint,
        form: Optional[FormValues] = None,
        out: "Optional[asyncio.Queue[Any]]" = None,
        record_factory: RecordFactory = TwitterStatus.from_dict,
    ) -> StreamHandle:
        """
        Start a stream in a new task and return its handle.

        Must be called from within a running event loop.
        """
        if out is None:
            out = asyncio.Queue(maxsize=self.config.queue_size)
        cancel = asyncio.Event()
        task = asyncio.create_task(
            self.run_stream(out, endpoint, form, cancel, record_factory)
        )
        return StreamHandle(endpoint=endpoint, records=out, task=task, cancel_event=cancel)

    def filter_stream(
        self,
        form: Mapping[str, Any],
        out: "Optional[asyncio.Queue[Any]]" = None,
    ) -> StreamHandle:
        """
        Start the Filter stream.

        Raises:
            ValueError: None of follow, track or locations was given
        """
        validate_filter_form(form)
        return self.stream(self.resolve(FILTER), form, out)

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def aclose(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "StreamClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()


__all__ = ["StreamClient"]

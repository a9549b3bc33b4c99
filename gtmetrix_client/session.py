"""GTmetrix test session: submit a URL, poll its state and wait for results."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, TypeVar

import aiohttp
from pydantic import ValidationError

from gtmetrix_client.config import GTmetrixConfig
from gtmetrix_client.errors import (
    DecodeError,
    RemoteError,
    TransportError,
    WaitTimeoutError,
)
from gtmetrix_client.models.base import Model
from gtmetrix_client.models.reference import TestReference
from gtmetrix_client.models.snapshot import ResultSnapshot

log = logging.getLogger(__name__)

M = TypeVar("M", bound=Model)


@dataclass(frozen=True, kw_only=True)
class TestSession:
    """Drives the submit, poll and wait lifecycle of GTmetrix tests.

    Holds no per-test state, so one session can serve any number of
    independent tests. The HTTP session carries the base URL and basic
    authentication and is reused for every request.
    """

    __test__ = False

    config: GTmetrixConfig
    session: aiohttp.ClientSession = field(repr=False)

    @classmethod
    @asynccontextmanager
    async def from_config(
        cls, config: GTmetrixConfig
    ) -> AsyncGenerator["TestSession", None]:
        """Create a test session with managed HTTP session lifecycle."""
        auth = aiohttp.BasicAuth(config.username, config.api_key.get_secret_value())
        async with aiohttp.ClientSession(
            base_url=config.api_base_url,
            auth=auth,
            timeout=aiohttp.ClientTimeout(total=config.request_timeout),
        ) as session:
            yield cls(config=config, session=session)

    async def submit(self, target_url: str) -> TestReference:
        """Queue a test of ``target_url`` and return its reference.

        Args:
            target_url: URL of the site to test, passed through unvalidated

        Returns:
            Reference to poll the test with

        Raises:
            TransportError: If the request fails
            RemoteError: If the API reports an error; the partially decoded
                reference is attached to the exception

        """
        status, body = await self.request("POST", "test", data={"url": target_url})
        reference = self.decode(TestReference, body)

        if reference.error:
            raise RemoteError(reference.error, reference=reference)
        if not 200 <= status < 300:
            text = body.decode(errors="replace")
            raise RemoteError(
                f"Failed to submit test: {status} {text}", reference=reference
            )
        if not reference.test_id:
            raise RemoteError("No test ID in submission response", reference=reference)

        log.info(
            "Submitted test for %s: test_id=%s, credits_left=%d",
            target_url,
            reference.test_id,
            reference.credits_left,
        )
        return reference

    async def poll(self, reference: TestReference) -> ResultSnapshot:
        """Fetch the current state of a test.

        Does not rate limit; GTmetrix asks for at most one poll per second.
        """
        status, body = await self.request("GET", f"test/{reference.test_id}")
        if not 200 <= status < 300:
            log.warning(
                "Polling test %s returned status %d", reference.test_id, status
            )
        return self.decode(ResultSnapshot, body)

    async def wait_for_completion(
        self,
        reference: TestReference,
        timeout: float = 300,
        poll_interval: float = 1,
    ) -> ResultSnapshot:
        """Poll a test until it reaches a terminal state.

        A test that ends in the ``error`` state is returned like a completed
        one, only running out of time is an error.

        Args:
            reference: Reference returned from submit
            timeout: Maximum wait time in seconds (default: 5 minutes)
            poll_interval: Seconds between polls (default: 1)

        Returns:
            The first snapshot in a terminal state

        Raises:
            TransportError: If a poll fails, no retry is attempted
            WaitTimeoutError: If the test does not finish within timeout
            asyncio.CancelledError: If the waiting task is cancelled

        """
        loop = asyncio.get_event_loop()
        deadline = loop.time() + timeout

        while loop.time() < deadline:
            snapshot = await self.poll(reference)
            if snapshot.is_terminal:
                log.info(
                    "Test %s finished in state=%s", reference.test_id, snapshot.state
                )
                return snapshot

            log.info("Test %s still in state=%s", reference.test_id, snapshot.state)
            # Never sleep past the deadline
            await asyncio.sleep(max(0.0, min(poll_interval, deadline - loop.time())))

        raise WaitTimeoutError(
            f"Test {reference.test_id} did not complete within {timeout} seconds"
        )

    async def submit_and_wait(self, target_url: str) -> ResultSnapshot:
        """Submit a test and wait for it using the configured timings."""
        reference = await self.submit(target_url)
        return await self.wait_for_completion(
            reference,
            timeout=self.config.timeout,
            poll_interval=self.config.poll_interval,
        )

    async def request(
        self, method: str, url: str, **kwargs: Any
    ) -> tuple[int, bytes]:
        """Send a request relative to the API base URL.

        Returns:
            Response status and raw body

        Raises:
            TransportError: If the request cannot be sent or read

        """
        try:
            async with self.session.request(method, url, **kwargs) as response:
                return response.status, await response.read()
        except (aiohttp.ClientError, TimeoutError) as exc:
            raise TransportError(f"{method} {url} failed: {exc!r}") from exc

    def decode(self, model_cls: type[M], body: bytes) -> M:
        """Decode a JSON body, falling back to empty values unless strict.

        Mistyped fields are zeroed one by one, an undecodable body gives an
        empty model.
        """
        try:
            return model_cls.model_validate_json(
                body, context={"strict": self.config.strict_decode}
            )
        except ValidationError as exc:
            if self.config.strict_decode:
                raise DecodeError(
                    f"Invalid {model_cls.__name__} payload: {exc}"
                ) from exc
            log.warning(
                "Could not decode %s payload, using empty value: %s",
                model_cls.__name__,
                exc,
            )
            return model_cls()

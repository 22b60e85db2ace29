"""Client for the spreadsheet web-app that holds the shared project list.

The remote side is a spreadsheet-backed web app with two actions:

    GET  {api_url}?action=getProjects&timestamp=<ms>
         -> {"projects": [...]} or {"error": "..."}
    POST {api_url}  {"action": "saveProjects", "projects": [...]}

Resilience follows the same pattern for every call:
- User-Agent header on every request
- Exponential backoff with jitter on transient failures
- Retry-After honored on 429 responses
- Circuit breaker: fail fast while the endpoint is down
- Config-driven retry/backoff parameters (``resilience`` section)
"""

import asyncio
import logging
import random
import time
from collections.abc import Callable

import aiohttp
from pydantic import ValidationError

from fiscal_tracker import __version__
from fiscal_tracker.config import get_sync_url
from fiscal_tracker.schemas.models import Project
from fiscal_tracker.sync.circuit_breaker import CircuitBreaker, CircuitOpenError

logger = logging.getLogger(__name__)

USER_AGENT = f"Fiscal-Budget-Tracker/{__version__} (project-sync)"
MAX_RETRIES = 3
BACKOFF_BASE = 2  # seconds
ENDPOINT_NAME = "sheets"


class SheetsSyncError(Exception):
    """Raised when the remote project list cannot be read or is invalid."""


class SheetsClient:
    """Reads and writes the project collection on the remote sheet.

    Args:
        config: Optional tracker config dict. Reads ``sync`` for the
                endpoint and ``resilience`` for retry/circuit-breaker
                parameters; missing sections fall back to module defaults.
        api_url: Explicit endpoint, overriding config and environment.
        clock: Monotonic clock for the circuit breaker (tests inject one).
    """

    def __init__(
        self, config: dict | None = None, api_url: str | None = None,
        clock: Callable[[], float] | None = None,
    ):
        self.api_url = api_url if api_url is not None else get_sync_url(config)
        self._headers = {"User-Agent": USER_AGENT}

        resilience = (config or {}).get("resilience", {})
        self.max_retries = max(1, resilience.get("max_retries", MAX_RETRIES))
        self.backoff_base = max(1, resilience.get("backoff_base", BACKOFF_BASE))
        self.backoff_max = resilience.get("backoff_max", 300)
        self.request_timeout = aiohttp.ClientTimeout(
            total=resilience.get("request_timeout", 30)
        )

        cb_config = resilience.get("circuit_breaker", {})
        self._circuit_breaker = CircuitBreaker(
            name=ENDPOINT_NAME,
            failure_threshold=cb_config.get("failure_threshold", 5),
            recovery_timeout=cb_config.get("recovery_timeout", 60),
            clock=clock,
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_url)

    def _create_session(self) -> aiohttp.ClientSession:
        """Create an aiohttp session with the tracker User-Agent."""
        return aiohttp.ClientSession(headers=self._headers)

    async def _request_with_retry(
        self, session: aiohttp.ClientSession, method: str, url: str,
        parse_json: bool = True, **kwargs,
    ) -> dict:
        """Make an HTTP request with exponential backoff on transient failures.

        The circuit breaker is checked once at entry and updated from the
        final outcome of the whole retry loop.

        Raises:
            CircuitOpenError: If the breaker is OPEN.
            aiohttp.ClientError / asyncio.TimeoutError: After all retries. A
                body that is not JSON surfaces as ``aiohttp.ContentTypeError``.
        """
        if not self._circuit_breaker.is_call_permitted:
            raise CircuitOpenError(ENDPOINT_NAME)

        kwargs.setdefault("timeout", self.request_timeout)
        request_fn = getattr(session, method.lower())
        last_error: Exception | None = None

        attempt = 0
        rate_limit_hits = 0
        while attempt < self.max_retries:
            try:
                async with request_fn(url, **kwargs) as resp:
                    if resp.status == 429:
                        rate_limit_hits += 1
                        if rate_limit_hits > self.max_retries:
                            last_error = aiohttp.ClientResponseError(
                                resp.request_info, resp.history, status=429,
                            )
                            break
                        raw_retry = resp.headers.get("Retry-After", "")
                        try:
                            retry_after = max(0, min(int(raw_retry), self.backoff_max))
                        except (ValueError, TypeError):
                            retry_after = min(self.backoff_base ** (attempt + 2), self.backoff_max)
                        logger.warning("%s: 429 rate limited, waiting %ds", ENDPOINT_NAME, retry_after)
                        await asyncio.sleep(retry_after)
                        continue  # server-requested delay does not use up an attempt
                    resp.raise_for_status()
                    try:
                        result = await resp.json(content_type=None) if parse_json else {}
                    except ValueError as exc:
                        # e.g. an HTML login or error page served with 200
                        raise aiohttp.ContentTypeError(
                            resp.request_info, resp.history, status=resp.status,
                            message=f"response body is not JSON: {exc}",
                        ) from exc
                    self._circuit_breaker.record_success()
                    return result if isinstance(result, dict) else {"projects": result}
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                last_error = e
                logger.warning(
                    "%s: request failed (attempt %d/%d): %s",
                    ENDPOINT_NAME, attempt + 1, self.max_retries, e,
                )

            attempt += 1
            if attempt < self.max_retries:
                backoff = min(self.backoff_base ** attempt + random.uniform(0, 1), self.backoff_max)
                logger.info("%s: retrying in %.1fs...", ENDPOINT_NAME, backoff)
                await asyncio.sleep(backoff)

        self._circuit_breaker.record_failure()
        logger.error(
            "%s: all %d retries exhausted, last error: %s",
            ENDPOINT_NAME, self.max_retries, last_error,
        )
        raise last_error or aiohttp.ClientError(f"{ENDPOINT_NAME}: request failed")

    async def fetch_projects(self, session: aiohttp.ClientSession | None = None) -> list[Project]:
        """Fetch and validate the remote project list.

        Raises:
            SheetsSyncError: No endpoint configured, the remote reported an
                error, the request failed, or an entry failed validation.
            CircuitOpenError: If the breaker is OPEN.
        """
        if not self.is_configured:
            raise SheetsSyncError("No sheets endpoint configured")
        if session is None:
            async with self._create_session() as own_session:
                return await self.fetch_projects(own_session)

        params = {"action": "getProjects", "timestamp": str(int(time.time() * 1000))}
        try:
            data = await self._request_with_retry(session, "GET", self.api_url, params=params)
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise SheetsSyncError(f"Failed to fetch projects: {exc}") from exc

        if data.get("error"):
            raise SheetsSyncError(f"Remote error: {data['error']}")
        items = data.get("projects") or []
        if not isinstance(items, list):
            raise SheetsSyncError(f"Remote projects field is not a list: {type(items).__name__}")
        try:
            projects = [Project.model_validate(item) for item in items]
        except ValidationError as exc:
            raise SheetsSyncError(f"Remote project list failed validation: {exc}") from exc

        logger.info("Fetched %d projects from remote sheet", len(projects))
        return projects

    async def push_projects(
        self, projects: list[Project], session: aiohttp.ClientSession | None = None,
    ) -> bool:
        """Replace the remote project list. Returns success; never raises."""
        if not self.is_configured:
            logger.warning("No sheets endpoint configured, skipping remote save")
            return False
        if session is None:
            async with self._create_session() as own_session:
                return await self.push_projects(projects, own_session)

        body = {"action": "saveProjects", "projects": [p.to_wire() for p in projects]}
        try:
            await self._request_with_retry(session, "POST", self.api_url, parse_json=False, json=body)
        except CircuitOpenError as exc:
            logger.warning("Remote save skipped: %s", exc)
            return False
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            logger.error("Failed to save projects to remote sheet: %s", exc)
            return False

        logger.info("Saved %d projects to remote sheet", len(projects))
        return True

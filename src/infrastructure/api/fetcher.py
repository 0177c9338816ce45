# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Fetch-with-fallback collaborator.

List and dashboard screens used to swallow API errors and show bundled demo
data, which made a failed call look like a successful one. DataFetcher keeps
the demo data but labels every result with where it came from:

- DataSource.LIVE: the backend answered.
- DataSource.FALLBACK: the backend call failed and demo data was used.

Fallback only happens when it is enabled in settings and the caller supplied
demo data; otherwise the ApiError propagates.

Example:
    >>> result = await fetcher.fetch(
    ...     "fee structure",
    ...     lambda: api.get("/accountant/fee-structure"),
    ...     fallback=datasets.fee_structure,
    ... )
    >>> result.is_fallback
    False
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

from src.infrastructure.api.client import ApiError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataSource(str, Enum):
    """Where a fetched value came from."""

    LIVE = "live"
    FALLBACK = "fallback"


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Fetched data tagged with its source.

    Attributes:
        data: The fetched (or demo) value.
        source: LIVE or FALLBACK.
        error: Failure message when source is FALLBACK.
    """

    data: T
    source: DataSource = DataSource.LIVE
    error: str | None = None

    @property
    def is_fallback(self) -> bool:
        return self.source is DataSource.FALLBACK


class DataFetcher:
    """Runs API calls and applies demo-data fallback when allowed.

    Attributes:
        fallback_enabled: Whether demo data may replace failed calls.
    """

    def __init__(self, fallback_enabled: bool) -> None:
        self.fallback_enabled = fallback_enabled

    async def fetch(
        self,
        label: str,
        call: Callable[[], Awaitable[T]],
        fallback: Callable[[], T] | None = None,
    ) -> FetchResult[T]:
        """Run an API call, falling back to demo data on ApiError.

        Args:
            label: What is being fetched, for logs.
            call: Zero-argument coroutine factory performing the request.
            fallback: Zero-argument factory returning demo data.

        Returns:
            FetchResult tagged LIVE or FALLBACK.

        Raises:
            ApiError: If the call fails and no fallback applies.
        """
        try:
            return FetchResult(data=await call())
        except ApiError as e:
            if not self.fallback_enabled or fallback is None:
                raise
            logger.warning("Failed to fetch %s, using demo data: %s", label, e.message)
            return FetchResult(data=fallback(), source=DataSource.FALLBACK, error=e.message)

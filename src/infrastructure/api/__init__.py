# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Backend API access package.

- ApiClient: async JSON client with bearer auth and typed errors
- DataFetcher: fetch with explicit live/fallback result
"""

from src.infrastructure.api.client import (
    ApiAuthError,
    ApiClient,
    ApiConnectionError,
    ApiError,
    ApiNotFoundError,
    ApiResponseError,
)
from src.infrastructure.api.fetcher import DataFetcher, DataSource, FetchResult

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiConnectionError",
    "ApiResponseError",
    "ApiAuthError",
    "ApiNotFoundError",
    "DataFetcher",
    "DataSource",
    "FetchResult",
]

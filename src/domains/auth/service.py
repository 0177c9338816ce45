# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Authentication service for session management.

This module provides the AuthService that handles:
- Email/password login against ``POST /auth/login``
- Storing the returned token and user in the session
- Logout

Example:
    >>> auth_service = AuthService(api, session)
    >>> user = await auth_service.login("admin@school.edu", "secret")
"""

import logging

from pydantic import ValidationError

from src.infrastructure.api.client import ApiAuthError, ApiClient, ApiError
from src.infrastructure.session.store import Session
from src.models.user import User, parse_user

logger = logging.getLogger(__name__)


class AuthenticationError(Exception):
    """Base exception for authentication errors."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when the backend rejects the email/password pair."""

    pass


class AuthService:
    """Authentication service for session management.

    Attributes:
        _api: Backend API client.
        _session: Session the credentials are written to.
    """

    def __init__(self, api: ApiClient, session: Session) -> None:
        """Initialize the authentication service.

        Args:
            api: Backend API client.
            session: Session to store credentials in.
        """
        self._api = api
        self._session = session

    async def login(self, email: str, password: str, tenant: str | None = None) -> User:
        """Sign in and store the session.

        Args:
            email: Account email.
            password: Account password.
            tenant: Optional tenant subdomain sent as ``x-tenant``.

        Returns:
            The signed-in user.

        Raises:
            InvalidCredentialsError: If the credentials are rejected.
            AuthenticationError: If the backend fails or answers unexpectedly.
        """
        headers = {"x-tenant": tenant} if tenant else None

        try:
            data = await self._api.post(
                "/auth/login",
                json={"email": email, "password": password},
                headers=headers,
            )
        except ApiAuthError as e:
            raise InvalidCredentialsError("Invalid email or password") from e
        except ApiError as e:
            raise AuthenticationError(e.message) from e

        try:
            token = data["access_token"]
            user = parse_user(data["user"])
        except (KeyError, TypeError, ValidationError) as e:
            raise AuthenticationError(f"Unexpected login response: {e}") from e

        self._session.login(token, user)
        logger.info("Signed in as %s (%s)", user.email, user.role)
        return user

    def logout(self) -> None:
        """Clear the stored session."""
        self._session.logout()
        logger.info("Signed out")

    @property
    def current_user(self) -> User | None:
        return self._session.user

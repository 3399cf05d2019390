"""Auth service for login, token refresh and password change."""

import structlog

from backoffice.core.auth.jwt import TokenError, TokenSettings, sign_token, verify_token
from backoffice.core.auth.password import hash_password, verify_password
from backoffice.core.auth.repository import AuthRepository
from backoffice.core.auth.types import (
    LoginResult,
    Organization,
    TokenClaims,
    User,
    UserStatus,
)
from backoffice.core.exceptions import (
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
)

logger = structlog.get_logger()

BLOCKED_STATUSES = (UserStatus.SUSPENDED, UserStatus.INACTIVE)


class AuthService:
    """Service for credential checks and session token issuance.

    Sessions are stateless: nothing is written on login or refresh, and
    expiry is the only way a token stops being valid.
    """

    def __init__(self, repo: AuthRepository, tokens: TokenSettings) -> None:
        """Initialize with auth repository and token settings.

        Args:
            repo: Auth repository for database operations.
            tokens: Secrets and lifetimes for access and refresh tokens.
        """
        self._repo = repo
        self._tokens = tokens

    async def login(self, identifier: str, password: str) -> LoginResult:
        """Authenticate user and return a token pair.

        Args:
            identifier: User's email address or username.
            password: Plain text password.

        Returns:
            Access token, refresh token and the user's profile without the
            password hash.

        Raises:
            NotFoundError: No user matches the identifier.
            UnauthorizedError: The password does not match.
            ForbiddenError: The account is suspended or inactive.
        """
        user = await self._repo.get_user_by_login(identifier)
        if not user:
            raise NotFoundError("User does not exist")

        if not verify_password(password, user.password_hash):
            logger.info("login_password_mismatch", user_id=user.id)
            raise UnauthorizedError("Password did not match")

        status = user.status
        if status is not None and status in BLOCKED_STATUSES:
            logger.info("login_blocked", user_id=user.id, status=status.value)
            raise ForbiddenError(f"Your account is {status.value}.")

        claims = self._login_claims(user)
        access_token = sign_token(
            claims.to_payload(), self._tokens.access_secret, self._tokens.access_ttl
        )
        refresh_token = sign_token(
            claims.to_payload(), self._tokens.refresh_secret, self._tokens.refresh_ttl
        )

        logger.info("login_succeeded", user_id=user.id)
        return LoginResult(
            access_token=access_token,
            refresh_token=refresh_token,
            user=user.to_profile(),
        )

    async def refresh(self, refresh_token: str) -> str:
        """Redeem a refresh token for a new access token.

        Claims of the new access token, per field:

        - ``id``, ``email``, ``role``: re-read from the users table, so a
          role change since login is reflected.
        - ``organizationId``: not carried over from the old token and not
          re-read; refresh-derived access tokens omit it.

        The only thing taken from the refresh token is the email used to
        find the user again.

        Args:
            refresh_token: Refresh token issued by :meth:`login`.

        Returns:
            New access token.

        Raises:
            ForbiddenError: The token fails verification for any reason.
            NotFoundError: The user no longer exists.
        """
        try:
            payload = verify_token(refresh_token, self._tokens.refresh_secret)
        except TokenError as e:
            logger.info("refresh_token_rejected", reason=str(e))
            raise ForbiddenError("Invalid refresh token") from None

        email = payload.get("email")
        if not isinstance(email, str):
            raise ForbiddenError("Invalid refresh token")

        user = await self._repo.get_user_by_email(email)
        if not user:
            raise NotFoundError("User does not exist")

        claims = TokenClaims(id=user.id, email=user.email, role=user.role)
        return sign_token(claims.to_payload(), self._tokens.access_secret, self._tokens.access_ttl)

    async def change_password(self, user_id: int, old_password: str, new_password: str) -> None:
        """Replace a user's password after checking the current one.

        Args:
            user_id: User whose password changes.
            old_password: Current plain text password.
            new_password: New plain text password.

        Raises:
            NotFoundError: The user does not exist.
            UnauthorizedError: ``old_password`` does not match.
            InvalidArgumentError: ``new_password`` is longer than bcrypt accepts.
        """
        user = await self._repo.get_user_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        if not verify_password(old_password, user.password_hash):
            raise UnauthorizedError("Old password is incorrect")

        updated = await self._repo.update_password(user_id, hash_password(new_password))
        if not updated:
            raise NotFoundError("User not found")

        logger.info("password_changed", user_id=user_id)

    async def check_domain_exists(self, domain: str) -> Organization | None:
        """Resolve the organization owning a login domain, if any."""
        return await self._repo.get_org_by_domain(domain)

    def _login_claims(self, user: User) -> TokenClaims:
        """Claims shared by both tokens issued at login."""
        return TokenClaims(
            id=user.id,
            email=user.email,
            role=user.role,
            organization_id=user.organization_id,
        )

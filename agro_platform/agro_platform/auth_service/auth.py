from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
import jwt

from .errors import InternalError, InvalidToken
from .schemas import TokenClaims

TOKEN_LIFETIME = timedelta(days=7)
REQUIRED_CLAIMS = ["sub", "email", "rol", "exp"]


class PasswordHasher:
    """Salted one-way hashing of account passwords."""

    # Defaults to pbkdf2_sha256 to avoid external bcrypt backend issues
    def __init__(self, scheme: str = "pbkdf2_sha256", rounds: Optional[int] = None):
        options = {}
        if rounds:
            options[f"{scheme}__rounds"] = rounds
        self._context = CryptContext(schemes=[scheme], deprecated="auto", **options)

    def hash(self, password: str) -> str:
        try:
            return self._context.hash(password)
        except (ValueError, TypeError) as exc:
            raise InternalError(detail=f"password hashing failed: {exc}") from exc

    def verify(self, password: str, hashed_password: str) -> bool:
        if not password or not hashed_password:
            return False
        try:
            return self._context.verify(password, hashed_password)
        except (ValueError, TypeError):
            # Unrecognised or corrupt digest
            return False

    def dummy_verify(self) -> None:
        """Spend the time of one verification without a stored digest."""
        self._context.dummy_verify()


class SessionTokenCodec:
    """
    Issues and verifies signed session tokens.

    Tokens are stateless: validity depends only on signature and expiry,
    there is no revocation list. The role claim is trusted until the token
    expires, even if the user's type changes in the directory.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", lifetime: timedelta = TOKEN_LIFETIME):
        if not secret:
            raise ValueError("jwt_secret_blank")
        self._secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def issue(self, user_id: int, email: str, role: str) -> str:
        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "rol": role,
            "iat": now,
            "exp": now + self.lifetime,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self.algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as exc:
            raise InternalError(detail=f"token signing failed: {exc}") from exc

    def verify(self, token: str) -> TokenClaims:
        if not token:
            raise InvalidToken()
        try:
            # Algorithm pinned: never taken from the token header
            data = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidToken(detail="token_expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidToken(detail=f"token_invalid: {exc}") from exc

        try:
            return TokenClaims(id=int(data["sub"]), email=data["email"], rol=data["rol"])
        except (TypeError, ValueError) as exc:
            raise InvalidToken(detail="token_claims_malformed") from exc

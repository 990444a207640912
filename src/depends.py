from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from src.adapter.services.token_codec import JwtTokenCodec
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.token_codec import ITokenCodec
from src.domain.entities import SessionEviction
from src.domain.session_policy import SessionPolicy

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer()

token_codec = JwtTokenCodec(
    secret_key=ApplicationConfig.JWT_SECRET,
    issuer=ApplicationConfig.JWT_ISSUER,
    audience=ApplicationConfig.JWT_AUDIENCE,
    access_token_minutes=ApplicationConfig.ACCESS_TOKEN_MINUTES,
    bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS,
)

session_policy = SessionPolicy(
    session_lifetime_days=ApplicationConfig.REFRESH_TOKEN_DAYS,
    max_sessions=ApplicationConfig.MAX_SESSIONS_PER_ACCOUNT,
    eviction=SessionEviction(ApplicationConfig.SESSION_EVICTION),
    max_write_attempts=ApplicationConfig.MAX_WRITE_ATTEMPTS,
)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_token_codec() -> ITokenCodec:
    return token_codec


def get_session_policy() -> SessionPolicy:
    return session_policy


async def get_current_account_id(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    codec: ITokenCodec = Depends(get_token_codec),
) -> UUID:
    """
    Dependency to extract and verify JWT token from Authorization header.

    Args:
        credentials: Bearer token from Authorization header

    Returns:
        Account id from the token subject

    Raises:
        HTTPException: 401 if token is invalid or expired
    """
    payload = codec.verify_access_credential(credentials.credentials)

    try:
        return UUID(payload["sub"])
    except (TypeError, KeyError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

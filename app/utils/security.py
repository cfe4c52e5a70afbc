from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyHeader
import bcrypt
import jwt
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from app.core.config import JWTSettings
from app.db.database import get_db
from app.models.users import Users

auth_scheme = APIKeyHeader(name="Authorization", scheme_name="Bearer", auto_error=False)

jwt_settings = JWTSettings()

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))


async def create_access_token(to_encode: dict):
    expire = datetime.now(timezone.utc) + timedelta(
        minutes=jwt_settings.access_token_expire_minutes
    )
    payload = dict(to_encode)
    payload.update({"exp": expire, "type": "access"})
    encoded_jwt = jwt.encode(
        payload, jwt_settings.secret_key, algorithm=jwt_settings.algorithm
    )

    return encoded_jwt

async def verify_token(token: str, secret_key: str, algorithm: str):
    try:
        payload = jwt.decode(token, secret_key, algorithms=[algorithm])
        return payload
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token has expired")
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")

async def _resolve_user(token: str, db: AsyncSession) -> Users:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if token.startswith("Bearer "):
        token = token[7:]

    payload = await verify_token(token, jwt_settings.secret_key, jwt_settings.algorithm)
    user_id: Optional[str] = payload.get("id")
    if not user_id or payload.get("type") != "access":
        raise credentials_exception

    result = await db.execute(select(Users).where(Users.id == str(user_id)))
    user = result.scalar_one_or_none()

    if user is None:
        logger.warning(f"Token references unknown user {user_id}")
        raise credentials_exception

    return user

async def get_current_user(token: Optional[str] = Depends(auth_scheme), db: AsyncSession = Depends(get_db)) -> Users:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return await _resolve_user(token, db)

async def get_optional_user(token: Optional[str] = Depends(auth_scheme), db: AsyncSession = Depends(get_db)) -> Optional[Users]:
    # no Authorization header means an anonymous viewer; a bad one is still rejected
    if not token:
        return None
    return await _resolve_user(token, db)

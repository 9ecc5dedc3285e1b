import logging
from typing import Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt
from sqlalchemy.orm import Session

from .config import AUTH_JWT_ALGORITHM, AUTH_JWT_AUDIENCE, AUTH_JWT_SECRET
from .database import get_db
from .models import User
from .security_middleware import set_rls_context

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_access_token(token: str) -> dict:
    """
    Verify an access token issued by the hosted auth provider.

    Tokens are HS256 JWTs signed with the project secret; the ``sub`` claim
    identifies the user and ``aud`` must be the authenticated role.
    """
    if token.count(".") != 2:
        logger.error("❌ Invalid token format: wrong number of parts")
        raise HTTPException(status_code=401, detail="Invalid token format")

    try:
        payload = jwt.decode(
            token,
            AUTH_JWT_SECRET,
            algorithms=[AUTH_JWT_ALGORITHM],
            audience=AUTH_JWT_AUDIENCE,
        )
    except ExpiredSignatureError as e:
        logger.warning("⚠️ Token expired")
        raise HTTPException(status_code=401, detail="Token expired") from e
    except JWTError as e:
        logger.error(f"❌ Token verification failed: {str(e)}")
        raise HTTPException(status_code=401, detail="Invalid token") from e

    logger.debug("✅ Token signature verified")
    return payload


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a User, creating the profile on first sign-in"""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = credentials.credentials
    decoded_token = verify_access_token(token)

    auth_uid = decoded_token.get("sub")
    if not auth_uid:
        logger.error(f"❌ Token missing user ID claim. Available claims: {list(decoded_token.keys())}")
        raise HTTPException(status_code=401, detail="Invalid token claims")

    email = decoded_token.get("email")
    metadata = decoded_token.get("user_metadata") or {}
    name = metadata.get("name") or metadata.get("full_name")

    user = db.query(User).filter(User.auth_uid == auth_uid).first()

    if not user:
        logger.info(f"🆕 Creating profile for new user: {email}")
        user = User(auth_uid=auth_uid, email=email, name=name)
        db.add(user)
        try:
            db.commit()
            db.refresh(user)
            logger.info(f"✅ New user created: {user.email}")
        except Exception as e:
            db.rollback()
            # Another request may have created the same profile concurrently
            user = db.query(User).filter(User.auth_uid == auth_uid).first()
            if not user:
                logger.error(f"❌ Failed to create user {email}: {str(e)}")
                raise HTTPException(status_code=500, detail="Failed to create user profile") from e

    logger.debug(f"✅ User authenticated: {user.email}")

    set_rls_context(db, user.id)

    return user

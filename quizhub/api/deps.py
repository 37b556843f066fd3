"""FastAPI dependencies shared across routes."""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer

from quizhub.core.security import Identity, TokenVerifier

# Tokens come from the external identity provider; tokenUrl only feeds the docs UI.
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login")


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


def get_current_identity(
    token: str = Depends(oauth2_scheme),
    verifier: TokenVerifier = Depends(get_token_verifier),
) -> Identity:
    """Decode the bearer JWT into the caller's identity, or 401."""
    identity = verifier.identity(token)
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return identity

"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from campus_api.domain.entities import User
from campus_api.domain.exceptions import DirectoryError
from campus_api.infrastructure.database import get_db
from campus_api.infrastructure.repositories import DirectoryRepository, UserRepository
from campus_api.infrastructure.security import decode_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def _credentials_exception(detail: str = "Credenciales inválidas") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def resolve_current_user(token: str, db: Session) -> User:
    """Resolve the authenticated user for the provided token."""

    try:
        payload = decode_access_token(token)
    except ValueError as exc:
        raise _credentials_exception() from exc

    subject = payload.get("sub")
    try:
        user_id = int(subject)
    except (TypeError, ValueError) as exc:
        raise _credentials_exception() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_exception("Usuario no encontrado")
    return user


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the bearer token."""

    if credentials is None or not credentials.credentials:
        raise _credentials_exception()
    return resolve_current_user(credentials.credentials, db)


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Usuario inactivo",
        )
    return current_user


def get_current_teacher_id(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> int:
    """Return the teacher record id of the authenticated user."""

    try:
        teacher_id = DirectoryRepository(db).get_teacher_id_for_user(current_user.id)
    except DirectoryError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="El directorio no está disponible, intenta nuevamente",
        ) from exc
    if teacher_id is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Registro de docente no encontrado",
        )
    return teacher_id

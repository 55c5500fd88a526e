"""Endpoints para consultar y enviar notificaciones."""

from __future__ import annotations

import logging
from collections.abc import Callable

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from campus_api.application.use_cases.notifications import (
    dispatch_notification,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from campus_api.domain.entities import (
    ROLE_TEACHER,
    AllTeachersAudience,
    AllUsersExceptAudience,
    AudienceSpec,
    ClassRosterAudience,
    CourseRosterAudience,
    DepartmentAudience,
    Notification,
    SingleUserAudience,
    TeacherRosterAudience,
    User,
)
from campus_api.domain.exceptions import (
    ContentValidationError,
    DirectoryError,
    NoRecipientsError,
    PartialDispatchError,
    StoreError,
)
from campus_api.infrastructure.database import get_db, get_session_factory
from campus_api.interfaces.api.dependencies import (
    get_current_active_user,
    get_current_teacher_id,
)
from campus_api.interfaces.api.schemas import (
    NotificationDispatchResponse,
    NotificationMarkAllReadResponse,
    NotificationMarkReadResponse,
    NotificationRead,
    NotificationSendBase,
    SendToClassRequest,
    SendToCourseRequest,
    SendToDepartmentRequest,
    SendToDepartmentTeachersRequest,
    SendToUserRequest,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_STORE_UNAVAILABLE = "No se pudo acceder a las notificaciones, intenta nuevamente"


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


async def _send(
    *,
    session_factory: Callable[[], Session],
    sender: User,
    audience: AudienceSpec,
    body: NotificationSendBase,
    recipient_label: str,
    empty_detail: str,
) -> NotificationDispatchResponse:
    try:
        result = await dispatch_notification(
            session_factory,
            sender_id=sender.id,
            audience=audience,
            content=body.to_content(),
        )
    except ContentValidationError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except NoRecipientsError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=empty_detail) from exc
    except DirectoryError as exc:
        logger.warning("Directory lookup failed while sending notification: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="El directorio no está disponible, intenta nuevamente",
        ) from exc
    except PartialDispatchError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={
                "message": "La notificación no pudo enviarse a todos los destinatarios",
                "notification_ids": exc.notification_ids,
                "failed_recipient_ids": exc.failed_recipient_ids,
            },
        ) from exc

    return NotificationDispatchResponse(
        message=f"Notificación enviada a {result.recipient_count} {recipient_label}",
        recipient_count=result.recipient_count,
        notification_ids=result.notification_ids,
    )


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int | None = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Devuelve las notificaciones del usuario autenticado, de la más reciente a la más antigua."""

    try:
        notifications = list_notifications_uc(
            db, current_user.id, limit=limit, offset=offset
        )
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_STORE_UNAVAILABLE
        ) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.put("/read-all", response_model=NotificationMarkAllReadResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkAllReadResponse:
    """Marca como leídas todas las notificaciones pendientes del usuario."""

    try:
        count = mark_all_notifications_read(db, current_user.id)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_STORE_UNAVAILABLE
        ) from exc
    return NotificationMarkAllReadResponse(
        message=f"{count} notificaciones marcadas como leídas", count=count
    )


@router.put("/{notification_id}/read", response_model=NotificationMarkReadResponse)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationMarkReadResponse:
    """Marca una notificación propia como leída."""

    try:
        updated = mark_notification_read(db, notification_id, current_user.id)
    except StoreError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=_STORE_UNAVAILABLE
        ) from exc
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Notificación no encontrada o ya leída",
        )
    return NotificationMarkReadResponse(message="Notificación marcada como leída")


@router.post(
    "/send/user",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_user(
    body: SendToUserRequest,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a un usuario específico."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=SingleUserAudience(user_id=body.user_id),
        body=body,
        recipient_label="usuario(s)",
        empty_detail="Usuario no encontrado",
    )


@router.post(
    "/send/department",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_department(
    body: SendToDepartmentRequest,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a los miembros de un departamento, opcionalmente filtrados por rol."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=DepartmentAudience(department_id=body.department_id, role=body.role),
        body=body,
        recipient_label="usuarios",
        empty_detail="No se encontraron usuarios en este departamento",
    )


@router.post(
    "/send/department-teachers",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_department_teachers(
    body: SendToDepartmentTeachersRequest,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a los docentes de un departamento."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=DepartmentAudience(department_id=body.department_id, role=ROLE_TEACHER),
        body=body,
        recipient_label="docentes",
        empty_detail="No se encontraron docentes en este departamento",
    )


@router.post(
    "/send/course",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_course(
    body: SendToCourseRequest,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a los estudiantes inscritos en un curso."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=CourseRosterAudience(course_id=body.course_id),
        body=body,
        recipient_label="estudiantes",
        empty_detail="No se encontraron estudiantes en este curso",
    )


@router.post(
    "/send/class",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_class(
    body: SendToClassRequest,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a los estudiantes registrados en una clase."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=ClassRosterAudience(class_id=body.class_id),
        body=body,
        recipient_label="estudiantes",
        empty_detail="No se encontraron estudiantes en esta clase",
    )


@router.post(
    "/send/my-students",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_my_students(
    body: NotificationSendBase,
    teacher_id: int = Depends(get_current_teacher_id),
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a todos los estudiantes de los cursos del docente autenticado."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=TeacherRosterAudience(teacher_id=teacher_id),
        body=body,
        recipient_label="estudiantes",
        empty_detail="No se encontraron estudiantes en tus cursos",
    )


@router.post(
    "/send/all-users",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_all_users(
    body: NotificationSendBase,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a todos los usuarios activos excepto al remitente."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=AllUsersExceptAudience(excluded_user_id=current_user.id),
        body=body,
        recipient_label="usuarios",
        empty_detail="No se encontraron usuarios",
    )


@router.post(
    "/send/all-teachers",
    response_model=NotificationDispatchResponse,
    status_code=status.HTTP_201_CREATED,
)
async def send_to_all_teachers(
    body: NotificationSendBase,
    session_factory: Callable[[], Session] = Depends(get_session_factory),
    current_user: User = Depends(get_current_active_user),
) -> NotificationDispatchResponse:
    """Envía una notificación a todos los docentes activos."""

    return await _send(
        session_factory=session_factory,
        sender=current_user,
        audience=AllTeachersAudience(),
        body=body,
        recipient_label="docentes",
        empty_detail="No se encontraron docentes",
    )

"""HTTP API for creating, updating, deleting and previewing user accounts."""

from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional, Union

from fastapi import APIRouter, FastAPI, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware

from .config import ServiceConfig
from .database import Database, resolve_database_path
from .errors import ErrorPayload, register_exception_handlers
from .schemas import UserRequest, UserResponse
from .security import PasswordHasher
from .translator import UserTranslator
from .validation import validate_email_parameter, validate_user_request
from .workflow import UserWorkflow

logger = logging.getLogger("accounts.service")

_ERROR_RESPONSES: Dict[Union[int, str], Dict[str, object]] = {
    status.HTTP_400_BAD_REQUEST: {"model": ErrorPayload},
    status.HTTP_404_NOT_FOUND: {"model": ErrorPayload},
    status.HTTP_409_CONFLICT: {"model": ErrorPayload},
}


def build_user_router(workflow: UserWorkflow) -> APIRouter:
    """Expose the user endpoints backed by ``workflow``."""

    router = APIRouter(prefix="/users", tags=["users"], responses=_ERROR_RESPONSES)

    @router.post("/create", status_code=status.HTTP_201_CREATED)
    def create_user(request: UserRequest) -> Response:
        fields = validate_user_request(request.to_fields())
        workflow.create(fields)
        return Response(status_code=status.HTTP_201_CREATED)

    @router.put("/update")
    def update_user(
        request: UserRequest,
        email: Optional[str] = Query(default=None),
    ) -> Response:
        target = validate_email_parameter(email)
        fields = validate_user_request(request.to_fields(), partial=True)
        workflow.update(target, fields)
        return Response(status_code=status.HTTP_200_OK)

    @router.delete("/delete", status_code=status.HTTP_204_NO_CONTENT)
    def delete_user(email: Optional[str] = Query(default=None)) -> Response:
        workflow.delete(validate_email_parameter(email))
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.get("/preview", response_model=UserResponse)
    def preview_user(email: Optional[str] = Query(default=None)) -> UserResponse:
        return workflow.preview_one(validate_email_parameter(email))

    @router.get("/all", response_model=List[UserResponse])
    def preview_all_users() -> Union[List[UserResponse], Response]:
        users = workflow.preview_all()
        if not users:
            return Response(status_code=status.HTTP_204_NO_CONTENT)
        return users

    return router


def create_app(
    *,
    database: Database | None = None,
    config: ServiceConfig | None = None,
    hasher: PasswordHasher | None = None,
) -> FastAPI:
    """Instantiate the FastAPI application for the account service."""

    settings = config or ServiceConfig(
        database_path=resolve_database_path(os.getenv("ACCOUNTS_DB_PATH"))
    )
    db = database or Database(settings.database_path)
    db.initialize()

    workflow = UserWorkflow(db, UserTranslator(hasher or PasswordHasher()))

    app = FastAPI(
        title="User Accounts API",
        version="0.1.0",
        description="CRUD service for user accounts with validated input and hashed passwords.",
    )
    app.state.database = db
    app.state.workflow = workflow

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.cors_origins),
            allow_methods=["*"],
            allow_headers=["*"],
        )

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthcheck() -> Dict[str, str]:
        return {"status": "ok"}

    app.include_router(build_user_router(workflow))
    logger.debug("User routes registered against %s", db.path)

    return app


__all__ = ["build_user_router", "create_app"]

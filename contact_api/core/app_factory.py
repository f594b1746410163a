from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..application.security import PasswordHasher, TokenIssuer
from ..application.services.contact_service import ContactService
from ..application.services.user_service import UserService
from ..application.validation import ValidationService
from ..infrastructure.persistence.sqlite import SQLitePersistence
from ..presentation.api.errors import register_exception_handlers
from ..presentation.api.routers import contact_router, user_router
from .config import Settings
from .container import ApplicationContainer
from .logging import configure_logging

logger = logging.getLogger(__name__)


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings()

    app = FastAPI(title=settings.app_title, lifespan=_create_lifespan(settings))

    register_exception_handlers(app)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(user_router.router)
    app.include_router(contact_router.router)

    @app.get("/health")
    async def health() -> Dict[str, Any]:
        return {"ok": True}

    return app


def _create_lifespan(settings: Settings):
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        persistence = SQLitePersistence(settings.database_path)
        password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
        token_issuer = TokenIssuer()
        validation_service = ValidationService()

        container = ApplicationContainer(
            settings=settings,
            persistence=persistence,
            password_hasher=password_hasher,
            token_issuer=token_issuer,
            validation_service=validation_service,
            user_service=UserService(persistence, validation_service, password_hasher, token_issuer),
            contact_service=ContactService(persistence, validation_service),
        )

        app.state.container = container  # type: ignore[attr-defined]
        logger.info("Contact API started with database %s", settings.database_path)

        try:
            yield
        finally:
            persistence.close()

    return lifespan

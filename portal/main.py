from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from portal.auth.router import router as auth_router
from portal.backend.session import close_backend
from portal.core.config import settings
from portal.core.exceptions import AlreadyAuthenticated, LoginRequired
from portal.core.logging import configure_logging, logger
from portal.core.routing import DASHBOARD_PATH, LOGIN_PATH
from portal.pages.applications.router import router as register_router
from portal.pages.dashboard.router import router as dashboard_router
from portal.pages.documents.router import router as documents_router
from portal.pages.finances.router import router as finances_router
from portal.pages.navigation.router import router as navigation_router
from portal.pages.profile.router import router as profile_router
from portal.pages.services.router import router as services_router
from portal.pages.shell.router import router as shell_router
from portal.pages.support.router import router as support_router
from portal.pages.visa.router import router as visa_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    logger.info(
        "Student portal starting (env=%s, backend=%s)",
        settings.app_env,
        "supabase" if settings.backend_configured else "sample",
    )
    yield
    await close_backend()
    logger.info("Student portal stopped")


def create_app() -> FastAPI:
    app = FastAPI(title="Student Portal", lifespan=lifespan)

    # CORS: the portal front end calls these routes with the session cookie
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Session gate
    @app.exception_handler(LoginRequired)
    async def login_required_handler(request: Request, exc: LoginRequired) -> RedirectResponse:
        return RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)

    @app.exception_handler(AlreadyAuthenticated)
    async def already_authenticated_handler(request: Request, exc: AlreadyAuthenticated) -> RedirectResponse:
        return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)

    # Routers
    app.include_router(auth_router)
    app.include_router(register_router)
    app.include_router(dashboard_router)
    app.include_router(documents_router)
    app.include_router(finances_router)
    app.include_router(visa_router)
    app.include_router(support_router)
    app.include_router(profile_router)
    app.include_router(services_router)
    app.include_router(navigation_router)
    # catch-all, must stay last
    app.include_router(shell_router)

    return app


app = create_app()

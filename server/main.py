# server/main.py

import logging
from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from api import auth, posts
from config import Settings, load_settings
from core.auth import AuthGate
from core.errors import PortfolioError
from core.store import PostStore
from core.uploads import UPLOADS_URL_PREFIX


logger = logging.getLogger("portfolio")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    store = PostStore(settings.database_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings.upload_dir.mkdir(parents=True, exist_ok=True)
        store.init()
        if settings.admin_password:
            store.seed_admin_if_absent(settings.admin_password)
        else:
            logger.warning("ADMIN_PASSWORD is not set, skipping admin user seeding")
        logger.info("Database ready at %s", settings.database_path)
        yield
        store.dispose()

    app = FastAPI(title="Portfolio Blog API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store
    app.state.auth_gate = AuthGate(store, settings.jwt_secret, settings.jwt_expire_hours)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(PortfolioError)
    async def handle_portfolio_error(request: Request, exc: PortfolioError):
        if exc.status_code >= 500:
            logger.error("%s %s failed", request.method, request.url.path, exc_info=exc)
        else:
            logger.warning("%s %s -> %s %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        logger.warning("%s %s -> 400 %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"message": "Invalid request"})

    app.include_router(auth.router)
    app.include_router(posts.router)
    app.mount(UPLOADS_URL_PREFIX, StaticFiles(directory=settings.upload_dir, check_dir=False), name="uploads")

    @app.get("/")
    def read_root():
        return {
            "status": "ok",
            "message": "Portfolio blog backend is running",
            "api": "/api",
        }

    return app


settings = load_settings()
logging.basicConfig(level=settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host=settings.host, port=settings.port)

from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from app.connections import mongo_lifespan
from app.api.auth import router as auth_router
from app.api.user import router as user_router
from app.api.handlers import register_exception_handlers
from app.services.auth import AuthService, TokenService
from app.utils.config import Settings, settings
from app.utils.log import configure_logging


ROOT_DIR = Path(__file__).resolve().parent


def create_app(settings: Settings = settings) -> FastAPI:
    configure_logging(settings)

    app = FastAPI(title="Role Gate (Mongo)", version="0.1.0", lifespan=mongo_lifespan)

    public_dir = Path(settings.public_dir)
    if not public_dir.is_absolute():
        public_dir = ROOT_DIR / public_dir

    # Built once and shared by every request
    app.state.settings = settings
    app.state.public_dir = public_dir
    app.state.token_service = TokenService(settings)
    app.state.auth_service = AuthService(settings, tokens=app.state.token_service)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(auth_router, prefix="/api/auth")
    app.include_router(user_router, prefix="/api/users")

    @app.get("/health")
    def health() -> dict:
        """PUBLIC: Liveness check."""
        return {"ok": True}

    @app.get("/", include_in_schema=False)
    def index(request: Request) -> FileResponse:
        return FileResponse(request.app.state.public_dir / "index.html")

    app.mount("/", StaticFiles(directory=public_dir), name="public")
    return app


app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

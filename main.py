# main.py
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import JSONResponse, PlainTextResponse

from api import auth, chat, realtime
from config import Config
from models.schemas import HealthResponse
from services.broadcast_service import ConnectionRegistry
from services.store import ChatStore, build_store, connect_store
from services.token_service import TokenService

WELCOME_TEXT = "Chatbot backend is running"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Build the collaborators before serving anything. A missing signing secret
    or an unreachable database raises here, and uvicorn exits.
    """
    config: Config = app.state.config
    print("🚀 Starting chat backend...")

    if app.state.token_service is None:
        app.state.token_service = TokenService(config.JWT_SECRET)
    print("✅ Token service initialized")

    if app.state.store is None:
        store = build_store(config)
        app.state.store = await connect_store(store, config.DB_CONNECT_TIMEOUT)
    print("✅ Database connected")

    app.state.connections = ConnectionRegistry()
    print("🎉 Backend startup complete!")

    yield

    print("--- Shutting down ---")
    await app.state.connections.close_all()


def create_app(
    config: Optional[Config] = None,
    store: Optional[ChatStore] = None,
    token_service: Optional[TokenService] = None,
) -> FastAPI:
    config = config or Config()

    app = FastAPI(
        title="Chat Backend",
        description="Authenticated chat with canned replies and a WebSocket broadcast relay",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.token_service = token_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Error bodies are {"error": ...}
    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    app.include_router(auth.router, prefix="/api")
    app.include_router(chat.router, prefix="/api")
    app.include_router(realtime.router)

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return WELCOME_TEXT

    @app.get("/health", response_model=HealthResponse)
    async def health_check(request: Request):
        database_health = await request.app.state.store.health_check()
        return HealthResponse(
            status="OK",
            database="connected" if database_health.get("status") == "healthy" else "disconnected",
            environment=request.app.state.config.ENVIRONMENT,
        )

    return app


app = create_app()

if __name__ == "__main__":
    import uvicorn

    settings = app.state.config
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

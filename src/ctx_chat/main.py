"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ctx_chat.config import ChatConfig, load_config
from ctx_chat.context import ChatContext, create_context
from ctx_chat.routes.chat import router as chat_router


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler.

    Creates production context with real implementations on startup.
    """
    config = load_config()
    app.state.context = create_context(config)
    yield


def create_app(context: ChatContext | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        context: Optional ChatContext for testing or for a CLI-built context.
                 If None, uses lifespan to create production context.

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title="ctx chat",
        description="Chat front-end for the ctx persistent-context CLI",
        version="0.1.0",
        lifespan=None if context is not None else lifespan,
    )
    if context is not None:
        app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(chat_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    return app


def run(context: ChatContext | None = None, config: ChatConfig | None = None) -> None:
    """Run the server (entry point for `ctx-chat serve`)."""
    config = config or load_config()
    app = create_app(context)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    run()

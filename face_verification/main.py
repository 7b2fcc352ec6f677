"""FastAPI application and uvicorn entry point for the face verification service."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.routes import router
from .config import get_settings

def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="Face Verification Service")

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount routes
    app.include_router(router)
    return app

app = create_app()

def run():
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)

if __name__ == "__main__":
    run()

"""
Servidor FastAPI: endpoint de generación de señales + health check.
El controlador se inyecta al crear la app (sin instancias globales).
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from signal_bot import SERVICE_NAME, __version__
from signal_bot.api.routes import router


def create_app(signal_controller) -> FastAPI:
    app = FastAPI(title=SERVICE_NAME, version=__version__)
    app.state.signal_controller = signal_controller

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(router)
    return app

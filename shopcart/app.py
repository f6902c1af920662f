"""
shopcart - FastAPI application

Mounts the cart router under /api. Hosts wire authentication by overriding
``shopcart.routers.deps.get_current_user``.
"""
from fastapi import FastAPI

from shopcart import __version__
from shopcart.routers import cart_router


def create_app() -> FastAPI:
    app = FastAPI(title="shopcart", version=__version__)
    app.include_router(cart_router, prefix="/api")

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "version": __version__}

    return app


app = create_app()

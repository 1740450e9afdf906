# eshop/main.py
import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from eshop.api.errors import (
    http_error_handler,
    unhandled_error_handler,
    validation_error_handler,
)
from eshop.api.routers import carts, health, parts
from eshop.repos.cart_repo import CartRepo
from eshop.services.catalog_reader import CatalogReader, build_catalog_reader
from eshop.utils.logging import get_logger
from eshop.utils.settings import CORS_ORIGINS, HOST, PORT

logger = get_logger(__name__)


def create_app(
    catalog_reader: CatalogReader | None = None,
    cart_repo: CartRepo | None = None,
) -> FastAPI:
    app = FastAPI(
        title="EShop Cart API",
        version="1.0.0",
    )

    #carts live as long as this app instance
    app.state.catalog_reader = catalog_reader or build_catalog_reader()
    app.state.cart_repo = cart_repo or CartRepo()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Include routers
    app.include_router(health.router)
    app.include_router(parts.router)
    app.include_router(carts.router)

    @app.get("/")
    def root():
        return {
            "message": "Welcome to EShop Cart API",
            "endpoints": {
                "parts": "/api/parts",
                "cart": "/api/cart",
            },
        }

    logger.info(f"Catalog source: {type(app.state.catalog_reader).__name__}")
    return app


app = create_app()

if __name__ == "__main__":
    logger.info(f"Server is running on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)

# app/main.py
import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from .config import ServerSettings
from .database import PRODUCTS, get_product
from .models import Product

logger = logging.getLogger(__name__)


def create_app(settings: Optional[ServerSettings] = None) -> FastAPI:
    settings = settings or ServerSettings()
    app = FastAPI(title="product catalog (in-memory demo)")
    app.state.settings = settings

    app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    cache_control = f"public, max-age={settings.cache_max_age_seconds}"

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/api/products", response_model=List[Product])
    async def list_products(response: Response):
        response.headers["Cache-Control"] = cache_control
        logger.debug("Serving %d products", len(PRODUCTS))
        return PRODUCTS

    @app.get("/api/products/{product_id}", response_model=Product)
    async def read_product(product_id: int, response: Response):
        p = get_product(product_id)
        if p is None:
            raise HTTPException(status_code=404, detail="product not found")
        response.headers["Cache-Control"] = cache_control
        return p

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = app.state.settings
    uvicorn.run(app, host=settings.host, port=settings.port)

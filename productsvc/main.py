# productsvc/main.py
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from productsvc.core import ApiError, ProductRouter
from productsvc.database import ProductStore
from productsvc.utils.logging import get_logger
from productsvc.utils.settings import HOST, PORT

logger = get_logger(__name__)

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def create_app(store: Optional[ProductStore] = None) -> FastAPI:
    # docs/openapi routes off: every path goes through the product router
    app = FastAPI(
        title="Product Details Service",
        version="1.0.0",
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.store = store if store is not None else ProductStore()
    router = ProductRouter(app.state.store)
    app.state.router = router

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        return JSONResponse(status_code=exc.status_code, content=exc.body())

    # ---------------------------
    # Catch-all: product routing is done by ProductRouter's table
    # ---------------------------
    @app.api_route("/{full_path:path}", methods=ALL_METHODS, include_in_schema=False)
    async def handle(request: Request, full_path: str):
        body = await request.body()
        # store locks are thread locks, keep them off the event loop
        payload = await run_in_threadpool(router.dispatch, request.method, request.url.path, body)
        return JSONResponse(status_code=200, content=payload)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info("Listening on %s:%s", HOST, PORT)
    uvicorn.run(app, host=HOST, port=PORT)

# shopping_list/main.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shopping_list.api.router import router as shopping_list_router
from shopping_list.config import settings
from shopping_list.core.errors import InternalError, ShoppingListError
from shopping_list.db.migrations import run_migrations
from shopping_list.storage import build_store

log = logging.getLogger(__name__)

app = FastAPI(title="Shopping List API")
app.include_router(shopping_list_router)


@app.on_event("startup")
async def on_startup():
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    store = build_store(settings.STORE_BACKEND)
    if store.name == "sql" and settings.RUN_MIGRATIONS:
        await run_migrations()
    app.state.store = store
    log.info("Startup: store=%s", store.name)


@app.on_event("shutdown")
async def on_shutdown():
    store = getattr(app.state, "store", None)
    if store is not None:
        await store.close()
        app.state.store = None


# =========================================================
# Error mapping
# =========================================================
@app.exception_handler(ShoppingListError)
async def shopping_list_error_handler(request: Request, exc: ShoppingListError):
    if isinstance(exc, InternalError):
        log.error("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    else:
        log.warning("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # bad JSON / wrong types are client errors, same as any other bad input
    log.warning("%s %s -> 400: invalid request body", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal Server Error"},
    )


@app.get("/")
async def root():
    return {"ok": True, "service": "shopping_list"}


@app.get("/health")
async def health():
    return {"ok": True}


def run() -> None:
    import uvicorn

    uvicorn.run(
        "shopping_list.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()

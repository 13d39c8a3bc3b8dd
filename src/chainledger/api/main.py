import logging
import traceback
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from chainledger.api.convert import router as convert_router
from chainledger.api.fetch import router as fetch_router
from chainledger.api.imports import router as imports_router
from chainledger.api.symbols import router as symbols_router
from chainledger.container import Container
from chainledger.db.session import create_schema

logger = logging.getLogger("chainledger.api")


@asynccontextmanager
async def lifespan(app: FastAPI):
    container = Container()
    app.state.container = container
    Path(container.settings().data_dir).mkdir(parents=True, exist_ok=True)
    await create_schema(container.engine())
    yield
    engine = container.engine()
    await engine.dispose()


app = FastAPI(title="ChainLedger", version="0.1.0", lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
    logger.error("Unhandled error on %s %s:\n%s", request.method, request.url.path, "".join(tb))
    return JSONResponse(status_code=500, content={"detail": str(exc)})


app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(convert_router)
app.include_router(fetch_router)
app.include_router(imports_router)
app.include_router(symbols_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}

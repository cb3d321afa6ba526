import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from photoline.api.asset import router as asset_router
from photoline.api.server import router as server_router
from photoline.api.timeline import router as timeline_router
from photoline.config import AppSettings
from photoline.exceptions import PhotolineError
from photoline.metrics import setup_metrics

# Configure logging early: uvicorn imports this module when starting the app
from .logging_config import configure_logging

configure_logging(level=AppSettings().log_level)

logger = logging.getLogger(__name__)

app = FastAPI(title="Photoline", redoc_url=None, redirect_slashes=False)


@app.exception_handler(PhotolineError)
async def photoline_error_handler(request: Request, exc: PhotolineError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
    else:
        logger.info("%s %s rejected with %d: %s", request.method, request.url.path, exc.status_code, exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


app.include_router(timeline_router)
app.include_router(asset_router)
app.include_router(server_router)

setup_metrics(app)


@app.get("/")
def read_root():
    return {"message": "Hello from photoline!"}

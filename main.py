from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import time
import logging

import config
from routes import calculate, batch, transcripts, grading_scales, settings, history, export

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="GPA Converter API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    t0 = time.perf_counter()
    logger.info("REQUEST  %s %s", request.method, request.url.path)
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - t0) * 1000
    logger.info("RESPONSE %s %s - status: %d, time: %.1fms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response

app.include_router(calculate.router, prefix="/api")
app.include_router(batch.router, prefix="/api")
app.include_router(transcripts.router, prefix="/api")
app.include_router(grading_scales.router, prefix="/api")
app.include_router(settings.router, prefix="/api")
app.include_router(history.router, prefix="/api")
app.include_router(export.router, prefix="/api")


@app.get("/")
def root():
    return {"status": "ok", "message": "GPA Converter API"}

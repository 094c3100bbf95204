import logging

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import Counter, Histogram, generate_latest, CONTENT_TYPE_LATEST

from rewriter.config import get_settings
from rewriter.errors import RewriteError, ValidationError
from rewriter.schemas import ErrorResponse, RewriteRequest, RewriteResponse
from rewriter.service import RewriteService, rewrite_service

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

REWRITE_REQUESTS = Counter("rewrite_requests_total", "Rewrite requests by outcome", ["outcome"])
REWRITE_LATENCY = Histogram("rewrite_duration_seconds", "End-to-end rewrite latency", buckets=[0.5, 1, 2, 5, 10, 20, 30, 60])
REWRITE_WORDS = Histogram("rewrite_word_count", "Word count of rewritten text", buckets=[25, 50, 100, 250, 500, 1000, 2000])

app = FastAPI(title=settings.api_title, version=settings.api_version)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type"],
)


def get_rewrite_service() -> RewriteService:
    return rewrite_service


@app.exception_handler(RewriteError)
async def rewrite_error_handler(request: Request, exc: RewriteError):
    REWRITE_REQUESTS.labels(outcome=exc.kind).inc()
    if exc.status_code >= 500:
        logger.error("Rewrite failed (%s): %s %s", exc.kind, exc.message, exc.details or "")
    else:
        logger.info("Rewrite rejected (%s): %s", exc.kind, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    # Missing, non-object or undecodable bodies carry none of the required fields
    problems = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    )
    error = ValidationError("Text and two personal details are required", details=problems or None)
    return await rewrite_error_handler(request, error)


@app.post(
    "/rewrite",
    response_model=RewriteResponse,
    responses={
        400: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def rewrite(request: RewriteRequest, service: RewriteService = Depends(get_rewrite_service)):
    with REWRITE_LATENCY.time():
        result = await service.rewrite(request)

    REWRITE_REQUESTS.labels(outcome="success").inc()
    REWRITE_WORDS.observe(result.word_count)
    return result


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/metrics")
def get_metrics():
    # Read at call time so reload_settings() can toggle the endpoint
    if not get_settings().enable_metrics:
        return Response(status_code=404)
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("rewriter.main:app", host="0.0.0.0", port=8000, log_level=settings.log_level.lower())

"""Size Recommender Agent v1.0 - totals (over/under) pick from line and water movement"""

import json
import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import BackgroundTasks, Depends, FastAPI, Request, Response
from fastapi.responses import JSONResponse

from . import config
from .exceptions import InvalidRequestError
from .recorder import (
    RecommendationRecord,
    RecommendationRecorder,
    SqlRecorder,
    build_recorder,
    utc_now_iso,
)
from .rules import classify
from .validation import validate_payload

config.setup_logging()
logger = logging.getLogger("SizeRecommender")

ALL_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


@lru_cache(maxsize=1)
def get_recorder() -> RecommendationRecorder:
    recorder = build_recorder()
    logger.info(f"Recorder backend: {type(recorder).__name__}")
    return recorder


@asynccontextmanager
async def lifespan(app: FastAPI):
    # fail fast on a bad RECORDER_BACKEND
    get_recorder()
    yield
    recorder = get_recorder()
    if isinstance(recorder, SqlRecorder):
        recorder.dispose()


app = FastAPI(title="Size Recommender Agent", version=config.SERVICE_VERSION, lifespan=lifespan)


@app.middleware("http")
async def cors_headers(request: Request, call_next):
    response = await call_next(request)
    for name, value in config.CORS_HEADERS.items():
        response.headers[name] = value
    return response


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": error, **extra})


def record_safely(recorder: RecommendationRecorder, entry: RecommendationRecord):
    try:
        recorder.record(entry)
    except Exception as e:
        logger.warning(f"Failed to record recommendation for '{entry.match_name}': {e}")


@app.api_route("/api/recommend/size", methods=ALL_METHODS)
async def recommend_size(
    request: Request,
    background_tasks: BackgroundTasks,
    recorder: RecommendationRecorder = Depends(get_recorder),
):
    if request.method == "OPTIONS":
        return Response(status_code=200)
    if request.method != "POST":
        return error_response(405, "Only POST requests are supported")

    try:
        try:
            data = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise InvalidRequestError("Request body must be a JSON object")

        inputs = validate_payload(data)
        result = classify(inputs)

        match_name = str(data.get("matchName") or config.DEFAULT_MATCH_NAME)
        logger.info(f"{match_name}: {result.recommendation.value} ({result.details})")

        entry = RecommendationRecord(
            match_name=match_name,
            initial_handicap=inputs.initial_handicap,
            current_handicap=inputs.current_handicap,
            initial_water=inputs.initial_water,
            current_water=inputs.current_water,
            historical_record=inputs.historical_record.value,
            recommendation=result.recommendation.value,
            details=result.details,
            timestamp=str(data.get("timestamp") or utc_now_iso()),
            client_info=request.headers.get("user-agent") or config.DEFAULT_CLIENT_INFO,
        )
        background_tasks.add_task(record_safely, recorder, entry)

        return {
            "success": True,
            "recommendation": result.recommendation.value,
            "details": result.details,
            "analysis": result.analysis.model_dump(by_alias=True, mode="json"),
            "timestamp": utc_now_iso(),
        }
    except InvalidRequestError as e:
        logger.info(f"Rejected request: {e}")
        return error_response(400, str(e))
    except Exception as e:
        logger.exception("Recommendation failed")
        return error_response(500, "Internal server error", message=str(e))


@app.api_route("/api/test", methods=ALL_METHODS)
async def api_test(request: Request):
    if request.method == "OPTIONS":
        return Response(status_code=200)
    return {
        "success": True,
        "message": "Totals recommendation API is running",
        "timestamp": utc_now_iso(),
        "version": config.SERVICE_VERSION,
    }


@app.get("/health")
def health_check():
    return {"status": "ok", "service": config.SERVICE_NAME, "version": config.SERVICE_VERSION}


def run():
    import uvicorn
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()

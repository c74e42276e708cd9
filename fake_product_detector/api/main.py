import asyncio
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.responses import HTMLResponse, JSONResponse

from fake_product_detector.analysis.analyzer import analyze_product_image
from fake_product_detector.analysis.config import get_analysis_config
from fake_product_detector.analysis.errors import (
    AnalysisError,
    MissingImage,
    ProviderError,
    UnexpectedFailure,
    classify_failure,
)
from fake_product_detector.analysis.schemas import AnalysisResult, ErrorBody
from fake_product_detector.demo.generator import generate_demo_result
from fake_product_detector.ui.page import render_detector_page

logger = logging.getLogger(__name__)

app = FastAPI(title="Fake Product Detector API")

ANALYZE_PATH = "/api/analyze"
DEMO_ANALYZE_PATH = "/api/demo-analyze"

ERROR_RESPONSES = {
    400: {"model": ErrorBody, "description": "Missing or oversized image"},
    500: {"model": ErrorBody, "description": "Analysis failed"},
}
PROVIDER_ERROR_RESPONSES = {
    **ERROR_RESPONSES,
    401: {"model": ErrorBody, "description": "Provider credential rejected"},
    429: {"model": ErrorBody, "description": "Provider quota or rate limit"},
}


@app.exception_handler(AnalysisError)
async def analysis_error_handler(request: Request, exc: AnalysisError) -> JSONResponse:
    status_code, message = exc.status_code, exc.message
    if isinstance(exc, (ProviderError, UnexpectedFailure)):
        status_code, message = classify_failure(exc)
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    # A non-file "image" field counts as no image at all
    if any("image" in error.get("loc", ()) for error in errors):
        message = MissingImage().message
    else:
        message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning("Rejected request to %s: %s", request.url.path, message)
    return JSONResponse(status_code=400, content={"error": message})


@app.get("/", response_class=HTMLResponse)
def detector_page():
    html = render_detector_page(
        {"live": ANALYZE_PATH, "demo": DEMO_ANALYZE_PATH},
        get_analysis_config().max_image_bytes,
    )
    return HTMLResponse(content=html)


@app.get("/health")
def health():
    return {"status": "ok"}


@app.post(ANALYZE_PATH, response_model=AnalysisResult, responses=PROVIDER_ERROR_RESPONSES)
def analyze(image: Optional[UploadFile] = File(None)):
    config = get_analysis_config()
    if image is None:
        logger.error("No image provided in request")
        raise MissingImage()
    image_bytes = image.file.read()
    logger.info(
        "Processing image: %s Size: %s Type: %s",
        image.filename,
        len(image_bytes),
        image.content_type,
    )
    try:
        return analyze_product_image(image_bytes, image.content_type, config=config)
    except AnalysisError:
        raise
    except Exception as exc:
        logger.exception("Analysis error")
        raise UnexpectedFailure(str(exc)) from exc


@app.post(DEMO_ANALYZE_PATH, response_model=AnalysisResult, responses=ERROR_RESPONSES)
async def demo_analyze(image: Optional[UploadFile] = File(None)):
    if image is None:
        raise MissingImage()
    demo_config = get_analysis_config().demo
    try:
        await asyncio.sleep(demo_config.delay_ms / 1000)
        result = generate_demo_result(demo_config)
    except Exception as exc:
        logger.exception("Demo analysis error")
        raise AnalysisError("Demo analysis failed") from exc
    logger.info("Demo result: %s with %s%% confidence", result.prediction, result.confidence)
    return result


def run() -> None:
    config = get_analysis_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    if not config.provider_configured:
        logger.warning(
            "%s is not set; only demo analysis will succeed",
            config.provider.api_key_env,
        )
    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
    )


if __name__ == "__main__":
    run()

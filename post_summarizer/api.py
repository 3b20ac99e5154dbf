import logging
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .schemas import ErrorOut, SummaryOut, SummaryRequest
from .service import InvalidSummaryRequest, SummaryGenerationError, SummaryService

logging.basicConfig(level=config.LOG_LEVEL)
logger = logging.getLogger(__name__)


def create_app(service: Optional[SummaryService] = None) -> FastAPI:
    app = FastAPI(title="Post Summary Service")
    app.state.summaries = service or SummaryService()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.exception_handler(InvalidSummaryRequest)
    async def invalid_request(_request: Request, exc: InvalidSummaryRequest):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def malformed_body(_request: Request, _exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"error": "Description text is required."})

    @app.exception_handler(SummaryGenerationError)
    async def generation_failed(_request: Request, exc: SummaryGenerationError):
        logger.error("summary generation failed: %s", exc.details)
        return JSONResponse(status_code=500, content={"error": str(exc), "details": exc.details})

    @app.get("/health")
    def health():
        return {"status": "ok"}

    @app.post("/summaries", response_model=SummaryOut, response_model_exclude_none=True,
              responses={400: {"model": ErrorOut}, 500: {"model": ErrorOut}})
    def create_summary(payload: SummaryRequest, request: Request):
        result = request.app.state.summaries.summarize_description(payload.text, payload.options or {})
        return SummaryOut.from_result(result)

    return app


app = create_app()


def run():
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)


if __name__ == "__main__":
    run()

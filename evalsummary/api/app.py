"""HTTP API for summarizing course evaluation PDFs."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from fastapi import FastAPI, File, Form, Request, Response, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from evalsummary.api.errors import error_response, register_error_handlers
from evalsummary.api.schemas import ProcessTextRequest, TestKeyRequest
from evalsummary.config.settings import Settings
from evalsummary.credentials.validator import CredentialValidator
from evalsummary.logging.logger import Log
from evalsummary.processor.exceptions import InvalidUploadError, PayloadTooLargeError, ProcessorError
from evalsummary.processor.pipeline import PipelineContext
from evalsummary.processor.processor import (
    Processor,
    build_direct_processor,
    build_text_processor,
    build_upload_processor,
)
from evalsummary.processor.upload_staging import UploadStager
from evalsummary.summarization.base import BaseSummarizer
from evalsummary.summarization.factory import SummarizerFactory

HEALTH_MESSAGE = "Course Evaluation Summarizer API is running"


@dataclass
class ApiServices:
    validator: CredentialValidator
    stager: UploadStager
    text_processor: Processor
    upload_processor: Processor
    direct_processor: Processor


def build_services(settings: Settings, summarizer: BaseSummarizer | None = None) -> ApiServices:
    summarizer = summarizer or SummarizerFactory.create(settings)
    stager = UploadStager(settings.upload_dir)
    return ApiServices(
        validator=CredentialValidator.from_settings(settings, summarizer),
        stager=stager,
        text_processor=build_text_processor(settings, summarizer),
        upload_processor=build_upload_processor(settings, summarizer, stager=stager),
        direct_processor=build_direct_processor(settings, summarizer, stager=stager),
    )


def create_app(settings: Settings | None = None, services: ApiServices | None = None) -> FastAPI:
    settings = settings or Settings()
    services = services or build_services(settings)

    app = FastAPI(title="Course Evaluation Summarizer", version="1.0.0")

    async def limit_request_size(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        declared = request.headers.get("content-length", "")
        if declared.isdigit() and int(declared) > settings.max_upload_bytes:
            Log.warning(
                f"Rejected oversized request to {request.url.path}",
                content_length=int(declared),
            )
            too_large = PayloadTooLargeError.for_limit(settings.max_upload_bytes)
            return error_response(413, str(too_large))
        return await call_next(request)

    # Registered before CORS so rejections still carry CORS headers.
    app.middleware("http")(limit_request_size)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_error_handlers(app)

    def summary_payload(context: PipelineContext) -> dict[str, str]:
        if context.summary is None:
            raise ProcessorError("Processing finished without a summary")
        return {"result": context.summary.text}

    def run_upload(processor: Processor, file: UploadFile | None, api_key: str) -> dict[str, str]:
        if file is None:
            raise InvalidUploadError("No file uploaded")
        content = file.file.read()
        upload_name = file.filename or ""
        Log.info(f"Received upload '{upload_name}' ({len(content)} bytes)")
        with services.stager.stage(content, upload_name) as path:
            context = processor.process(
                PipelineContext(
                    credential=api_key,
                    upload_path=path,
                    upload_name=upload_name,
                    mime_type=file.content_type or "",
                )
            )
        return summary_payload(context)

    @app.post("/api/test-key", response_model=None)
    def test_key(payload: TestKeyRequest) -> dict[str, bool] | JSONResponse:
        if not payload.apiKey:
            return error_response(400, "API key is required", valid=False)
        if not services.validator.is_well_formed(payload.apiKey):
            return error_response(400, "Invalid API key format", valid=False)
        if not services.validator.is_live(payload.apiKey):
            return error_response(401, "Invalid API key", valid=False)
        return {"valid": True}

    @app.post("/api/process-text")
    def process_text(payload: ProcessTextRequest) -> dict[str, str]:
        Log.info(f"Processing text for '{payload.filename}' ({len(payload.text)} chars)")
        context = services.text_processor.process(
            PipelineContext(
                credential=payload.apiKey,
                text=payload.text,
                filename=payload.filename,
            )
        )
        return summary_payload(context)

    @app.post("/api/upload")
    def upload(
        file: UploadFile | None = File(None),
        apiKey: str = Form(""),
    ) -> dict[str, str]:
        return run_upload(services.upload_processor, file, apiKey)

    @app.post("/api/process-pdf-direct")
    def process_pdf_direct(
        file: UploadFile | None = File(None),
        apiKey: str = Form(""),
    ) -> dict[str, str]:
        return run_upload(services.direct_processor, file, apiKey)

    @app.get("/api/health")
    def health() -> dict[str, str]:
        return {"status": "OK", "message": HEALTH_MESSAGE}

    return app

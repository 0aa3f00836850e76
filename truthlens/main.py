# truthlens/main.py
from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, Body, FastAPI, File, Request, UploadFile
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, get_settings
from .errors import PayloadTooLargeError, ServiceError, ValidationError
from .learn import LEARN_CONTENT
from .log import get_logger, setup_logging
from .models import AnalysisReport, DeepfakeResult, Report, ReportAck, ReportIn, TextAnalysisIn
from .service import AnalysisService

logger = get_logger(__name__)

router = APIRouter()


def get_service(request: Request) -> AnalysisService:
    return request.app.state.service


def read_upload(upload: Optional[UploadFile], label: str, limit: int):
    """Read a multipart upload fully into memory, enforcing the size limit."""
    if upload is None or not upload.filename:
        raise ValidationError(f"{label} file is required")
    data = upload.file.read(limit + 1)
    if len(data) > limit:
        raise PayloadTooLargeError(f"{label} file exceeds the upload limit of {limit} bytes")
    return data, upload.filename


# --- Routes ---

@router.get("/health")
def health():
    return {"status": "OK", "message": "TruthLens API is running"}


@router.get("/scans", response_model=List[AnalysisReport], response_model_exclude_none=True)
def recent_scans(request: Request):
    return get_service(request).recent_scans()


@router.get("/scans/{scan_id}", response_model=AnalysisReport, response_model_exclude_none=True)
def get_scan(scan_id: str, request: Request):
    return get_service(request).get_scan(scan_id)


@router.post("/analyze/text", response_model=AnalysisReport, response_model_exclude_none=True)
def analyze_text(request: Request, payload: TextAnalysisIn = Body(...)):
    return get_service(request).analyze_text(payload.content, payload.url)


@router.post("/analyze/image", response_model=AnalysisReport, response_model_exclude_none=True)
def analyze_image(request: Request, image: Optional[UploadFile] = File(None)):
    service = get_service(request)
    data, filename = read_upload(image, "Image", service.settings.MAX_UPLOAD_BYTES)
    return service.analyze_image(data, filename)


@router.post("/analyze/video", response_model=AnalysisReport, response_model_exclude_none=True)
def analyze_video(request: Request, video: Optional[UploadFile] = File(None)):
    service = get_service(request)
    data, filename = read_upload(video, "Video", service.settings.MAX_UPLOAD_BYTES)
    return service.analyze_video(data, filename)


@router.post("/deepfake/detect", response_model=DeepfakeResult, response_model_exclude_none=True)
def detect_deepfake(request: Request, media: Optional[UploadFile] = File(None)):
    service = get_service(request)
    data, filename = read_upload(media, "Media", service.settings.MAX_UPLOAD_BYTES)
    return service.detect_deepfake(data, filename)


@router.post("/reports", response_model=ReportAck)
def submit_report(request: Request, payload: Optional[ReportIn] = Body(None)):
    # an empty body still files a report, all fields null
    return get_service(request).submit_report(payload or ReportIn())


@router.get("/reports", response_model=List[Report])
def list_reports(request: Request):
    return get_service(request).list_reports()


@router.get("/learn")
def learn():
    return LEARN_CONTENT


# --- Error handlers ---

async def service_error_handler(request: Request, exc: ServiceError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = [f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors()]
    return JSONResponse(status_code=400, content={"error": "Invalid request body", "details": details})


# --- App factory ---

def create_app(settings: Optional[Settings] = None, service: Optional[AnalysisService] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    app = FastAPI(title="TruthLens API")
    app.state.service = service or AnalysisService(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(router, prefix="/api")

    static_dir = Path(settings.STATIC_DIR)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")

    logger.info(f"USE_REAL_API: {settings.USE_REAL_API}")
    logger.info(f"API_KEY: {'Set' if settings.api_key_configured else 'Not Set'}")
    return app


app = create_app()


def run():
    import uvicorn

    settings = get_settings()
    logger.info(f"TruthLens API server running on port {settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

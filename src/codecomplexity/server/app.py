"""Starlette ASGI application exposing the analyzer over HTTP.

Routes:
    POST /api/v1/analyze   multipart field "file": a .zip archive or one source file
    GET  /api/v1/health    liveness probe
"""

from __future__ import annotations

import logging
from typing import Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile
from starlette.requests import Request
from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from ..analysis.engine import AnalysisEngine
from ..config import AnalysisConfig
from ..exceptions import AnalysisTimeoutError, ArchiveTooLargeError, CodeComplexityError
from ..models import AnalysisResult
from ..scanning.intake import sources_from_upload
from ..scanning.normalizer import TreeSitterNormalizer

logger = logging.getLogger(__name__)


def create_app(config: Optional[AnalysisConfig] = None) -> Starlette:
    """Build the Starlette application.

    Args:
        config: Analysis configuration shared by every request
    """
    config = config or AnalysisConfig()
    # One normalizer for the app; parsers are per thread inside it
    parser = TreeSitterNormalizer(config.language)

    def _run(filename: str, data: bytes) -> AnalysisResult:
        sources = sources_from_upload(filename, data, config)
        return AnalysisEngine.from_config(config, parser=parser).analyze(sources)

    async def analyze(request: Request) -> JSONResponse:
        form = await request.form(max_files=1)
        upload = form.get("file")
        if not isinstance(upload, UploadFile):
            return JSONResponse({"error": "multipart field 'file' is required"}, status_code=400)

        data = await upload.read(config.max_upload_bytes + 1)
        await upload.close()
        if len(data) > config.max_upload_bytes:
            return JSONResponse(
                {"error": f"upload exceeds {config.max_upload_mb} MB"}, status_code=413
            )

        filename = upload.filename or ""
        try:
            result = await run_in_threadpool(_run, filename, data)
        except AnalysisTimeoutError as e:
            logger.warning(f"Analysis of {filename} timed out: {e}")
            return JSONResponse(e.to_dict(), status_code=504)
        except ArchiveTooLargeError as e:
            logger.warning(f"Rejected upload {filename}: {e}")
            return JSONResponse(e.to_dict(), status_code=413)
        except CodeComplexityError as e:
            logger.warning(f"Rejected upload {filename}: {e}")
            return JSONResponse(e.to_dict(), status_code=400)

        logger.info(f"Analyzed upload {filename}: {result.total_files} files")
        return JSONResponse(result.to_dict())

    async def health(request: Request) -> PlainTextResponse:
        return PlainTextResponse("OK")

    routes = [
        Route("/api/v1/analyze", analyze, methods=["POST"]),
        Route("/api/v1/health", health, methods=["GET"]),
    ]
    return Starlette(routes=routes)

"""Reservation export routes - fetch reservation PDFs and return them as one ZIP."""

import asyncio
import json
import time

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from reszip.api.dependencies import get_archive_builder, get_batch_processor
from reszip.api.models import parse_create_zip_request
from reszip.core.archive import ArchiveBuilder, ArchiveEntry
from reszip.core.batch import BatchProcessor
from reszip.core.errors import ArchiveError, ValidationError
from reszip.core.logging import logger

router = APIRouter(tags=["Reservations"])

ARCHIVE_FILENAME = "reservations.zip"
SUCCESS_COUNT_HEADER = "X-PDF-Success-Count"
FAIL_COUNT_HEADER = "X-PDF-Fail-Count"


@router.post("/api/create-zip")
async def create_zip(
    request: Request,
    processor: BatchProcessor = Depends(get_batch_processor),
    archive_builder: ArchiveBuilder = Depends(get_archive_builder),
):
    """Fetch one PDF per reservation and return them zipped.

    - **reservationIds**: List of `{htl_code, res_id}` objects

    Responds with the archive when at least one PDF was retrieved. The
    `X-PDF-Success-Count` and `X-PDF-Fail-Count` headers report the split.
    """
    start_time = time.time()

    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        logger.warning("create_zip_invalid_json")
        return JSONResponse(
            status_code=400, content={"success": False, "error": "Request body must be valid JSON"}
        )

    try:
        payload = parse_create_zip_request(body)
    except ValidationError as e:
        logger.warning("create_zip_validation_failed", error=str(e))
        return JSONResponse(status_code=400, content={"success": False, "error": str(e)})

    refs = payload.to_refs()
    logger.info("create_zip_started", reservations=len(refs))

    result = await processor.run(refs)

    if result.successful == 0:
        logger.error("create_zip_no_pdfs", failed=result.failed, total=result.total)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "Failed to fetch any PDFs",
                "failed": result.failed,
            },
        )

    try:
        archive = await asyncio.to_thread(
            archive_builder.build, [ArchiveEntry.from_outcome(o) for o in result.successes]
        )
    except ArchiveError as e:
        return JSONResponse(status_code=500, content={"success": False, "error": str(e)})

    logger.info(
        "create_zip_completed",
        batch_id=result.batch_id,
        successful=result.successful,
        failed=result.failed,
        total=result.total,
        size_bytes=len(archive),
        processing_ms=int((time.time() - start_time) * 1000),
    )

    return Response(
        content=archive,
        media_type="application/zip",
        headers={
            "Content-Disposition": f"attachment; filename={ARCHIVE_FILENAME}",
            SUCCESS_COUNT_HEADER: str(result.successful),
            FAIL_COUNT_HEADER: str(result.failed),
        },
    )

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse

from app import config
from app.calculator import recompute_all
from app.drive import DriveUploader
from app.form_state import SignatureRequiredError, ensure_signed
from app.pdf_renderer import render_timesheet_pdf
from app.signature import ImageDecodeError
from app.timesheet_schema import (
    ALPHA_CODES,
    EMPLOYEE_TYPES,
    MONTH1_DAYS,
    MONTH2_DAYS,
    SCHOOLS,
    OptionsResponse,
    Submission,
    SubmitResult,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/timesheet", tags=["Timesheet"])


# ---------------- DEPENDENCIES ----------------
def get_uploader_factory() -> Callable[[], DriveUploader]:
    # Built lazily so missing Drive settings surface as a submit failure
    return DriveUploader.from_env


def get_logo_path() -> str:
    return config.LOGO_PATH


def upload_name(employee_name: str) -> str:
    today = datetime.now(timezone.utc).date().isoformat()
    return f"Timesheet_{employee_name}_{today}.pdf"


def result_response(status_code: int, result: SubmitResult) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(by_alias=True, exclude_none=True),
    )


# ---------------- FORM OPTIONS ----------------
@router.get("/options", response_model=OptionsResponse, response_model_by_alias=True)
def form_options():
    return OptionsResponse(
        schools=SCHOOLS,
        alpha_codes=ALPHA_CODES,
        employee_types=EMPLOYEE_TYPES,
        month1_days=MONTH1_DAYS,
        month2_days=MONTH2_DAYS,
    )


# ---------------- RECOMPUTE DERIVED FIELDS ----------------
@router.post("/recompute", response_model=Submission, response_model_by_alias=True)
def recompute_submission(
    payload: Submission,
    autoPopulate: Optional[bool] = Query(None),
):
    auto = config.AUTO_POPULATE_FIRST_ROW if autoPopulate is None else autoPopulate
    return recompute_all(payload, auto_populate=auto)


# ---------------- PREVIEW PDF (NO UPLOAD) ----------------
@router.post("/preview")
def preview_timesheet(payload: Submission, logo_path: str = Depends(get_logo_path)):
    try:
        pdf = render_timesheet_pdf(payload, logo_path=logo_path)
    except ImageDecodeError as e:
        return result_response(400, SubmitResult(success=False, error=str(e)))
    except Exception as e:
        logger.exception("Error rendering preview")
        return result_response(500, SubmitResult(success=False, error=str(e)))

    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{upload_name(payload.employee_name)}"'},
    )


# ---------------- SUBMIT TIMESHEET ----------------
@router.post("/submit")
def submit_timesheet(
    payload: Submission,
    uploader_factory: Callable[[], DriveUploader] = Depends(get_uploader_factory),
    logo_path: str = Depends(get_logo_path),
):
    try:
        # ---------- 1) Signature is mandatory ----------
        ensure_signed(payload)

        # ---------- 2) Render PDF ----------
        pdf = render_timesheet_pdf(payload, logo_path=logo_path)

        # ---------- 3) Upload to Drive ----------
        file_id = uploader_factory().upload(pdf, upload_name(payload.employee_name))

    except (SignatureRequiredError, ImageDecodeError) as e:
        logger.warning("Rejected timesheet for %s: %s", payload.employee_name, e)
        return result_response(400, SubmitResult(success=False, error=str(e)))
    except Exception as e:
        logger.exception("Error processing timesheet for %s", payload.employee_name)
        return result_response(500, SubmitResult(success=False, error=str(e)))

    return result_response(200, SubmitResult(success=True, file_id=file_id))

# app/client.py
import logging
from typing import Optional

import requests

from app.form_state import ensure_signed
from app.timesheet_schema import Submission

logger = logging.getLogger(__name__)

SUBMIT_PATH = "/api/timesheet/submit"


class SubmissionFailedError(Exception):
    """The server answered with success=false (or with something unreadable)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class TimesheetClient:
    """
    Sends a finished timesheet to the submit endpoint.

    One request per call and no automatic retries; the caller decides
    whether to resubmit after a failure.
    """

    def __init__(self, base_url: str, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()

    def submit(self, submission: Submission) -> str:
        # Unsigned forms never leave the client
        ensure_signed(submission)

        body = submission.model_dump(mode="json", by_alias=True)
        response = self.session.post(self.base_url + SUBMIT_PATH, json=body)

        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if response.ok and data.get("success"):
            logger.info("Timesheet submitted, file id %s", data.get("fileId"))
            return data.get("fileId")

        message = data.get("error") or f"Unknown error (HTTP {response.status_code})"
        raise SubmissionFailedError(f"Failed to submit: {message}", status_code=response.status_code)

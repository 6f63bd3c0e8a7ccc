"""
Pytest fixtures for the timesheet service tests.

Provides sample submissions, signature images and an API client whose
Drive uploader is replaced by an in-memory fake.
"""
import base64
import io

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from app.main import app
from app.timesheet import get_logo_path, get_uploader_factory
from app.timesheet_schema import AccountCodeRow, DayEntry, Shift, SignatureImage, Submission


def image_b64(fmt: str = "PNG", size=(120, 40)) -> str:
    img = Image.new("RGB", size, "white")
    for x in range(10, size[0] - 10):
        img.putpixel((x, size[1] // 2), (0, 0, 0))
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return base64.b64encode(buf.getvalue()).decode("ascii")


class FakeUploader:
    """Records uploads instead of talking to Drive."""

    def __init__(self, file_id="drive-file-123", error=None):
        self.file_id = file_id
        self.error = error
        self.uploads = []

    def upload(self, content: bytes, name: str) -> str:
        if self.error:
            raise self.error
        self.uploads.append((name, content))
        return self.file_id


@pytest.fixture
def png_signature():
    return SignatureImage(source="drawn", format="png", data="data:image/png;base64," + image_b64("PNG"))


@pytest.fixture
def jpeg_signature():
    return SignatureImage(source="uploaded", format="jpeg", data=image_b64("JPEG"))


@pytest.fixture
def submission(png_signature):
    return Submission(
        employee_name="Jane Doe",
        employee_id="E1001",
        fte="1.0",
        hours_per_week="40",
        position="Instructional Aide",
        school="JAMES LICK",
        email="jane.doe@example.org",
        employee_type="Certificated",
        month1="September",
        month2="October",
        year="2026",
        timesheet=(
            DayEntry(
                day=16,
                shifts=(
                    Shift(clock_in="08:00", clock_out="12:30", code="a", duration="4.50"),
                    Shift(clock_in="13:00", clock_out="16:00", duration="3.00"),
                ),
                daily_total="7.50",
            ),
            DayEntry(
                day=3,
                shifts=(Shift(clock_in="09:00", clock_out="11:00", duration="2.00"),),
                daily_total="2.00",
            ),
        ),
        account_codes=(
            AccountCodeRow(fund="01", location="410", hours="9.50", pay_rate="20", total_pay="190.00"),
        ),
        grand_total="190.00",
        alpha_l="Tutoring",
        signature=png_signature,
        date_employee="2026-10-15",
    )


@pytest.fixture
def fake_uploader():
    return FakeUploader()


@pytest.fixture
def client(fake_uploader, tmp_path):
    app.dependency_overrides[get_uploader_factory] = lambda: (lambda: fake_uploader)
    app.dependency_overrides[get_logo_path] = lambda: str(tmp_path / "missing-logo.png")
    yield TestClient(app)
    app.dependency_overrides.clear()

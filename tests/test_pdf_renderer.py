import logging

import pytest
from PIL import Image

from app.layout import DISCLAIMER
from app.pdf_renderer import LEFT, TOP, TimesheetPDF, render_timesheet_pdf
from app.signature import ImageDecodeError
from app.timesheet_schema import SignatureImage, Submission


class RecordingPDF(TimesheetPDF):
    """Keeps track of what was drawn and on which page."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.headers = []
        self.cells = []
        self.texts = []

    def draw_grid_header(self):
        self.headers.append((self.page_count, self.y))
        super().draw_grid_header()

    def cell(self, s, x, y, w, h, *args, **kwargs):
        self.cells.append((self.page_count, s, x))
        super().cell(s, x, y, w, h, *args, **kwargs)

    def text(self, s, x, y, *args, **kwargs):
        self.texts.append((self.page_count, s))
        super().text(s, x, y, *args, **kwargs)


def test_renders_pdf_bytes(submission):
    pdf = render_timesheet_pdf(submission)
    assert pdf.startswith(b"%PDF")
    assert pdf.rstrip().endswith(b"%%EOF")


def test_both_windows_spill_onto_a_second_page(submission):
    doc = TimesheetPDF(submission)
    doc.render()
    # 31 day rows do not fit on one A4 page
    assert doc.page_count >= 2


def test_grid_header_repeats_at_top_of_continuation_page(submission):
    doc = RecordingPDF(submission)
    doc.render()

    assert doc.headers[0][0] == 1
    assert (2, TOP) in doc.headers


def test_unfilled_days_render_as_blank_cells():
    doc = RecordingPDF(Submission(employee_name="Blank Days"))
    doc.render()

    values = [s for _, s, _ in doc.cells]
    start = values.index("17")
    assert doc.cells[start][2] == LEFT
    assert values[start + 1:start + 14] == [""] * 13
    assert not any("None" in s for _, s in doc.texts if s)


def test_disclaimer_is_on_the_last_page(submission):
    doc = RecordingPDF(submission)
    doc.render()

    opening = " ".join(DISCLAIMER.split()[:5])
    pages = [page for page, s in doc.texts if s and s.startswith(opening)]
    assert pages == [doc.page_count]


def test_unsigned_submission_still_renders_blank_line():
    pdf = render_timesheet_pdf(Submission(employee_name="No Sig"))
    assert pdf.startswith(b"%PDF")


def test_missing_logo_is_skipped(submission, tmp_path, caplog):
    with caplog.at_level(logging.WARNING, logger="app.pdf_renderer"):
        pdf = render_timesheet_pdf(submission, logo_path=str(tmp_path / "nope.png"))
    assert pdf.startswith(b"%PDF")
    assert "Logo not found" in caplog.text


def test_unreadable_logo_is_skipped(submission, tmp_path, caplog):
    bad = tmp_path / "logo.png"
    bad.write_bytes(b"definitely not a png")
    with caplog.at_level(logging.WARNING, logger="app.pdf_renderer"):
        pdf = render_timesheet_pdf(submission, logo_path=str(bad))
    assert pdf.startswith(b"%PDF")
    assert "Could not load logo" in caplog.text


def test_logo_is_embedded(submission, tmp_path):
    logo = tmp_path / "logo.png"
    Image.new("RGB", (200, 200), "navy").save(logo)
    with_logo = render_timesheet_pdf(submission, logo_path=str(logo))
    without_logo = render_timesheet_pdf(submission)
    assert len(with_logo) > len(without_logo)


def test_bad_signature_aborts_render(submission):
    bad = submission.model_copy(update={"signature": SignatureImage(format="png", data="bm90IGFuIGltYWdl")})
    with pytest.raises(ImageDecodeError):
        render_timesheet_pdf(bad)


def test_large_uploaded_signature_is_fitted(submission):
    import base64
    import io

    buf = io.BytesIO()
    Image.new("RGB", (3000, 1200), "white").save(buf, format="JPEG")
    sig = SignatureImage(source="uploaded", format="jpeg", data=base64.b64encode(buf.getvalue()).decode())
    pdf = render_timesheet_pdf(submission.model_copy(update={"signature": sig}))
    assert pdf.startswith(b"%PDF")


def test_day_row_values_are_verbatim(submission):
    doc = TimesheetPDF(submission)
    assert doc.day_row(16) == [
        "16",
        "08:00", "12:30", "4.50", "A",
        "13:00", "16:00", "3.00", "",
        "", "", "", "",
        "7.50",
    ]
    assert doc.day_row(17) == ["17"] + [""] * 13

# app/pdf_renderer.py
import io
import logging
import os
from typing import Callable, List, Optional

from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from app.calculator import recompute_grand_total
from app.layout import DISCLAIMER, DISTRICT_NAME, FORM_TITLE, LAYOUT
from app.signature import decode_signature
from app.timesheet_schema import MONTH1_DAYS, MONTH2_DAYS, Submission

logger = logging.getLogger(__name__)

PAGE_W = LAYOUT["page"]["width"]
PAGE_H = LAYOUT["page"]["height"]
LEFT = LAYOUT["margin"]["left"]
TOP = PAGE_H - LAYOUT["margin"]["top"]
BOTTOM = LAYOUT["margin"]["bottom"]
FONT = LAYOUT["font"]["regular"]
BOLD = LAYOUT["font"]["bold"]


class TimesheetPDF:
    """
    Draws one submission onto a fixed-layout replica of the paper timesheet.

    `render()` returns the PDF bytes. Any exception raised while drawing
    (including `ImageDecodeError` from the signature) propagates to the
    caller; only the decorative logo is allowed to be missing.
    """

    def __init__(self, submission: Submission, logo_path: Optional[str] = None):
        self.sub = submission
        self.logo_path = logo_path
        self.buf = io.BytesIO()
        self.c = canvas.Canvas(self.buf, pagesize=(PAGE_W, PAGE_H))
        self.y = TOP
        self.page_count = 1

    # ---------------- PRIMITIVES ----------------
    def text(self, s: str, x: float, y: float, size: float = 10, font: str = FONT):
        if not s:
            return
        self.c.setFont(font, size)
        self.c.drawString(x, y, s)

    def line(self, x1: float, y1: float, x2: float, y2: float):
        self.c.setLineWidth(1)
        self.c.line(x1, y1, x2, y2)

    def cell(self, s: str, x: float, y: float, w: float, h: float,
             size: float = 10, font: str = FONT, align: str = "left"):
        self.c.setLineWidth(1)
        self.c.rect(x, y, w, h, stroke=1, fill=0)
        if not s:
            return
        text_w = pdfmetrics.stringWidth(s, font, size)
        tx = x + (w - text_w) / 2 if align == "center" else x + 2
        ty = y + (h - size) / 2 + 2
        self.text(s, tx, ty, size, font)

    def new_page(self, redraw: Optional[Callable[[], None]] = None):
        self.c.showPage()
        self.page_count += 1
        self.y = TOP
        if redraw:
            redraw()

    # ---------------- SECTIONS ----------------
    def draw_header(self):
        hdr = LAYOUT["header"]
        self.draw_logo(hdr["logo_scale"])

        self.text(DISTRICT_NAME, hdr["text_x"], self.y - hdr["district"]["dy"], hdr["district"]["size"], BOLD)
        self.text(FORM_TITLE, hdr["text_x"], self.y - hdr["title"]["dy"], hdr["title"]["size"], BOLD)

        types = hdr["types"]
        for label, x in types["x"].items():
            mark = "X" if self.sub.employee_type == label else " "
            self.text(f"[{mark}] {label.upper()}", x, self.y - types["dy"], types["size"])

        self.y -= hdr["height"]

    def draw_logo(self, scale: float):
        if not self.logo_path:
            return
        if not os.path.isfile(self.logo_path):
            logger.warning("Logo not found at %s, rendering without it", self.logo_path)
            return
        try:
            logo = ImageReader(self.logo_path)
            iw, ih = logo.getSize()
        except Exception as e:
            logger.warning("Could not load logo %s: %s", self.logo_path, e)
            return
        w, h = iw * scale, ih * scale
        self.c.drawImage(logo, LEFT, self.y - h, width=w, height=h, mask="auto")

    def draw_fields(self):
        cfg = LAYOUT["fields"]
        for i, row in enumerate(cfg["rows"]):
            if i:
                self.y -= cfg["row_gap"]
            for label, attr, x, w in row:
                self.text(label, x, self.y + 10, cfg["label_size"], BOLD)
                self.line(x, self.y, x + w, self.y)
                self.text(getattr(self.sub, attr), x, self.y + 2, cfg["value_size"])
        self.y -= cfg["after"]

    def draw_grid_header(self):
        g = LAYOUT["grid"]
        x = LEFT
        for label, w in zip(g["headers"], g["widths"]):
            self.cell(label, x, self.y, w, g["row_height"], g["font_size"], BOLD, "center")
            x += w
        self.y -= g["row_height"]

    def day_row(self, day: int) -> List[str]:
        entry = self.sub.day_entry(day)
        values = [str(day)]
        for shift in entry.shifts:
            values += [shift.clock_in, shift.clock_out, shift.duration, shift.code]
        values.append(entry.daily_total)
        return values

    def draw_window(self, title: str, days: List[int]):
        g = LAYOUT["grid"]
        self.text(title, LEFT, self.y, g["title_size"], BOLD)
        self.y -= g["title_gap"]
        self.draw_grid_header()

        for day in days:
            if self.y < BOTTOM:
                self.new_page(self.draw_grid_header)
            x = LEFT
            for i, (val, w) in enumerate(zip(self.day_row(day), g["widths"])):
                self.cell(val, x, self.y, w, g["row_height"], g["font_size"], FONT,
                          "center" if i == 0 else "left")
                x += w
            self.y -= g["row_height"]

    def draw_timesheet(self):
        g = LAYOUT["grid"]
        self.draw_window("MONTH 1 (16-31)", MONTH1_DAYS)
        self.y -= g["window_gap"]
        if self.y < g["min_y_for_window"]:
            self.new_page()
        self.draw_window("MONTH 2 (1-15)", MONTH2_DAYS)

    def draw_account_codes(self):
        a = LAYOUT["account"]
        rh = LAYOUT["grid"]["row_height"]
        fs = LAYOUT["grid"]["font_size"]

        self.y -= a["gap_before"]
        if self.y < a["min_y"]:
            self.new_page()
        self.text(a["title"], LEFT, self.y, 10, BOLD)
        self.y -= 20

        x = LEFT
        for label, w in zip(a["headers"], a["widths"]):
            self.cell(label, x, self.y, w, rh, fs, BOLD, "center")
            x += w
        self.y -= rh

        for row in self.sub.account_codes:
            x = LEFT
            for field, w in zip(a["fields"], a["widths"]):
                self.cell(getattr(row, field), x, self.y, w, rh, fs, FONT, "center")
                x += w
            self.y -= rh

        # Grand total sits under the Total column
        total_w = a["widths"][-1]
        total_x = LEFT + sum(a["widths"][:-1])
        self.text(a["grand_total_label"], total_x - a["grand_total_label_width"] - 10, self.y + 5,
                  a["grand_total_size"], BOLD)
        grand_total = recompute_grand_total(self.sub.account_codes)
        self.cell(grand_total, total_x, self.y, total_w, rh, a["grand_total_size"], BOLD, "center")
        self.y -= rh

    def draw_legend(self):
        lg = LAYOUT["legend"]
        self.y -= lg["gap_before"]
        if self.y < lg["min_y"]:
            self.new_page()
        self.text(lg["title"], LEFT, self.y, 10, BOLD)
        self.y -= 15
        for letter, attr, x in lg["entries"]:
            self.text(f"{letter}: {getattr(self.sub, attr)}", x, self.y, lg["size"])

    def draw_signatures(self, signature_image):
        s = LAYOUT["signatures"]
        size = s["size"]

        self.y -= s["gap_before"]
        if self.y - s["approver_gap"] < BOTTOM:
            self.new_page()

        if signature_image is not None:
            iw, ih = signature_image.size
            w, h = iw * s["image_scale"], ih * s["image_scale"]
            max_w, max_h = s["image_max"]
            fit = min(1.0, max_w / w if w else 1.0, max_h / h if h else 1.0)
            w, h = w * fit, h * fit
            self.c.drawImage(ImageReader(signature_image), LEFT, self.y - h, width=w, height=h, mask="auto")
            label_y = self.y - h - s["label_dy"]
        else:
            line_y = self.y - s["blank_line_dy"]
            self.line(LEFT, line_y, LEFT + s["line_width"], line_y)
            label_y = line_y - s["label_dy"]

        self.text("Employee Signature", LEFT, label_y, size)
        if self.sub.date_employee:
            self.text(f"Date: {self.sub.date_employee}", s["date_x"], label_y, size)

        self.y -= s["approver_gap"]
        self.draw_approver("Principal / Supervisor", self.sub.date_principal)
        self.y -= s["manager_gap"]
        self.draw_approver("Program Manager", self.sub.date_manager)

    def draw_approver(self, title: str, date_value: str):
        s = LAYOUT["signatures"]
        size = s["size"]
        if self.y < BOTTOM:
            self.new_page()
        self.line(LEFT, self.y, LEFT + s["line_width"], self.y)
        self.text(title, LEFT, self.y - s["label_dy"], size)
        self.text("Date:", s["approver_date_label_x"], self.y, size)
        x1, x2 = s["approver_date_line"]
        self.line(x1, self.y, x2, self.y)
        self.text(date_value, x1 + 5, self.y + 2, size)

    def draw_disclaimer(self):
        d = LAYOUT["disclaimer"]
        if self.y < d["min_y"]:
            self.new_page()
        self.c.setFillColorRGB(*d["color"])
        y = d["y"]
        for ln in simpleSplit(DISCLAIMER, FONT, d["size"], PAGE_W - 2 * LEFT):
            self.text(ln, LEFT, y, d["size"])
            y -= d["leading"]
        self.c.setFillColorRGB(0, 0, 0)

    # ---------------- ENTRY POINT ----------------
    def render(self) -> bytes:
        # Decode first so a bad signature fails before any drawing happens
        signature_image = decode_signature(self.sub.signature) if self.sub.signature else None

        self.c.setTitle(f"Daily Timesheet - {self.sub.employee_name}")
        self.c.setAuthor(DISTRICT_NAME)

        self.draw_header()
        self.draw_fields()
        self.draw_timesheet()
        self.draw_account_codes()
        self.draw_legend()
        self.draw_signatures(signature_image)
        self.draw_disclaimer()

        self.c.save()
        return self.buf.getvalue()


def render_timesheet_pdf(submission: Submission, logo_path: Optional[str] = None) -> bytes:
    return TimesheetPDF(submission, logo_path=logo_path).render()

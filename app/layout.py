# app/layout.py
# Layout grid for the district's paper timesheet, in PDF points (origin bottom-left).
# These are tuned by eye against the paper form; they are data, not logic.
from reportlab.lib.pagesizes import A4

DISTRICT_NAME = "EAST SIDE UNION HIGH SCHOOL DISTRICT"
FORM_TITLE = "DAILY TIMESHEET"

DISCLAIMER = (
    "As per CA Labor Code Section 512, an employee with a work period of more than five hours "
    "per day must take a meal period of not less than 30 minutes; an employee with a work period "
    "of more than ten hours per day must take a second meal period of not less than 30 minutes."
)

LAYOUT = {
    "page": {"width": A4[0], "height": A4[1]},
    "margin": {"top": 50, "bottom": 50, "left": 50},
    "font": {"regular": "Helvetica", "bold": "Helvetica-Bold"},

    "header": {
        "logo_scale": 0.25,
        "text_x": 130,
        "district": {"dy": 15, "size": 14},
        "title": {"dy": 35, "size": 18},
        "types": {"dy": 15, "size": 9, "x": {"Classified": 430, "Certificated": 500}},
        "height": 80,
    },

    # (label, submission attribute, x, underline width) per row
    "fields": {
        "rows": [
            [
                ("EMPLOYEE (Legal Name Only)", "employee_name", 50, 250),
                ("EMPLOYEE ID", "employee_id", 310, 80),
                ("FTE", "fte", 400, 60),
                ("HOURS/WEEK", "hours_per_week", 470, 90),
            ],
            [
                ("MONTH 1", "month1", 50, 80),
                ("MONTH 2", "month2", 140, 80),
                ("YEAR", "year", 230, 60),
                ("POSITION", "position", 300, 150),
                ("SCHOOL SITE / LOCATION", "school", 460, 100),
            ],
            [
                ("EMAIL", "email", 50, 510),
            ],
        ],
        "row_gap": 35,
        "label_size": 8,
        "value_size": 10,
        "after": 40,
    },

    "grid": {
        "headers": ["Day", "In", "Out", "Tot", "Cd", "In", "Out", "Tot", "Cd", "In", "Out", "Tot", "Cd", "Total"],
        "widths": [30, 38, 38, 38, 28, 38, 38, 38, 28, 38, 38, 38, 28, 50],
        "row_height": 20,
        "font_size": 8,
        "title_size": 10,
        "title_gap": 20,
        "window_gap": 20,
        "min_y_for_window": 100,
    },

    "account": {
        "title": "ACCOUNT CODES:",
        "headers": ["Fund", "Loc", "Prog", "Goal", "Func", "Obj", "Res", "Yr", "Mgr", "Alpha", "Hrs", "Rate", "Total"],
        "fields": ["fund", "location", "program", "goal", "function", "object", "resource",
                   "year", "manager", "alpha", "hours", "pay_rate", "total_pay"],
        "widths": [35, 35, 35, 35, 35, 35, 35, 35, 50, 35, 35, 50, 62],
        "gap_before": 30,
        "min_y": 150,
        "grand_total_label": "Grand Total Pay:",
        "grand_total_label_width": 100,
        "grand_total_size": 10,
    },

    "legend": {
        "title": "Alpha Codes:",
        "gap_before": 30,
        "min_y": 100,
        "size": 9,
        "entries": [("L", "alpha_l", 50), ("M", "alpha_m", 200), ("N", "alpha_n", 350)],
    },

    "signatures": {
        "gap_before": 50,
        "image_scale": 0.5,
        "image_max": (250, 80),
        "line_width": 200,
        "blank_line_dy": 40,
        "label_dy": 15,
        "date_x": 300,
        "approver_gap": 120,
        "manager_gap": 100,
        "approver_date_label_x": 270,
        "approver_date_line": (300, 400),
        "size": 10,
    },

    "disclaimer": {
        "y": 30,
        "size": 8,
        "leading": 10,
        "min_y": 100,
        "color": (1, 0, 0),
    },
}

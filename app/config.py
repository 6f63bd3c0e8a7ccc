# app/config.py
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name, "")
    if not raw:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


# ----------------------------------------
# 🟢 GOOGLE DRIVE CONFIG
# ----------------------------------------
GOOGLE_CLIENT_EMAIL = os.getenv("GOOGLE_CLIENT_EMAIL")
GOOGLE_PRIVATE_KEY = os.getenv("GOOGLE_PRIVATE_KEY")
GOOGLE_DRIVE_FOLDER_ID = os.getenv("GOOGLE_DRIVE_FOLDER_ID")
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"
DRIVE_SCOPES = ["https://www.googleapis.com/auth/drive.file"]

# ----------------------------------------
# 🔵 PDF / FORM CONFIG
# ----------------------------------------
LOGO_PATH = os.getenv(
    "TIMESHEET_LOGO_PATH",
    os.path.join(os.getcwd(), "public", "logo.png"),
)
AUTO_POPULATE_FIRST_ROW = _env_bool("AUTO_POPULATE_FIRST_ROW", True)

# ----------------------------------------
# 🟣 SERVER CONFIG
# ----------------------------------------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

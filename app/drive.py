# app/drive.py
import io
import logging
from typing import Optional

from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.http import MediaIoBaseUpload

from app.config import (
    DRIVE_SCOPES,
    GOOGLE_CLIENT_EMAIL,
    GOOGLE_DRIVE_FOLDER_ID,
    GOOGLE_PRIVATE_KEY,
    GOOGLE_TOKEN_URI,
)

logger = logging.getLogger(__name__)

PDF_MIMETYPE = "application/pdf"


class DriveConfigError(Exception):
    """Raised when the service-account settings are incomplete."""
    pass


def load_credentials(client_email: Optional[str], private_key: Optional[str]):
    if not client_email or not private_key:
        raise DriveConfigError("GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY must be set")

    info = {
        "type": "service_account",
        "client_email": client_email,
        # .env files carry the key on one line with literal "\n"
        "private_key": private_key.replace("\\n", "\n"),
        "token_uri": GOOGLE_TOKEN_URI,
    }
    return service_account.Credentials.from_service_account_info(info, scopes=DRIVE_SCOPES)


class DriveUploader:
    """Create-only access to one Drive folder."""

    def __init__(self, folder_id: Optional[str], service=None):
        if not folder_id:
            raise DriveConfigError("GOOGLE_DRIVE_FOLDER_ID must be set")
        self.folder_id = folder_id
        self._service = service

    @classmethod
    def from_env(cls) -> "DriveUploader":
        creds = load_credentials(GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY)
        service = build("drive", "v3", credentials=creds, cache_discovery=False)
        return cls(GOOGLE_DRIVE_FOLDER_ID, service=service)

    def upload(self, content: bytes, name: str, mimetype: str = PDF_MIMETYPE) -> str:
        media = MediaIoBaseUpload(io.BytesIO(content), mimetype=mimetype, resumable=False)
        metadata = {"name": name, "parents": [self.folder_id]}

        created = self._service.files().create(
            body=metadata,
            media_body=media,
            fields="id",
            supportsAllDrives=True,
        ).execute()

        file_id = created["id"]
        logger.info("Uploaded %s to Drive folder %s as %s", name, self.folder_id, file_id)
        return file_id

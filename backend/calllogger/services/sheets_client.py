import logging
import re
import time
from typing import Any, Dict, List, Optional

import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from calllogger.core.config import Settings
from calllogger.core.errors import ConfigurationMissing, UpstreamFailure
from calllogger.services.codec import HEADER, Row

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]
TOKEN_URI = "https://oauth2.googleapis.com/token"
LAST_COLUMN = chr(ord("A") + len(HEADER) - 1)
PLAIN_SHEET_NAME = re.compile(r"^[A-Za-z0-9_]+$")


def load_credentials(settings: Settings) -> service_account.Credentials:
    try:
        if settings.google_credentials_file:
            return service_account.Credentials.from_service_account_file(
                settings.google_credentials_file, scopes=SCOPES
            )
        if settings.google_client_email and settings.google_private_key:
            info = {
                "type": "service_account",
                "client_email": settings.google_client_email,
                "private_key": settings.google_private_key,
                "token_uri": TOKEN_URI,
            }
            return service_account.Credentials.from_service_account_info(info, scopes=SCOPES)
    except (OSError, ValueError) as exc:
        raise ConfigurationMissing(f"Invalid Google service account credentials: {exc}") from exc
    raise ConfigurationMissing(
        "Google service account credentials are not set "
        "(GOOGLE_CLIENT_EMAIL and GOOGLE_PRIVATE_KEY, or GOOGLE_CREDENTIALS_FILE)"
    )


class GoogleSheetsStore:
    """Row store backed by one tab of a Google spreadsheet."""

    def __init__(
        self,
        spreadsheet_id: str,
        sheet_name: str = "CallLog",
        credentials: Optional[service_account.Credentials] = None,
        service: Any = None,
    ) -> None:
        self.spreadsheet_id = spreadsheet_id
        self.sheet_name = sheet_name
        self._service = service or build(
            "sheets", "v4", credentials=credentials, cache_discovery=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "GoogleSheetsStore":
        if not settings.google_sheet_id:
            raise ConfigurationMissing("GOOGLE_SHEET_ID is not set")
        return cls(
            settings.google_sheet_id,
            settings.sheet_name,
            credentials=load_credentials(settings),
        )

    def fetch_all_rows(self) -> List[Row]:
        # Unformatted values keep numeric ids independent of the sheet's number format.
        request = self._values().get(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(),
            valueRenderOption="UNFORMATTED_VALUE",
        )
        result = self._execute("fetch", request)
        return result.get("values", [])

    def append_row(self, row: Row) -> None:
        request = self._values().append(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(),
            valueInputOption="RAW",
            insertDataOption="INSERT_ROWS",
            body={"values": [row]},
        )
        self._execute("append", request)

    def replace_row(self, position: int, row: Row) -> None:
        request = self._values().update(
            spreadsheetId=self.spreadsheet_id,
            range=self._range(position),
            valueInputOption="RAW",
            body={"values": [row]},
        )
        self._execute("replace", request)

    def _values(self) -> Any:
        return self._service.spreadsheets().values()

    def _range(self, position: Optional[int] = None) -> str:
        sheet = self.sheet_name
        if not PLAIN_SHEET_NAME.match(sheet):
            sheet = "'" + sheet.replace("'", "''") + "'"
        if position is None:
            return f"{sheet}!A:{LAST_COLUMN}"
        return f"{sheet}!A{position}:{LAST_COLUMN}{position}"

    def _execute(self, action: str, request: Any) -> Dict[str, Any]:
        started = time.monotonic()
        try:
            result = request.execute()
        except HttpError as exc:
            raise UpstreamFailure(str(exc)) from exc
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as exc:
            raise UpstreamFailure(f"Google Sheets {action} failed: {exc}") from exc
        logger.debug(
            "Sheets %s on %s took %.2fs",
            action,
            self.spreadsheet_id,
            time.monotonic() - started,
        )
        return result or {}

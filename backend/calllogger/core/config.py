import json
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Call Logger"
    environment: str = "development"
    storage_backend: str = "sheets"
    google_sheet_id: Optional[str] = None
    google_client_email: Optional[str] = None
    google_private_key: Optional[str] = None
    google_credentials_file: Optional[str] = None
    sheet_name: str = "CallLog"
    api_token: Optional[str] = None
    cors_origins: List[str] = ["*"]
    default_page_size: int = 20
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        enable_decoding=False,
    )

    @field_validator("cors_origins", mode="before")
    def parse_cors_origins(cls, value: object) -> List[str]:
        if value is None:
            return []
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            cleaned = value.strip()
            if cleaned == "":
                return []
            if cleaned.startswith("["):
                return json.loads(cleaned)
            return [item.strip() for item in cleaned.split(",") if item.strip()]
        return [str(value)]

    @field_validator("google_private_key", mode="before")
    def parse_private_key(cls, value: object) -> Optional[str]:
        # Hosting dashboards store the PEM on one line with literal "\n".
        if isinstance(value, str):
            return value.replace("\\n", "\n")
        return value

    @field_validator("storage_backend", mode="before")
    def parse_storage_backend(cls, value: object) -> str:
        return str(value or "sheets").strip().lower()


settings = Settings()

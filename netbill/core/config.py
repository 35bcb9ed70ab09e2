from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    PROJECT_NAME: str = "NetBill"
    API_V1_STR: str = "/api"
    LOG_LEVEL: str = "INFO"

    # Storage backend: "google" or "memory"
    SHEETS_BACKEND: str = "google"

    # Service account + target spreadsheet
    GOOGLE_SERVICE_ACCOUNT_EMAIL: str = ""
    GOOGLE_PRIVATE_KEY: str = ""
    GOOGLE_SHEETS_SPREADSHEET_ID: str = ""

    # Write header rows into empty sheets on startup
    SHEETS_BOOTSTRAP_HEADERS: bool = False

    # Day of month used as due date for generated bills
    BILL_DUE_DAY: int = 10

    model_config = SettingsConfigDict(case_sensitive=True, env_file=".env", extra="ignore")

settings = Settings()

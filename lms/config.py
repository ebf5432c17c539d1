import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class Settings:
    # Uygulama Ayarları
    app_name: str = os.getenv("LMS_APP_NAME", "Library Management System")
    app_version: str = os.getenv("LMS_APP_VERSION", "1.0.0")
    log_level: str = os.getenv("LMS_LOG_LEVEL", "WARNING").upper()

    # Ödünç Politikası
    loan_period_days: int = int(os.getenv("LMS_LOAN_PERIOD_DAYS", "14"))

    # Sunum Ayarları
    currency_symbol: str = os.getenv("LMS_CURRENCY_SYMBOL", "$")
    date_format: str = os.getenv("LMS_DATE_FORMAT", "%d/%m/%Y")

    # Özellik Bayrakları
    seed_sample_data: bool = _env_flag("LMS_SEED_SAMPLE_DATA", "True")


settings = Settings()

# src/staffing_adherence/utils/config.py
"""
Environment-driven settings for the adherence engine.

Values come from the process environment, optionally seeded from a .env
file at the project root.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env from project root
BASE_DIR = Path(__file__).resolve().parents[3]
load_dotenv(BASE_DIR / ".env")


class Config:
    DB_DRIVER = os.getenv("DB_DRIVER", "{ODBC Driver 17 for SQL Server}")
    DB_SERVER = os.getenv("DB_SERVER", "localhost").strip()
    DB_DATABASE = os.getenv("DB_DATABASE", "Staffing")
    DB_TRUSTED_CONNECTION = os.getenv("DB_TRUSTED_CONNECTION", "yes")
    DB_UID = os.getenv("DB_UID", "").strip()
    DB_PWD = os.getenv("DB_PWD", "")

    # Region used when the caller does not name one
    DEFAULT_REGION = os.getenv("DEFAULT_REGION", "EMEA").strip() or "EMEA"

    # Parallel month-wide reads
    FETCH_WORKERS = int(os.getenv("FETCH_WORKERS", "6"))

    EXPORT_DIR = Path(os.getenv("EXPORT_DIR", "exports"))

    @property
    def ODBC_CONNECTION_STRING(self) -> str:
        parts = [
            f"DRIVER={self.DB_DRIVER}",
            f"SERVER={self.DB_SERVER}",
            f"DATABASE={self.DB_DATABASE}",
        ]
        if self.DB_UID:
            parts.append(f"UID={self.DB_UID}")
            parts.append(f"PWD={self.DB_PWD}")
        else:
            parts.append(f"Trusted_Connection={self.DB_TRUSTED_CONNECTION}")
        return ";".join(parts) + ";"

    def __repr__(self):
        return f"<Config server={self.DB_SERVER} db={self.DB_DATABASE} region={self.DEFAULT_REGION}>"


# Singleton
config = Config()

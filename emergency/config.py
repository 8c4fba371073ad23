from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    report_id_start: int = 1000
    sql_echo: bool = False
    log_level: str = "INFO"
    seed_demo: bool = False
    professionals_csv: str | None = None
    departments_csv: str | None = None


def get_settings() -> Settings:
    """Legge la configurazione dall'ambiente (ed eventuale file .env)."""
    return Settings(
        report_id_start=int(os.getenv("EMERGENCY_REPORT_ID_START", "1000")),
        sql_echo=_flag("EMERGENCY_SQL_ECHO"),
        log_level=os.getenv("EMERGENCY_LOG_LEVEL", "INFO").upper(),
        seed_demo=_flag("EMERGENCY_SEED_DEMO"),
        professionals_csv=os.getenv("EMERGENCY_PROFESSIONALS_CSV") or None,
        departments_csv=os.getenv("EMERGENCY_DEPARTMENTS_CSV") or None,
    )

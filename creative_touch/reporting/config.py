# creative_touch/reporting/config.py
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from dotenv import load_dotenv

load_dotenv()

# —— Rutas ——
DATA_DIR: Final[Path] = Path(os.getenv("CREATIVE_TOUCH_DATA_DIR", "data"))

# —— Localización ——
DEFAULT_LOCALE: Final[str] = os.getenv("REPORTING_LOCALE", "ar-SA")
DEFAULT_CURRENCY: Final[str] = os.getenv("REPORTING_CURRENCY", "SAR")
DEFAULT_CURRENCY_SYMBOL: Final[str] = os.getenv("REPORTING_CURRENCY_SYMBOL", "ر.س")

# —— Top-K ——
TOP_K_MIN:     Final[int] = int(os.getenv("REPORTING_TOP_K_MIN", "1"))
TOP_K_MAX:     Final[int] = int(os.getenv("REPORTING_TOP_K_MAX", "100"))

# —— Actividad reciente ——
ACTIVITY_LOOKBACK_HOURS: Final[int] = int(os.getenv("REPORTING_ACTIVITY_LOOKBACK_HOURS", "24"))
ACTIVITY_LIMIT:          Final[int] = int(os.getenv("REPORTING_ACTIVITY_LIMIT", "8"))


@dataclass(frozen=True)
class AppConfig:
    """Snapshot inmutable de configuración consumida por el servicio."""
    data_dir: Path = DATA_DIR
    locale: str = DEFAULT_LOCALE
    currency: str = DEFAULT_CURRENCY
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
    top_k_min: int = TOP_K_MIN
    top_k_max: int = TOP_K_MAX
    activity_lookback_hours: int = ACTIVITY_LOOKBACK_HOURS
    activity_limit: int = ACTIVITY_LIMIT

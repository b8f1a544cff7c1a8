# creative_touch/reporting/windows.py
from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import Optional, Tuple

from .dto import TimeWindowSpec

WEEK_DAYS = 7

DateBounds = Tuple[date, date]


def resolve_window(spec: TimeWindowSpec, today: Optional[date] = None) -> DateBounds:
    """Traduce la ventana a límites de calendario inclusivos [start, end].

    `today` es el día calendario local del llamador (por defecto date.today()),
    nunca un día UTC fijo.
      - today  -> [hoy, hoy]
      - week   -> últimos 7 días calendario, hoy incluido
      - month  -> mes calendario en curso completo
      - year   -> año calendario en curso completo
      - custom -> [start, end] tal cual
    """
    ref = today or date.today()
    if spec.kind == "today":
        return ref, ref
    if spec.kind == "week":
        return ref - timedelta(days=WEEK_DAYS - 1), ref
    if spec.kind == "month":
        last_day = calendar.monthrange(ref.year, ref.month)[1]
        return ref.replace(day=1), ref.replace(day=last_day)
    if spec.kind == "year":
        return date(ref.year, 1, 1), date(ref.year, 12, 31)
    # custom: el modelo ya garantiza start <= end
    return spec.start, spec.end  # type: ignore[return-value]

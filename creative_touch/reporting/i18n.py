# creative_touch/reporting/i18n.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional


@dataclass(frozen=True)
class LocaleConfig:
    """Configuración mínima de formato.
    No usamos Babel para evitar dependencia; ajusta aquí símbolos y separadores.
    """
    locale: str = "ar-SA"
    currency: str = "SAR"
    currency_symbol: str = "ر.س"
    symbol_after: bool = True  # "150.00 ر.س", como en la UI
    decimal_sep: str = "."
    thousand_sep: str = ","


DEFAULT_LOCALE = LocaleConfig()


def format_currency(value: Optional[float], cfg: LocaleConfig = DEFAULT_LOCALE, ndigits: int = 2) -> str:
    """Formatea un float como moneda. Si value es None, devuelve '-'.
    Negativos conservan el signo (saldo a favor del local)."""
    if value is None:
        return "-"
    q = round(float(value), ndigits)
    # "{:,.2f}" usa separador US, lo sustituimos por el deseado si difiere.
    s = f"{q:,.{ndigits}f}"
    if cfg.thousand_sep != "," or cfg.decimal_sep != ".":
        s = s.replace(",", "X").replace(".", cfg.decimal_sep).replace("X", cfg.thousand_sep)
    return f"{s} {cfg.currency_symbol}" if cfg.symbol_after else f"{cfg.currency_symbol}{s}"


def add_formatted_fields(
    row: Mapping[str, object],
    currency_fields: Iterable[str],
    cfg: LocaleConfig = DEFAULT_LOCALE,
    suffix: str = "_fmt",
) -> Dict[str, object]:
    """Devuelve un nuevo dict con campos formateados añadidos para UI.
    Ej.: 'total_revenue' -> 'total_revenue_fmt'
    """
    out: Dict[str, object] = dict(row)
    for c in currency_fields:
        v = row.get(c)
        num = v if isinstance(v, (int, float)) and not isinstance(v, bool) else None
        out[f"{c}{suffix}"] = format_currency(num, cfg=cfg)
    return out

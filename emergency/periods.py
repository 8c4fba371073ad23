"""
Periodi di servizio nel formato "yyyy-MM-dd to yyyy-MM-dd".

Il confronto è volutamente lessicografico sulle stringhe: funziona solo se
tutte le date usano lo stesso formato ISO.
"""
from __future__ import annotations

SEPARATOR = " to "


def split_period(period: str) -> tuple[str, str]:
    """Ritorna (inizio, fine). Una data singola vale come periodo puntuale."""
    if SEPARATOR not in period:
        return period, period
    start, end = period.split(SEPARATOR, 1)
    return start, end


def period_contains(available: str, desired: str) -> bool:
    """True se `desired` cade interamente dentro `available` (estremi inclusi)."""
    start, end = split_period(available)
    desired_start, desired_end = split_period(desired)
    return desired_start >= start and desired_end <= end

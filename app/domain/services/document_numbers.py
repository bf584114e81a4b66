# app/domain/services/document_numbers.py
"""Default invoice / quotation numbers: ``<PREFIX>-<YYYYMM>-<n>``."""

from __future__ import annotations

import random
from datetime import date


def generate_document_number(
    prefix: str = "INV",
    today: date | None = None,
    rng: random.Random | None = None,
) -> str:
    """Suggest a number such as ``INV-202501-17``.

    The suffix is random in 1..1000; uniqueness is the caller's concern
    (the number stays editable on the form).
    """
    today = today or date.today()
    rng = rng or random.Random()
    return f"{prefix}-{today.year}{today.month:02d}-{rng.randint(1, 1000)}"

"""Type aliases used across ShiftPay."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
LocationId = str
ReportId = str
PosterDate = str  # YYYYMMDD

"""
Extraction result model.

Tagged success/failure value returned across the orchestrator boundary.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Any, List

from .identity import ExtractedIdentity


@dataclass
class ExtractionResult:
    """
    Result of processing one document.

    Either ``success`` with ``data`` set, or a failure with a human-readable
    ``error`` and the exception class name in ``error_type``.
    """
    success: bool = True
    data: Optional[ExtractedIdentity] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    strategy: Optional[str] = None
    page_count: int = 0
    states: List[str] = field(default_factory=list)
    timing_sec: float = 0.0

    @classmethod
    def ok(
        cls,
        data: ExtractedIdentity,
        strategy: Optional[str] = None,
        page_count: int = 0,
        states: Optional[List[str]] = None,
        timing_sec: float = 0.0
    ) -> "ExtractionResult":
        """Create successful result."""
        return cls(
            success=True,
            data=data,
            strategy=strategy,
            page_count=page_count,
            states=list(states or []),
            timing_sec=timing_sec,
        )

    @classmethod
    def failure(
        cls,
        error: str,
        error_type: str = "UnknownError",
        page_count: int = 0,
        states: Optional[List[str]] = None,
        timing_sec: float = 0.0
    ) -> "ExtractionResult":
        """Create error result."""
        return cls(
            success=False,
            error=error,
            error_type=error_type,
            page_count=page_count,
            states=list(states or []),
            timing_sec=timing_sec,
        )

    def to_dict(self) -> dict[str, Any]:
        """``{success, data}`` or ``{success, error}`` plus diagnostics."""
        if self.success and self.data is not None:
            result: dict[str, Any] = {"success": True, "data": self.data.to_dict()}
        else:
            result = {"success": False, "error": self.error, "error_type": self.error_type}
        result["strategy"] = self.strategy
        result["page_count"] = self.page_count
        result["timing_sec"] = round(self.timing_sec, 4)
        return result

"""
Field Extractor processor.

Runs extraction strategies over the reconstructed text and builds the
final identity.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .base import BaseProcessor, ProcessingContext
from ..extraction.strategies import ExtractionStrategy, default_strategies, run_strategies


class FieldExtractor(BaseProcessor):
    """
    Try a sequence of strategies over ``context.text``.

    On success sets ``context.fields``, ``context.identity`` and
    ``context.strategy``. When no strategy completes, the captured
    ``IncompleteExtractionError`` lists the missing fields.
    """

    name = "FieldExtractor"

    def __init__(
        self,
        context: ProcessingContext,
        strategies: Optional[Sequence[ExtractionStrategy]] = None
    ):
        super().__init__(context)
        self.strategies: List[ExtractionStrategy] = list(
            strategies if strategies is not None else default_strategies(self.config.extraction)
        )

    def validate(self) -> bool:
        if not self.strategies:
            self.log_error("No extraction strategies configured")
            return False
        return True

    def process(self) -> bool:
        fields, strategy = run_strategies(self.context.text, self.strategies)

        self.context.identity = fields.to_identity()
        self.context.fields = fields
        self.context.strategy = strategy.name

        self.log_debug(
            "Extraction complete",
            strategy=strategy.name,
            id_number=self.context.identity.masked_id_number,
        )
        return True

"""
Extraction strategies.

Three tiers, tried in order until one produces every mandatory field:

- LabeledPatternStrategy: only values tied to an explicit label
- ContextualPatternStrategy: candidate scoring, frequency and layout context
- FallbackPatternStrategy: first acceptable value of each kind, no context

Each tier is independent; a later tier does not reuse fields from an
earlier one.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from ..config import ExtractionConfig, get_config
from ..exceptions import IncompleteExtractionError
from ..logger import get_logger
from ..models.identity import FieldSet
from .fields import (
    find_dob,
    find_first_gender_token,
    find_first_name,
    find_first_valid_date,
    find_gender,
    find_labeled_dob,
    find_most_frequent_name,
    find_name_after_to,
)
from .id_number import LABEL_SIGNALS, first_valid_id_run, select_id_number

logger = get_logger(__name__)


class ExtractionStrategy(ABC):
    """Common interface of the extraction tiers."""

    name: str = "base"

    # Primary tiers run in the PrimaryExtraction state, others in FallbackExtraction
    primary: bool = True

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self.config = config or get_config().extraction

    @abstractmethod
    def attempt(self, text: str) -> FieldSet:
        """Extract whatever fields this tier can find in ``text``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class LabeledPatternStrategy(ExtractionStrategy):
    """Fields that sit next to their printed label."""

    name = "labeled"

    def attempt(self, text: str) -> FieldSet:
        cfg = self.config
        return FieldSet(
            id_number=select_id_number(text, cfg.context_window, required_signals=LABEL_SIGNALS),
            name=find_name_after_to(text, cfg.name_search_lines),
            date_of_birth=find_labeled_dob(text, cfg.min_birth_year, cfg.max_birth_year),
            gender=find_gender(text),
        )


class ContextualPatternStrategy(ExtractionStrategy):
    """
    Full context-aware pass.

    ID by candidate scoring, DOB by label then gender proximity then any
    valid date, name from the ``To`` block then by frequency.
    """

    name = "contextual"

    def attempt(self, text: str) -> FieldSet:
        cfg = self.config
        name = find_name_after_to(text, cfg.name_search_lines) or find_most_frequent_name(text)
        return FieldSet(
            id_number=select_id_number(text, cfg.context_window),
            name=name,
            date_of_birth=find_dob(
                text, cfg.dob_context_chars, cfg.min_birth_year, cfg.max_birth_year
            ),
            gender=find_gender(text),
        )


class FallbackPatternStrategy(ExtractionStrategy):
    """
    Loose net for layouts the context rules do not recognise.

    The ID still has to pass structural and checksum validation.
    """

    name = "fallback"
    primary = False

    def attempt(self, text: str) -> FieldSet:
        cfg = self.config
        return FieldSet(
            id_number=first_valid_id_run(text),
            name=find_first_name(text),
            date_of_birth=find_first_valid_date(
                text, cfg.min_birth_year, cfg.max_birth_year, skip_other_dates=False
            ),
            gender=find_first_gender_token(text),
        )


def default_strategies(config: Optional[ExtractionConfig] = None) -> List[ExtractionStrategy]:
    """
    The standard tier order; the fallback tier is dropped when disabled.

    Raises:
        ConfigurationError: if ``config`` holds unusable values
    """
    config = config or get_config().extraction
    config.validate()
    strategies: List[ExtractionStrategy] = [
        LabeledPatternStrategy(config),
        ContextualPatternStrategy(config),
    ]
    if config.fallback_enabled:
        strategies.append(FallbackPatternStrategy(config))
    return strategies


def run_strategies(
    text: str,
    strategies: Sequence[ExtractionStrategy]
) -> Tuple[FieldSet, ExtractionStrategy]:
    """
    Try each strategy in order and return the first complete field set.

    Raises:
        IncompleteExtractionError: when no strategy completes; lists the
            fields the last attempt was missing
    """
    last_missing: List[str] = []
    for strategy in strategies:
        fields = strategy.attempt(text)
        if fields.is_complete:
            logger.debug(f"Strategy '{strategy.name}' complete: {fields.to_dict()}")
            return fields, strategy
        last_missing = fields.missing_fields()
        logger.debug(
            f"Strategy '{strategy.name}' incomplete, missing: {', '.join(last_missing)}"
        )

    raise IncompleteExtractionError(
        missing_fields=last_missing,
        strategy=strategies[-1].name if strategies else None,
    )


def extract_fields_from_text(
    text: str,
    config: Optional[ExtractionConfig] = None
) -> Tuple[FieldSet, str]:
    """
    Run the default tiers over already reconstructed text.

    Returns:
        The complete field set and the name of the tier that produced it
    """
    fields, strategy = run_strategies(text, default_strategies(config))
    return fields, strategy.name

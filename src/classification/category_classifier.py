"""
Category Classifier — free text → one value of a closed enumeration.

Used for Project, Priority and BugType. Every (category, variant) pair of the
category's variant dictionary is scored with
``find_best_similarity_in_content`` against subject + body; the single best
pair wins if its score is strictly above the classifier's threshold,
otherwise the default category is returned.

Tie-break: the first pair (in dictionary order) reaching the best score is
kept, so dictionary order is the priority among equally similar categories.
The default category is never scored.
"""
import logging
from dataclasses import dataclass
from typing import Generic, Mapping, Optional, Tuple, TypeVar

import numpy as np

from src.classification.fuzzy_matcher import find_best_similarity_in_content
from src.dictionary.variants import (
    BUG_TYPE_VARIANTS,
    PRIORITY_VARIANTS,
    PROJECT_VARIANTS,
    iter_variants,
)
from src.models.enums import BugType, Priority, Project
from src.models.extraction_config import ExtractionConfig

logger = logging.getLogger(__name__)

E = TypeVar("E")


@dataclass(frozen=True)
class ClassificationResult(Generic[E]):
    """Outcome of one classification, with the evidence behind it."""

    value: E
    score: float                  # Best similarity seen, even when below threshold
    matched_term: Optional[str]   # Variant that produced the best score
    fallback: bool                # True when the default category was returned

    def to_dict(self) -> dict:
        return {
            "value": getattr(self.value, "value", self.value),
            "score": round(self.score, 4),
            "matched_term": self.matched_term,
            "fallback": self.fallback,
        }


class CategoryClassifier(Generic[E]):
    """
    Fuzzy-threshold classifier over a static variant dictionary.

    Args:
        name: Label used in logs and metrics ("project", "priority", ...).
        variants: Ordered mapping category → variant strings.
        default: Category returned when nothing clears the threshold.
        threshold: Minimum similarity (exclusive) to accept a match.
        enable_logging: Emit per-variant diagnostics at DEBUG level.
    """

    def __init__(
        self,
        name: str,
        variants: Mapping[E, Tuple[str, ...]],
        default: E,
        threshold: float,
        enable_logging: bool = True,
    ):
        if not 0.0 <= threshold <= 1.0:
            raise ValueError(f"threshold must be within [0, 1], got {threshold}")
        self.name = name
        self.default = default
        self.threshold = threshold
        self.enable_logging = enable_logging
        self._pairs = [(c, v) for c, v in iter_variants(variants) if c != default]

    @property
    def categories(self) -> Tuple[E, ...]:
        return tuple(dict.fromkeys(c for c, _ in self._pairs))

    def explain(self, subject: Optional[str], body: Optional[str]) -> ClassificationResult[E]:
        """Classify and report the best score and the variant behind it."""
        content = f"{subject or ''} {body or ''}".lower()
        if not content.strip() or not self._pairs:
            return ClassificationResult(self.default, 0.0, None, True)

        scores = np.array(
            [find_best_similarity_in_content(content, variant) for _, variant in self._pairs]
        )

        if self.enable_logging:
            self._log_improvements(scores)

        # np.argmax returns the first maximum: earlier pairs win ties.
        best = int(np.argmax(scores))
        best_score = float(scores[best])
        category, variant = self._pairs[best]

        if best_score > self.threshold:
            if self.enable_logging:
                logger.debug(
                    "Best %s match: %s (similarity %.2f) matched term %r",
                    self.name, getattr(category, "value", category), best_score, variant,
                )
            return ClassificationResult(category, best_score, variant, False)

        logger.warning(
            "No %s match above threshold %.2f (best %.2f for %r), using %s",
            self.name, self.threshold, best_score, variant,
            getattr(self.default, "value", self.default),
        )
        return ClassificationResult(self.default, best_score, variant, True)

    def classify(self, subject: Optional[str], body: Optional[str]) -> E:
        """Return exactly one category; never None."""
        return self.explain(subject, body).value

    def _log_improvements(self, scores: np.ndarray) -> None:
        best = 0.0
        for (category, variant), score in zip(self._pairs, scores):
            if score > self.threshold and score > best:
                best = float(score)
                logger.debug(
                    "Better %s match: %s (similarity %.2f) for variant %r",
                    self.name, getattr(category, "value", category), best, variant,
                )

    def __repr__(self) -> str:
        return f"CategoryClassifier({self.name!r}, threshold={self.threshold})"


# =============================================================================
# Factories
# =============================================================================

def project_classifier(config: Optional[ExtractionConfig] = None) -> CategoryClassifier[Project]:
    config = config or ExtractionConfig()
    return CategoryClassifier(
        "project", PROJECT_VARIANTS, Project.GENERAL,
        config.project_threshold, config.enable_fuzzy_logging,
    )


def priority_classifier(config: Optional[ExtractionConfig] = None) -> CategoryClassifier[Priority]:
    config = config or ExtractionConfig()
    return CategoryClassifier(
        "priority", PRIORITY_VARIANTS, Priority.MODERATE,
        config.priority_threshold, config.enable_fuzzy_logging,
    )


def bug_type_classifier(config: Optional[ExtractionConfig] = None) -> CategoryClassifier[BugType]:
    config = config or ExtractionConfig()
    return CategoryClassifier(
        "bug_type", BUG_TYPE_VARIANTS, BugType.BUG,
        config.bug_type_threshold, config.enable_fuzzy_logging,
    )


@dataclass(frozen=True)
class TicketClassifiers:
    """The three classifiers a parse needs, built from one config."""

    project: CategoryClassifier
    priority: CategoryClassifier
    bug_type: CategoryClassifier

    @classmethod
    def from_config(cls, config: Optional[ExtractionConfig] = None) -> "TicketClassifiers":
        return cls(
            project=project_classifier(config),
            priority=priority_classifier(config),
            bug_type=bug_type_classifier(config),
        )

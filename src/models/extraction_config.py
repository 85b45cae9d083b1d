"""
ExtractionConfig — frozen configuration handed to the extraction engine.

The engine never reads environment settings itself; callers build one of
these (usually via ``from_settings``) and pass it to classifiers and to the
pipeline, so two parsers with different thresholds can coexist.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionConfig:
    """Similarity thresholds and diagnostics switch for one parser."""

    project_threshold: float = 0.75
    priority_threshold: float = 0.80
    bug_type_threshold: float = 0.80
    enable_fuzzy_logging: bool = True

    def __post_init__(self) -> None:
        for name in ("project_threshold", "priority_threshold", "bug_type_threshold"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")

    @classmethod
    def from_settings(cls) -> "ExtractionConfig":
        """Build from the environment-backed values in ``src.config.settings``."""
        from src.config import settings

        return cls(
            project_threshold=settings.FUZZY_PROJECT_SIMILARITY_THRESHOLD,
            priority_threshold=settings.FUZZY_PRIORITY_SIMILARITY_THRESHOLD,
            bug_type_threshold=settings.FUZZY_BUG_TYPE_SIMILARITY_THRESHOLD,
            enable_fuzzy_logging=settings.FUZZY_ENABLE_LOGGING,
        )

    def to_dict(self) -> dict:
        return {
            "project_threshold": self.project_threshold,
            "priority_threshold": self.priority_threshold,
            "bug_type_threshold": self.bug_type_threshold,
            "enable_fuzzy_logging": self.enable_fuzzy_logging,
        }

    def __repr__(self) -> str:
        return (
            f"ExtractionConfig(project={self.project_threshold}, "
            f"priority={self.priority_threshold}, bug_type={self.bug_type_threshold})"
        )

"""
Moderation configuration model and named presets.

Presets are plain value sets; they do not select different code paths.
"""

from pydantic import BaseModel, ConfigDict, Field

from toxicity_filter.models.enums import PipelineMode


class ModerationConfig(BaseModel):
    """Immutable per-moderator configuration."""

    model_config = ConfigDict(frozen=True)

    toxicity_threshold: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Classifier probability a label must exceed to raise an issue",
    )
    cache_capacity: int = Field(
        default=1000, gt=0, description="Maximum number of cached results"
    )
    pipeline_mode: PipelineMode = Field(
        default=PipelineMode.CLASSIFIER_WITH_KEYWORDS,
        description="Layers to run after the cache lookup",
    )

    @classmethod
    def balanced(cls) -> "ModerationConfig":
        """Default: classifier + keywords at 50%. Social apps, chat."""
        return cls(
            toxicity_threshold=0.5,
            cache_capacity=1000,
            pipeline_mode=PipelineMode.CLASSIFIER_WITH_KEYWORDS,
        )

    @classmethod
    def strict(cls) -> "ModerationConfig":
        """Maximum sensitivity (30%). Children's apps, heavily moderated spaces."""
        return cls(
            toxicity_threshold=0.3,
            cache_capacity=1000,
            pipeline_mode=PipelineMode.CLASSIFIER_WITH_KEYWORDS,
        )

    @classmethod
    def lenient(cls) -> "ModerationConfig":
        """Fewer false positives (70%), classifier only. Creative writing, forums."""
        return cls(
            toxicity_threshold=0.7,
            cache_capacity=1000,
            pipeline_mode=PipelineMode.CLASSIFIER_ONLY,
        )

    @classmethod
    def fast(cls) -> "ModerationConfig":
        """Keywords only, larger cache. Live typing validation."""
        return cls(
            toxicity_threshold=0.5,
            cache_capacity=2000,
            pipeline_mode=PipelineMode.KEYWORDS_ONLY,
        )

    @classmethod
    def from_preset(cls, name: str) -> "ModerationConfig":
        """
        Resolve a preset by name (case-insensitive).

        Raises:
            ValueError: Unknown preset name
        """
        presets = {
            "balanced": cls.balanced,
            "strict": cls.strict,
            "lenient": cls.lenient,
            "fast": cls.fast,
        }
        factory = presets.get(name.strip().lower())
        if factory is None:
            raise ValueError(
                f"Unknown moderation preset '{name}' (expected one of: {', '.join(presets)})"
            )
        return factory()

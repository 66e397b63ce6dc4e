"""Configuration management for LexRipple.

Two layers:
    - PropagationConfig: immutable per-call propagation parameters. Every
      engine function takes one explicitly; DEFAULT_PROPAGATION_CONFIG is
      the value callers pass when they have no overrides.
    - Settings: process-level settings loaded from LEXRIPPLE_* environment
      variables, which can build a PropagationConfig.
"""

import logging
import warnings
from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings

from lexripple.models import TransferType, UpdateType

logger = logging.getLogger(__name__)

# Safety ceilings against pathological graphs; not configurable per call.
MAX_PROPAGATION_TARGETS = 50
MAX_PROPAGATION_DEPTH = 3
MAX_UPDATE_HISTORY = 500


class RelationshipWeights(BaseModel):
    """Propagation weight per relationship kind.

    One field per TransferType so every kind always has a weight.

    Attributes:
        morphological: Word family members (0.8 default).
        collocational: Co-occurring items (0.5 default).
        semantic: Related meanings (0.4 default).
        syntactic: Shared grammatical patterns (0.3 default).
        phonological: Similar sound patterns (0.25 default).
        orthographic: Shared spelling patterns (0.2 default).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    morphological: float = Field(default=0.8, ge=0.0, description="Word family weight")
    collocational: float = Field(default=0.5, ge=0.0, description="Collocation weight")
    semantic: float = Field(default=0.4, ge=0.0, description="Semantic weight")
    syntactic: float = Field(default=0.3, ge=0.0, description="Syntactic weight")
    phonological: float = Field(default=0.25, ge=0.0, description="Phonological weight")
    orthographic: float = Field(default=0.2, ge=0.0, description="Orthographic weight")

    def weight_for(self, transfer_type: TransferType) -> float:
        """Look up the weight for a relationship kind."""
        return float(getattr(self, TransferType(transfer_type).value))

    @model_validator(mode="after")
    def _warn_if_weight_above_one(self) -> "RelationshipWeights":
        """Warn if any weight amplifies rather than attenuates."""
        amplifying = {t.value: self.weight_for(t) for t in TransferType if self.weight_for(t) > 1.0}
        if amplifying:
            warnings.warn(
                f"RelationshipWeights above 1.0 amplify propagation: {amplifying}. "
                f"Magnitudes will saturate at 1.0.",
                UserWarning,
                stacklevel=2,
            )
            logger.warning("RelationshipWeights above 1.0: %s", amplifying)
        return self


class UpdateTypeWeights(BaseModel):
    """Multiplier per update type applied to the base magnitude.

    Attributes:
        assessment: Formal assessment (1.2 default).
        response: Regular task response (1.0 default).
        review: Spaced review (0.8 default).
        initial: First exposure (0.6 default).
        correction: Error correction (0.5 default).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    assessment: float = Field(default=1.2, ge=0.0, description="Assessment multiplier")
    response: float = Field(default=1.0, ge=0.0, description="Response multiplier")
    review: float = Field(default=0.8, ge=0.0, description="Review multiplier")
    initial: float = Field(default=0.6, ge=0.0, description="Initial learning multiplier")
    correction: float = Field(default=0.5, ge=0.0, description="Correction multiplier")

    def weight_for(self, update_type: UpdateType) -> float:
        """Look up the multiplier for an update type."""
        return float(getattr(self, UpdateType(update_type).value))


class PropagationConfig(BaseModel):
    """Parameters for one propagation call.

    Frozen: derive overrides with ``config.with_overrides(...)``.

    Attributes:
        enabled: Run propagation at all.
        min_magnitude: Updates below this are dropped and not propagated further.
        max_depth: Maximum hops (further capped by MAX_PROPAGATION_DEPTH).
            0 propagates nothing.
        depth_decay_factor: Multiplicative attenuation per extra hop.
        relationship_weights: Weight per relationship kind.
        update_type_weights: Multiplier per update type.
        update_difficulty: Produce difficulty adjustments.
        update_stability: Produce stability boosts.
        update_priority: Produce priority adjustments.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    enabled: bool = True
    min_magnitude: float = Field(default=0.05, ge=0.0, le=1.0)
    max_depth: int = Field(default=2, ge=0)
    depth_decay_factor: float = Field(default=0.5, ge=0.0, le=1.0)
    relationship_weights: RelationshipWeights = Field(default_factory=RelationshipWeights)
    update_type_weights: UpdateTypeWeights = Field(default_factory=UpdateTypeWeights)
    update_difficulty: bool = True
    update_stability: bool = True
    update_priority: bool = True

    @property
    def effective_max_depth(self) -> int:
        """Depth limit after applying the hard ceiling."""
        return min(self.max_depth, MAX_PROPAGATION_DEPTH)

    def with_overrides(self, **overrides: Any) -> "PropagationConfig":
        """Return a validated copy with some parameters replaced.

        Weight tables may be overridden partially with a mapping; keys not
        given keep this config's values.

        Example:
            ```python
            config = DEFAULT_PROPAGATION_CONFIG.with_overrides(
                min_magnitude=0.1,
                relationship_weights={"semantic": 0.6},
            )
            ```

        Raises:
            pydantic.ValidationError: If an override is out of range or unknown.
        """
        data = self.model_dump()
        for name, value in overrides.items():
            current = data.get(name)
            if isinstance(value, Mapping) and isinstance(current, dict):
                data[name] = {**current, **value}
            elif isinstance(value, BaseModel):
                data[name] = value.model_dump()
            else:
                data[name] = value
        return type(self).model_validate(data)


DEFAULT_PROPAGATION_CONFIG = PropagationConfig()


class Settings(BaseSettings):
    """LexRipple configuration loaded from environment variables.

    All settings can be overridden via environment variables with the
    LEXRIPPLE_ prefix, nested tables with ``__``. For example:
        LEXRIPPLE_MAX_DEPTH=3
        LEXRIPPLE_RELATIONSHIP_WEIGHTS__SEMANTIC=0.6
    """

    # Environment
    env: Literal["development", "production", "test"] = Field(
        default="development",
        description="Environment: development, production, or test",
    )

    # Propagation defaults
    propagation_enabled: bool = Field(
        default=True,
        description="Enable indirect-update propagation",
    )
    min_magnitude: float = Field(
        default=0.05,
        ge=0.0,
        le=1.0,
        description="Drop indirect updates weaker than this",
    )
    max_depth: int = Field(
        default=2,
        ge=0,
        le=MAX_PROPAGATION_DEPTH,
        description="Maximum propagation hops",
    )
    depth_decay_factor: float = Field(
        default=0.5,
        ge=0.0,
        le=1.0,
        description="Attenuation per extra hop",
    )
    relationship_weights: RelationshipWeights = Field(
        default_factory=RelationshipWeights,
        description="Weight per relationship kind",
    )
    update_type_weights: UpdateTypeWeights = Field(
        default_factory=UpdateTypeWeights,
        description="Multiplier per update type",
    )
    update_difficulty: bool = Field(default=True, description="Adjust target difficulty")
    update_stability: bool = Field(default=True, description="Boost target stability")
    update_priority: bool = Field(default=True, description="Adjust target priority")

    # Engine
    aggregate_updates: bool = Field(
        default=True,
        description="Merge updates sharing a target before applying them",
    )
    history_max_entries: int = Field(
        default=MAX_UPDATE_HISTORY,
        ge=1,
        le=MAX_UPDATE_HISTORY,
        description="Audit entries retained; oldest evicted first",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    model_config = {
        "env_prefix": "LEXRIPPLE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_nested_delimiter": "__",
    }

    @model_validator(mode="after")
    def validate_weights_allow_propagation(self) -> "Settings":
        """Reject enabled propagation whose weights can never produce an update.

        With every relationship weight at zero, every magnitude is zero and
        all updates fall under min_magnitude (unless it is zero too).
        """
        if not self.propagation_enabled or self.min_magnitude == 0.0:
            return self
        if all(self.relationship_weights.weight_for(t) == 0.0 for t in TransferType):
            raise ValueError(
                "All relationship weights are 0 while propagation is enabled. "
                "Set LEXRIPPLE_PROPAGATION_ENABLED=false to disable propagation instead."
            )
        return self

    def propagation_config(self) -> PropagationConfig:
        """Build the PropagationConfig these settings describe."""
        return PropagationConfig(
            enabled=self.propagation_enabled,
            min_magnitude=self.min_magnitude,
            max_depth=self.max_depth,
            depth_decay_factor=self.depth_decay_factor,
            relationship_weights=self.relationship_weights,
            update_type_weights=self.update_type_weights,
            update_difficulty=self.update_difficulty,
            update_stability=self.update_stability,
            update_priority=self.update_priority,
        )


# Global settings instance
settings = Settings()

"""
Global Configuration and Defaults.

This module centralizes the tuning constants of the enrichment core and
the option models built from them. Every component takes its options as
an argument and falls back to these defaults, so a YAML file loaded with
``load_config`` can override any of them per project.
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import BaseModel, Field, ValidationError, model_validator

from .core.exceptions import ConfigError
from .core.types import LayoutAlgorithm, RankDirection, TreeOrientation

# --- Importance (PageRank) ---
DAMPING_FACTOR = 0.85

# Fixed iteration count, no convergence tolerance
PAGERANK_ITERATIONS = 100

# Visual size = MIN_NODE_SIZE + importance * NODE_SIZE_RANGE
MIN_NODE_SIZE = 5.0
NODE_SIZE_RANGE = 25.0

# Relationship weights are rescaled into [MIN_LINK_WEIGHT, MAX_LINK_WEIGHT]
MIN_LINK_WEIGHT = 1.0
MAX_LINK_WEIGHT = 5.0

# --- Curvature ---
CURVATURE_SPACING = 0.5
SELF_LINK_CURVATURE = 0.5
SELF_LINK_BASE_CURVATURE = 0.3

# Node size that adds one full unit of self-loop curvature
SELF_LINK_SIZE_DIVISOR = 50.0

# Straight links within this many degrees of an axis get CARDINAL_NUDGE
CARDINAL_TOLERANCE_DEGREES = 5.0
CARDINAL_NUDGE = 0.1

# --- Connectivity repair ---
SAME_GROUP_BONUS = 0.5
SAME_TYPE_BONUS = 0.3
INFERRED_RELATION_TYPE = "inferred_relation"
INFERRED_RELATION_CONTEXT = "Inferred relationship based on domain similarity"
INFERRED_LINK_WEIGHT = 1.0

# --- Highlighting ---
PATHWAY_MAX_DEPTH = 3
STRONGEST_RELATIONSHIP_LIMIT = 3

# Memoized neighbor maps kept alive at once
NEIGHBOR_CACHE_SIZE = 32

# --- Layouts ---
TREE_LEVEL_SEPARATION = 100.0
TREE_SIBLING_SEPARATION = 50.0

HIERARCHICAL_NODE_SEPARATION = 50.0
HIERARCHICAL_RANK_SEPARATION = 100.0
HIERARCHICAL_MARGIN = 20.0

# Node extent on the layered canvas is size * NODE_EXTENT_FACTOR (radius to box)
NODE_EXTENT_FACTOR = 4.0
DEFAULT_NODE_SIZE = 10.0

# Barycenter sweeps used to reduce crossings
CROSSING_SWEEPS = 24

CIRCULAR_MIN_RADIUS = 200.0
CIRCULAR_RADIUS_PER_NODE = 10.0

# --- Auto layout thresholds ---
AUTO_SPARSE_DEGREE = 3.0
AUTO_MIN_LINKS_FOR_HIERARCHY = 10
AUTO_MAX_CIRCULAR_NODES = 50


class CentralityConfig(BaseModel):
    """Options for importance scoring and link weight normalization."""
    damping: float = Field(default=DAMPING_FACTOR, gt=0, lt=1)
    iterations: int = Field(default=PAGERANK_ITERATIONS, ge=1)
    min_size: float = Field(default=MIN_NODE_SIZE, ge=0)
    size_range: float = Field(default=NODE_SIZE_RANGE, ge=0)
    min_weight: float = Field(default=MIN_LINK_WEIGHT, gt=0)
    max_weight: float = Field(default=MAX_LINK_WEIGHT, gt=0)

    @model_validator(mode="after")
    def _check_weight_range(self) -> "CentralityConfig":
        if self.max_weight < self.min_weight:
            raise ValueError(
                f"max_weight ({self.max_weight}) must not be below min_weight ({self.min_weight})"
            )
        return self


class CurvatureConfig(BaseModel):
    """Options for parallel and self-link curvature."""
    spacing: float = Field(default=CURVATURE_SPACING, gt=0)
    self_link: float = Field(default=SELF_LINK_CURVATURE, gt=0)
    self_link_base: float = Field(default=SELF_LINK_BASE_CURVATURE, gt=0)
    self_link_size_divisor: float = Field(default=SELF_LINK_SIZE_DIVISOR, gt=0)
    cardinal_tolerance: float = Field(default=CARDINAL_TOLERANCE_DEGREES, ge=0, lt=45)
    cardinal_nudge: float = Field(default=CARDINAL_NUDGE)


class RepairConfig(BaseModel):
    """Options for connectivity repair."""
    same_group_bonus: float = SAME_GROUP_BONUS
    same_type_bonus: float = SAME_TYPE_BONUS
    relation_type: str = INFERRED_RELATION_TYPE
    relation_context: str = INFERRED_RELATION_CONTEXT
    link_weight: float = Field(default=INFERRED_LINK_WEIGHT, gt=0)


class HighlightConfig(BaseModel):
    """Options for pathway highlighting."""
    max_depth: int = Field(default=PATHWAY_MAX_DEPTH, ge=1)
    pathway_mode: bool = False


class HierarchicalLayoutOptions(BaseModel):
    """Options for the layered (dagre-style) layout."""
    rankdir: RankDirection = RankDirection.TOP_BOTTOM
    nodesep: float = Field(default=HIERARCHICAL_NODE_SEPARATION, ge=0)
    ranksep: float = Field(default=HIERARCHICAL_RANK_SEPARATION, ge=0)
    marginx: float = Field(default=HIERARCHICAL_MARGIN, ge=0)
    marginy: float = Field(default=HIERARCHICAL_MARGIN, ge=0)
    sweeps: int = Field(default=CROSSING_SWEEPS, ge=0)


class TreeLayoutOptions(BaseModel):
    """Options for the breadth-first tree layout."""
    orientation: TreeOrientation = TreeOrientation.VERTICAL
    level_separation: float = Field(default=TREE_LEVEL_SEPARATION, ge=0)
    sibling_separation: float = Field(default=TREE_SIBLING_SEPARATION, ge=0)
    root: str | None = None


class CircularLayoutOptions(BaseModel):
    """Options for the circular layout. ``radius`` overrides the automatic one."""
    radius: float | None = Field(default=None, gt=0)


class LayoutConfig(BaseModel):
    algorithm: LayoutAlgorithm = LayoutAlgorithm.AUTO
    hierarchical: HierarchicalLayoutOptions = Field(default_factory=HierarchicalLayoutOptions)
    tree: TreeLayoutOptions = Field(default_factory=TreeLayoutOptions)
    circular: CircularLayoutOptions = Field(default_factory=CircularLayoutOptions)


class KnowGraphConfig(BaseModel):
    """Top-level configuration, mirroring the layout of a knowgraph.yaml file."""
    centrality: CentralityConfig = Field(default_factory=CentralityConfig)
    curvature: CurvatureConfig = Field(default_factory=CurvatureConfig)
    repair: RepairConfig = Field(default_factory=RepairConfig)
    highlight: HighlightConfig = Field(default_factory=HighlightConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)


def load_config(path: str | Path | None) -> KnowGraphConfig:
    """
    Load configuration from a YAML file.

    A missing path (or None) yields the defaults. Any section or key left out
    of the file keeps its default value.

    Raises:
        ConfigError: If the file is not valid YAML or fails validation.
    """
    if path is None:
        return KnowGraphConfig()

    config_path = Path(path)
    if not config_path.exists():
        return KnowGraphConfig()

    try:
        raw: Dict[str, Any] | None = yaml.safe_load(config_path.read_text())
    except yaml.YAMLError as e:
        raise ConfigError(str(config_path), f"invalid YAML: {e}") from e

    if raw is None:
        return KnowGraphConfig()
    if not isinstance(raw, dict):
        raise ConfigError(str(config_path), "top level must be a mapping")

    try:
        return KnowGraphConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(str(config_path), str(e)) from e

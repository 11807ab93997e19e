"""
Core type definitions for knowgraph.

Nodes and links arrive from an extraction collaborator (pattern matcher or
AI provider) and leave enriched for a rendering collaborator. The models
accept the raw input shape (links weighted by ``value``) and ignore keys the
core does not understand.
"""

from enum import StrEnum
from typing import Any, Dict, FrozenSet, List, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class LayoutAlgorithm(StrEnum):
    """Layout strategies understood by the LayoutSelector."""
    FORCE = "force"
    HIERARCHICAL = "hierarchical"
    TREE = "tree"
    CIRCULAR = "circular"
    AUTO = "auto"

    @classmethod
    def _missing_(cls, value: object):
        # "dagre" is the name the rendering side uses for the layered layout
        if isinstance(value, str):
            lowered = value.lower()
            if lowered == "dagre":
                return cls.HIERARCHICAL
            for member in cls:
                if member.value == lowered:
                    return member
        return None


class RankDirection(StrEnum):
    """Direction in which hierarchical layers are stacked."""
    TOP_BOTTOM = "TB"
    BOTTOM_TOP = "BT"
    LEFT_RIGHT = "LR"
    RIGHT_LEFT = "RL"


class TreeOrientation(StrEnum):
    """Orientation of the breadth-first tree layout."""
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"
    RADIAL = "radial"


class Position(BaseModel):
    """A point in layout space. ``z`` is only set by 3D-aware callers."""
    x: float = 0.0
    y: float = 0.0
    z: float | None = None

    def as_tuple(self) -> Tuple[float, ...]:
        if self.z is None:
            return (self.x, self.y)
        return (self.x, self.y, self.z)


class Node(BaseModel):
    """
    A graph entity.

    ``size`` and ``importance`` are derived by the CentralityAnalyzer;
    ``group`` is overwritten with a community id during analysis.
    ``pinned`` mirrors the renderer's fixed position (fx/fy) so a physics
    simulation leaves pre-positioned nodes alone.
    """
    id: str
    group: int = 0
    type: str | None = None
    context: List[str] = Field(default_factory=list)
    size: float = Field(default=10.0, ge=0)
    importance: float = Field(default=0.0, ge=0, le=1)
    position: Position | None = None
    pinned: Position | None = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=False, extra="ignore", validate_assignment=True)

    @field_validator("context", mode="before")
    @classmethod
    def _coerce_context(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return value

    def __hash__(self):
        return hash(self.id)

    def __eq__(self, other):
        if isinstance(other, Node):
            return self.id == other.id
        return False


class Link(BaseModel):
    """
    A relationship between two nodes.

    Direction matters for importance scoring and layered layouts; every
    other component treats links as undirected.
    """
    source: str
    target: str
    weight: float = Field(default=1.0, gt=0, validation_alias=AliasChoices("weight", "value"))
    type: str | None = None
    context: str | None = None
    curvature: float = 0.0
    is_inferred: bool = Field(default=False, validation_alias=AliasChoices("is_inferred", "isInferred"))
    metadata: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=False, extra="ignore", populate_by_name=True)

    @field_validator("context", mode="before")
    @classmethod
    def _join_context(cls, value: Any) -> Any:
        if isinstance(value, list):
            return " ".join(str(v) for v in value)
        return value

    def is_self_link(self) -> bool:
        return self.source == self.target

    def pair(self) -> Tuple[str, str]:
        """Unordered endpoint key: a->b and b->a share a pair."""
        if self.source <= self.target:
            return (self.source, self.target)
        return (self.target, self.source)

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id


def link_key(index: int) -> str:
    """Identifier of the link at ``index`` in a graph's link sequence."""
    return f"link-{index}"


class GraphData(BaseModel):
    """
    An ordered collection of nodes and links.

    Node order is insertion order and carries no meaning, but algorithms that
    break ties do so by first-seen order, so it is preserved everywhere.
    """
    nodes: List[Node] = Field(default_factory=list)
    links: List[Link] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    def node_ids(self) -> List[str]:
        return [node.id for node in self.nodes]

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_map(self) -> Dict[str, Node]:
        return {node.id: node for node in self.nodes}

    def clone(self) -> "GraphData":
        """Deep copy, so enrichment never mutates the caller's graph."""
        return self.model_copy(deep=True)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GraphData":
        return cls.model_validate(data)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

    @property
    def is_empty(self) -> bool:
        return not self.nodes


class HighlightState(BaseModel):
    """Nodes and link identifiers to emphasise for the current focus."""
    nodes: FrozenSet[str] = Field(default_factory=frozenset)
    links: FrozenSet[str] = Field(default_factory=frozenset)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def empty(cls) -> "HighlightState":
        return cls()

    @property
    def is_empty(self) -> bool:
        return not self.nodes and not self.links

    def is_subset_of(self, other: "HighlightState") -> bool:
        return self.nodes <= other.nodes and self.links <= other.links

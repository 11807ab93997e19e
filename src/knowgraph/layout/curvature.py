"""
Link curvature assignment.

Gives every link a curvature hint so the renderer can draw parallel links
and self-links without them overlapping:

- A lone link between two nodes is straight (0).
- k parallel links (either direction) fan out symmetrically around 0:
  spacing * (i - (k - 1) / 2), in link order.
- Self-links always curve; several loops on one node fan outward.
- With positions known, a lone link lying almost on an axis gets a
  small nudge so it does not vanish against grid lines.

Results depend on link order: reordering links between renders changes
which link gets which curve.
"""

import math
from collections import defaultdict
from typing import Dict, List, Sequence, Tuple

from ..config import DEFAULT_NODE_SIZE, CurvatureConfig
from ..core.types import Link, Node


def is_near_cardinal(source: Node, target: Node, tolerance: float) -> bool:
    """True when the segment source->target is within ``tolerance`` degrees of an axis."""
    dx = target.position.x - source.position.x
    dy = target.position.y - source.position.y
    angle = abs(math.degrees(math.atan2(dy, dx))) % 90
    return angle < tolerance or angle > 90 - tolerance


class CurvatureAssigner:
    """Computes curvature for a whole link sequence at once."""

    def __init__(self, config: CurvatureConfig | None = None):
        self.config = config or CurvatureConfig()

    def self_link_base(self, node: Node | None) -> float:
        """Loop curvature for a node; larger nodes get a wider loop."""
        if node is None:
            return self.config.self_link
        size = node.size if node.size > 0 else DEFAULT_NODE_SIZE
        return self.config.self_link_base + size / self.config.self_link_size_divisor

    def curvatures(self, links: Sequence[Link], nodes: Sequence[Node] | None = None) -> List[float]:
        """Curvature for each link, aligned with ``links``."""
        node_map: Dict[str, Node] = {node.id: node for node in nodes} if nodes is not None else {}
        spacing = self.config.spacing

        by_pair: Dict[Tuple[str, str], List[int]] = defaultdict(list)
        loops: Dict[str, List[int]] = defaultdict(list)
        for index, link in enumerate(links):
            if link.is_self_link():
                loops[link.source].append(index)
            else:
                by_pair[link.pair()].append(index)

        values = [0.0] * len(links)

        for node_id, indices in loops.items():
            base = self.self_link_base(node_map.get(node_id))
            for position, index in enumerate(indices):
                values[index] = base + spacing * position

        lone: List[int] = []
        for indices in by_pair.values():
            k = len(indices)
            if k == 1:
                lone.extend(indices)
                continue
            for position, index in enumerate(indices):
                values[index] = spacing * (position - (k - 1) / 2)

        if node_map:
            self._nudge_cardinal(links, node_map, values, lone)

        return values

    def _nudge_cardinal(
        self,
        links: Sequence[Link],
        node_map: Dict[str, Node],
        values: List[float],
        lone: List[int],
    ) -> None:
        # Fan members keep their spacing; only lone links are nudged
        for index in lone:
            link = links[index]
            source = node_map.get(link.source)
            target = node_map.get(link.target)
            if source is None or target is None:
                continue
            if source.position is None or target.position is None:
                continue
            if is_near_cardinal(source, target, self.config.cardinal_tolerance):
                values[index] = self.config.cardinal_nudge

    def assign(self, links: Sequence[Link], nodes: Sequence[Node] | None = None) -> List[Link]:
        """Return copies of ``links`` with ``curvature`` set."""
        values = self.curvatures(links, nodes)
        return [
            link.model_copy(deep=True, update={"curvature": value})
            for link, value in zip(links, values)
        ]


def assign_curvature(
    links: Sequence[Link],
    nodes: Sequence[Node] | None = None,
    config: CurvatureConfig | None = None,
) -> List[Link]:
    """Convenience wrapper around ``CurvatureAssigner.assign``."""
    return CurvatureAssigner(config).assign(links, nodes)

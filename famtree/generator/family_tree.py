"""
Family-Tree Generator for famtree

This module grows a random, depth-bounded tree level by level. Two Gaussian
distributions drive the shape: one caps how many nodes each level may hold,
the other decides how many children each parent attempts to create.

Algorithm:
    1. Seed a local random.Random (drawing a fresh seed if none is given)
    2. Build both samplers, failing before any node exists
    3. Create the root and use it as the first frontier
    4. For every further level:
       - sample the level width cap (rounded, at least 1)
       - shuffle the frontier
       - for each parent, sample its branching factor (rounded, at least 0)
         and create children until the level cap is reached; reaching the
         cap ends the whole level, not just the current parent
    5. The children created become the next frontier

Design Decisions:
    - One seeded generator drives identifiers, shuffles and samples, so a
      seed fully determines the graph
    - The seed used is always returned so a run can be replayed
    - Edge insertion errors are bugs here, never recoverable outcomes
"""

import logging
import math
import random
import secrets
from typing import Optional

from famtree.errors import DistributionError, EdgeError, GeneratorInvariantError
from famtree.graph import AcyclicGraph
from famtree.models import GenerationResult, GeneratorConfig, Payload

logger = logging.getLogger(__name__)

DEFAULT_GRAPH_NAME = "output"
ROOT_NAME = "Root"
ROOT_PAYLOAD = Payload.text("root of the family tree")


class GaussianSampler:
    """
    Normal distribution parameterized by mean and standard deviation.

    Usage:
        widths = GaussianSampler(10.0, 5.0, parameter="width")
        raw = widths.sample(rng)
    """

    def __init__(self, mean: float, std: float, parameter: str = "normal") -> None:
        """
        Raises:
            DistributionError: std is not a finite positive number, or mean
                               is not finite
        """
        if not math.isfinite(mean):
            raise DistributionError(parameter, mean, std, "mean must be finite")
        if not math.isfinite(std) or std <= 0:
            raise DistributionError(parameter, mean, std, "standard deviation must be positive")
        self.mean = mean
        self.std = std
        self.parameter = parameter

    def sample(self, rng: random.Random) -> float:
        return rng.gauss(self.mean, self.std)

    def __repr__(self) -> str:
        return f"GaussianSampler({self.parameter}, mean={self.mean}, std={self.std})"


def round_half_away(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    if value >= 0:
        return math.floor(value + 0.5)
    return math.ceil(value - 0.5)


def draw_seed() -> int:
    """Draw a fresh unsigned 64-bit seed from the system entropy source."""
    return secrets.randbits(64)


def generate(config: GeneratorConfig) -> GenerationResult:
    """
    Generate a family-tree shaped graph.

    Args:
        config: Generation parameters

    Returns:
        GenerationResult holding the graph, the seed used and the sampled
        width cap of every level after the root

    Raises:
        DistributionError: A standard deviation is not positive; raised
                           before any node is created
        GeneratorInvariantError: An edge insertion was rejected, which
                                 means the algorithm itself is broken

    Example:
        >>> result = generate(GeneratorConfig(depth=3, seed=42))
        >>> result.seed
        42
    """
    seed = config.seed if config.seed is not None else draw_seed()
    rng = random.Random(seed)
    logger.debug("Generating with seed %d", seed)

    width_dist = GaussianSampler(config.width_mean, config.width_std, parameter="width")
    child_dist = GaussianSampler(config.child_mean, config.child_std, parameter="child")

    graph = AcyclicGraph(config.name or DEFAULT_GRAPH_NAME)
    root = graph.add_node(ROOT_NAME, ROOT_PAYLOAD, rng=rng)

    frontier = [root]
    level_targets: list[int] = []

    for level in range(1, config.depth):
        target = max(1, round_half_away(width_dist.sample(rng)))
        level_targets.append(target)

        next_frontier = _grow_level(graph, frontier, target, child_dist, rng)
        logger.debug(
            "Level %d: created %d of %d from %d parents",
            level,
            len(next_frontier),
            target,
            len(frontier),
        )
        frontier = next_frontier

    logger.info(
        "Generated graph %r: %d nodes, %d edges (seed %d)",
        graph.label,
        graph.node_count,
        graph.edge_count,
        seed,
    )
    return GenerationResult(graph=graph, seed=seed, level_targets=level_targets)


def _grow_level(
    graph: AcyclicGraph,
    frontier: list,
    target: int,
    child_dist: GaussianSampler,
    rng: random.Random,
) -> list:
    """
    Create the children of one level.

    The width cap is global to the level and applied greedily in shuffled
    frontier order: once `target` nodes exist, no further parent gets any.
    """
    rng.shuffle(frontier)

    created: list = []
    for parent in frontier:
        attempts = max(0, round_half_away(child_dist.sample(rng)))
        for _ in range(attempts):
            if len(created) >= target:
                return created
            child = graph.add_node(rng=rng)
            try:
                graph.add_edge(parent, child)
            except EdgeError as e:
                raise GeneratorInvariantError(f"generator produced an invalid edge: {e}") from e
            created.append(child)

    return created


def generate_graph(
    depth: int,
    width_mean: float,
    width_std: float,
    child_mean: float,
    child_std: float,
    seed: Optional[int] = None,
    name: Optional[str] = None,
) -> GenerationResult:
    """
    Convenience wrapper building the GeneratorConfig from keyword values.

    Example:
        >>> result = generate_graph(4, 10.0, 5.0, 3.0, 2.0, seed=7)
        >>> result.graph.node_count > 0
        True
    """
    config = GeneratorConfig(
        depth=depth,
        width_mean=width_mean,
        width_std=width_std,
        child_mean=child_mean,
        child_std=child_std,
        seed=seed,
        name=name,
    )
    return generate(config)

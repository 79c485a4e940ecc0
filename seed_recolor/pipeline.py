# seed_recolor/pipeline.py
from __future__ import annotations

"""
End-to-end recolouring pipelines.

Variants:
  circles : disc mask + nearest-seed recolour (cost grows with seed count)
  voronoi : seed-coloured cell overlay + disc mask + layered compose
            (fixed number of whole-image passes)

Both return a fresh raster; the decoded original is never modified.
"""

from dataclasses import dataclass
from typing import Optional, Sequence

from .compositor import compose
from .constants import DEFAULT_ALPHA, DEFAULT_RADIUS, DEFAULT_SCALE, VARIANTS
from .core_types import Point, Seed, U8Image, assert_u8_image_rgba
from .errors import InvalidConfiguration
from .mask import build_circle_mask, build_voronoi_mask
from .recolor import recolor, validate_global_alpha
from .seed_index import SeedIndex
from .utils import debug_log, measure, warn
from .voronoi import voronoi_edges


@dataclass(frozen=True)
class PipelineConfig:
    radius: float = DEFAULT_RADIUS
    scale: int = DEFAULT_SCALE
    alpha: int = DEFAULT_ALPHA
    workers: int = 1
    rng_seed: Optional[int] = None
    variant: str = "circles"
    measure: bool = False
    debug: bool = False

    def validate(self) -> "PipelineConfig":
        if self.radius <= 0:
            raise InvalidConfiguration(f"radius must be positive, got {self.radius}")
        if self.scale <= 0:
            raise InvalidConfiguration(f"scale must be positive, got {self.scale}")
        validate_global_alpha(self.alpha)
        if self.workers < 1:
            raise InvalidConfiguration(f"workers must be >= 1, got {self.workers}")
        if self.variant not in VARIANTS:
            raise InvalidConfiguration(
                f"unknown variant {self.variant!r}; expected one of {', '.join(VARIANTS)}"
            )
        return self


def _check_inputs(original: U8Image, seeds: Sequence[Seed]) -> None:
    assert_u8_image_rgba(original)
    if len(seeds) == 0:
        raise InvalidConfiguration("at least one seed is required")
    height, width = original.shape[:2]
    outside = sum(
        1 for s in seeds if not (0 <= s.point.x < width and 0 <= s.point.y < height)
    )
    if outside:
        warn(
            f"{outside:,} of {len(seeds):,} seeds lie outside the {width}x{height} image"
        )


def run_circles(original: U8Image, seeds: Sequence[Seed], config: PipelineConfig) -> U8Image:
    """Disc mask around each seed, then nearest-seed recolour."""
    config.validate()
    _check_inputs(original, seeds)
    height, width = original.shape[:2]
    points = [s.point for s in seeds]

    index = SeedIndex(seeds)
    with measure("Draw mask", config.measure):
        mask = build_circle_mask(width, height, config.radius, points)
    if config.debug:
        debug_log(f"mask coverage: {int((mask > 0).sum()):,} of {width * height:,} px")
    with measure("Recolor pixels", config.measure):
        return recolor(original, mask, index, config.alpha, workers=config.workers)


def run_voronoi(original: U8Image, seeds: Sequence[Seed], config: PipelineConfig) -> U8Image:
    """Seed-coloured Voronoi cells gated by the disc mask, composed over the original."""
    config.validate()
    _check_inputs(original, seeds)
    height, width = original.shape[:2]
    sites = [Point(float(s.point.x), float(s.point.y)) for s in seeds]
    colours = [s.colour for s in seeds]

    with measure("Voronoi edges", config.measure):
        edges = voronoi_edges(width, height, sites, debug=config.debug)
    with measure("Draw Voronoi", config.measure):
        overlay = build_voronoi_mask(width, height, edges, colours)
    with measure("Draw mask", config.measure):
        mask = build_circle_mask(width, height, config.radius, sites)
    with measure("Compose", config.measure):
        return compose(original, overlay, mask, config.alpha)


def run_pipeline(original: U8Image, seeds: Sequence[Seed], config: PipelineConfig) -> U8Image:
    """Dispatch on config.variant."""
    config.validate()
    if config.variant == "voronoi":
        return run_voronoi(original, seeds, config)
    return run_circles(original, seeds, config)


__all__ = ["PipelineConfig", "run_circles", "run_voronoi", "run_pipeline"]

# seed_recolor/__init__.py
"""
seed_recolor package.

Purpose:
  Recolour a raster by blending it with an overlay grown from coloured seed
  points. See recolor_seeds.py for the CLI.

Public API:
  blend, scale_alpha, grayscale : integer straight-alpha colour maths.
  SeedIndex                     : nearest-seed colour lookup.
  build_circle_mask             : anti-aliased disc mask (0 = none, 255 = full).
  build_voronoi_mask            : seed-coloured Voronoi cell raster.
  voronoi_edges                 : scipy-backed Voronoi ridges with site ids.
  recolor, recolor_in_place     : threaded nearest-seed recolour.
  compose                       : layered compose of overlay, mask and original.
  run_pipeline, PipelineConfig  : end-to-end "circles" / "voronoi" variants.
  core_types                    : Point, Colour, Seed, SeedRecord, array aliases.
  errors                        : InvalidConfiguration, GeometryLookupFailure.

Quick start:
  from seed_recolor import PipelineConfig, build_seeds, load_seed_records, run_pipeline
  from seed_recolor.image_io import load_image_rgba, save_png_rgba
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import colour_math
from . import core_types
from . import errors
from . import utils

from .colour_math import blend, grayscale, scale_alpha  # noqa: E402,F401
from .compositor import compose  # noqa: E402,F401
from .core_types import Colour, Point, Seed, SeedRecord  # noqa: E402,F401
from .errors import (  # noqa: E402,F401
    GeometryLookupFailure,
    InvalidConfiguration,
    RecolorError,
)
from .mask import build_circle_mask, build_voronoi_mask  # noqa: E402,F401
from .pipeline import PipelineConfig, run_pipeline  # noqa: E402,F401
from .recolor import recolor, recolor_in_place  # noqa: E402,F401
from .seed_index import SeedIndex  # noqa: E402,F401
from .seeds import build_seeds, load_seed_records  # noqa: E402,F401
from .voronoi import VoronoiEdge, voronoi_edges  # noqa: E402,F401

__all__ = [
    "__version__",
    "colour_math",
    "core_types",
    "errors",
    "utils",
    "blend",
    "grayscale",
    "scale_alpha",
    "compose",
    "Colour",
    "Point",
    "Seed",
    "SeedRecord",
    "GeometryLookupFailure",
    "InvalidConfiguration",
    "RecolorError",
    "build_circle_mask",
    "build_voronoi_mask",
    "PipelineConfig",
    "run_pipeline",
    "recolor",
    "recolor_in_place",
    "SeedIndex",
    "build_seeds",
    "load_seed_records",
    "VoronoiEdge",
    "voronoi_edges",
]

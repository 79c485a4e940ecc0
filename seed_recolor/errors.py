# seed_recolor/errors.py
"""
Error types raised by the recolouring core.

  RecolorError          : base class for everything raised here.
  InvalidConfiguration  : bad inputs (empty seeds, bad sizes, alpha/radius out of range,
                          malformed seed files, degenerate Voronoi input).
  GeometryLookupFailure : a Voronoi site could not be matched to a seed colour.

I/O failures (missing files, undecodable images) are not wrapped; they surface
as the OSError / PIL errors raised by the loaders.
"""

from __future__ import annotations


class RecolorError(Exception):
    """Base class for recolouring errors."""


class InvalidConfiguration(RecolorError, ValueError):
    """A precondition on seeds, raster sizes or tunables does not hold."""


class GeometryLookupFailure(RecolorError, LookupError):
    """A site returned by the geometry backend has no matching seed colour."""


__all__ = ["RecolorError", "InvalidConfiguration", "GeometryLookupFailure"]

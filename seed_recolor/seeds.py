# seed_recolor/seeds.py
from __future__ import annotations

"""
Seed records and seed construction.

Functions:
  load_seed_records(path) -> List[SeedRecord]
  random_light_colour(rng) -> Colour
  build_seeds(records, scale, rng=None, colours=None, as_float=False) -> List[Seed]
  colour_by_point(seeds) -> Dict[Point, Colour]

Colours come either from a pre-generated list or from a caller-owned
numpy Generator, so a fixed RNG seed gives a reproducible run.
"""

import json
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .constants import LIGHT_CHANNEL_MAX, LIGHT_CHANNEL_MIN
from .core_types import Colour, Number, Point, Seed, SeedRecord
from .errors import InvalidConfiguration


def _finite(value: Number, field: str, index: int) -> Number:
    try:
        finite = math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        finite = False
    if not finite:
        raise InvalidConfiguration(f"record {index}: '{field}'={value!r} is not finite")
    return value


def _parse_number(value: Any, field: str, index: int) -> Number:
    if isinstance(value, bool):
        raise InvalidConfiguration(f"record {index}: '{field}' is not a number")
    if isinstance(value, (int, float)):
        return _finite(value, field, index)
    if isinstance(value, str):
        text = value.strip()
        number: Number
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                raise InvalidConfiguration(
                    f"record {index}: '{field}'={value!r} is not a number"
                ) from None
        return _finite(number, field, index)
    raise InvalidConfiguration(f"record {index}: '{field}' is not a number")


def parse_seed_records(payload: Any) -> List[SeedRecord]:
    """Validate decoded JSON: a list of {"id", "x", "y"} objects."""
    if not isinstance(payload, list):
        raise InvalidConfiguration("seed file must contain a JSON array")
    records: List[SeedRecord] = []
    for i, item in enumerate(payload):
        if not isinstance(item, dict):
            raise InvalidConfiguration(f"record {i}: expected an object")
        missing = [k for k in ("x", "y") if k not in item]
        if missing:
            raise InvalidConfiguration(f"record {i}: missing {', '.join(missing)}")
        records.append(
            SeedRecord(
                id=str(item.get("id", i)),
                x=_parse_number(item["x"], "x", i),
                y=_parse_number(item["y"], "y", i),
            )
        )
    return records


def load_seed_records(path: Path) -> List[SeedRecord]:
    """
    Read seed records from a JSON file.

    OSError (missing file, permissions) propagates unchanged; undecodable
    bytes, malformed JSON or records raise InvalidConfiguration.
    """
    with open(path, "rb") as fh:
        raw = fh.read()
    try:
        payload = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise InvalidConfiguration(f"{path}: not UTF-8 text ({e})") from e
    except json.JSONDecodeError as e:
        raise InvalidConfiguration(f"{path}: invalid JSON ({e})") from e
    return parse_seed_records(payload)


def random_light_colour(rng: np.random.Generator) -> Colour:
    """Opaque colour with every channel in [127, 255]."""
    r, g, b = rng.integers(LIGHT_CHANNEL_MIN, LIGHT_CHANNEL_MAX + 1, size=3).tolist()
    return Colour(int(r), int(g), int(b), 255)


def build_seeds(
    records: Sequence[SeedRecord],
    scale: Number = 1,
    rng: Optional[np.random.Generator] = None,
    colours: Optional[Sequence[Colour]] = None,
    as_float: bool = False,
) -> List[Seed]:
    """
    Scale record coordinates and bind a colour to each.

    Args:
      records  : raw records, in order; order defines site ids
      scale    : coordinate multiplier
      rng      : source for random light colours (used when colours is None)
      colours  : pre-generated colours, one per record
      as_float : keep coordinates as floats (Voronoi variant) instead of ints
    """
    if len(records) == 0:
        raise InvalidConfiguration("at least one seed record is required")
    if scale <= 0:
        raise InvalidConfiguration(f"scale must be positive, got {scale}")
    if colours is not None and len(colours) != len(records):
        raise InvalidConfiguration(
            f"got {len(colours)} colours for {len(records)} seed records"
        )
    if colours is None and rng is None:
        rng = np.random.default_rng()

    seeds: List[Seed] = []
    for i, rec in enumerate(records):
        if as_float:
            point = Point(float(rec.x) * scale, float(rec.y) * scale)
        else:
            point = Point(int(rec.x) * int(scale), int(rec.y) * int(scale))
        colour = colours[i] if colours is not None else random_light_colour(rng)
        seeds.append(Seed(point=point, colour=colour, site_id=i))
    return seeds


def colour_by_point(seeds: Sequence[Seed]) -> Dict[Point, Colour]:
    """Exact coordinate -> colour map. Later duplicates do not override earlier ones."""
    out: Dict[Point, Colour] = {}
    for s in seeds:
        out.setdefault(s.point, s.colour)
    return out


__all__ = [
    "parse_seed_records",
    "load_seed_records",
    "random_light_colour",
    "build_seeds",
    "colour_by_point",
]

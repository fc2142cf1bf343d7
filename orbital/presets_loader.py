#!/usr/bin/env python3
"""
World JSON loading utilities.

This module defines a simple JSON schema and loader for world files (templates/*.json).

Schema
======
{
  "name": "Human-friendly world name",
  "description": "Optional description",
  "seconds_per_second": 3600,        # optional initial time scale
  "stars": [
    {
      "name": "Sun",
      "mass": 1.989e30,               # kg
      "diameter": 1.3927e9,           # m
      "color": [255, 204, 0],         # 0..255 RGB, or 0..1 RGB floats / RGBA
      "radiance": 2.009e7,            # optional
      "position": [0.0, 0.0]          # optional, m; stars never move
    }
  ],
  "planets": [
    {
      "name": "Earth",
      "mass": 5.972e24,
      "diameter": 1.2742e7,
      "height": 149598023,            # orbital radius in km
      "color": [100, 149, 237],
      "phase": 0.5,                   # optional, angle = pi * phase
      "parent": "Sun",                # optional, defaults to the first star
      "children": [ ...same shape as planets, without "parent"... ]
    }
  ]
}

Any malformed record raises ConfigurationError: a world is either loaded completely
or not at all.
"""
import json
import logging
import math
import os
from typing import Any, List, Optional, Tuple

from .constants import ANCHOR_RADIANCE, DEFAULT_BODY_COLOR, KM
from .data_models import BodyParams, Color, WorldParams
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "templates")
DEFAULT_TEMPLATE = "sol.json"


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except OSError as exc:
    raise ConfigurationError(f"cannot read world file {path}: {exc}") from exc
  except json.JSONDecodeError as exc:
    raise ConfigurationError(f"world file {path} is not valid JSON: {exc}") from exc
  if not isinstance(data, dict):
    raise ConfigurationError(f"world file {path} must contain a JSON object")
  return data


def _coerce_color(c: Any) -> Color:
  if c is None:
    return DEFAULT_BODY_COLOR
  if not isinstance(c, (list, tuple)) or len(c) not in (3, 4):
    raise ConfigurationError(f"color must be a list of 3 or 4 numbers, got {c!r}")
  try:
    channels = [float(c[0]), float(c[1]), float(c[2])]
  except (TypeError, ValueError) as exc:
    raise ConfigurationError(f"color must be a list of 3 or 4 numbers, got {c!r}") from exc
  # RGBA lists and lists with any float in them are 0..1 colors when every channel fits
  unit_scale = len(c) == 4 or any(isinstance(v, float) for v in c)
  if unit_scale and all(0.0 <= v <= 1.0 for v in channels):
    channels = [v * 255.0 for v in channels]
  r, g, b = (int(round(max(0.0, min(255.0, v)))) for v in channels)
  return (r, g, b)


def _number(record: dict, key: str, where: str, default: Optional[float] = None, positive: bool = False) -> float:
  if key not in record:
    if default is None:
      raise ConfigurationError(f"{where}: missing required field {key!r}")
    return default
  value = record[key]
  if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
    raise ConfigurationError(f"{where}: {key!r} must be a finite number, got {value!r}")
  if positive and value <= 0:
    raise ConfigurationError(f"{where}: {key!r} must be positive, got {value!r}")
  return float(value)


def _vector(record: dict, key: str, where: str) -> Tuple[float, float]:
  value = record.get(key, [0.0, 0.0])
  if not isinstance(value, (list, tuple)) or len(value) != 2:
    raise ConfigurationError(f"{where}: {key!r} must be a pair of numbers, got {value!r}")
  return (_number({"x": value[0]}, "x", where), _number({"y": value[1]}, "y", where))


def _parse_body(record: Any, where: str, root: bool) -> BodyParams:
  if not isinstance(record, dict):
    raise ConfigurationError(f"{where}: body must be a JSON object, got {record!r}")
  name = record.get("name")
  if not isinstance(name, str) or not name:
    raise ConfigurationError(f"{where}: missing body name")
  where = f"{where} ({name})"

  params = BodyParams(
    name=name,
    mass=_number(record, "mass", where, positive=True),
    size=_number(record, "diameter", where, positive=True),
    color=_coerce_color(record.get("color")),
  )
  if root:
    params.position = _vector(record, "position", where)
    if _vector(record, "velocity", where) != (0.0, 0.0):
      raise ConfigurationError(f"{where}: stars are anchored and cannot have a velocity")
    params.radiance = _number(record, "radiance", where, default=ANCHOR_RADIANCE)
    return params

  params.height = _number(record, "height", where, positive=True) * KM
  params.radiance = _number(record, "radiance", where, default=0.0)
  if "phase" in record:
    params.phase = _number(record, "phase", where)
  parent = record.get("parent")
  if parent is not None and not isinstance(parent, str):
    raise ConfigurationError(f"{where}: 'parent' must be a star name, got {parent!r}")
  params.parent = parent

  children = record.get("children") or []
  if not isinstance(children, list):
    raise ConfigurationError(f"{where}: 'children' must be a list")
  params.children = [_parse_body(c, f"{where}.children[{i}]", root=False) for i, c in enumerate(children)]
  return params


def parse_world_params(data: dict, default_name: str = "World") -> WorldParams:
  """Validate a decoded world document and turn it into WorldParams."""
  stars = data.get("stars", [])
  planets = data.get("planets", [])
  if not isinstance(stars, list) or not isinstance(planets, list):
    raise ConfigurationError("'stars' and 'planets' must be lists")
  sps = data.get("seconds_per_second")
  if sps is not None and (isinstance(sps, bool) or not isinstance(sps, int) or sps < 1):
    raise ConfigurationError(f"'seconds_per_second' must be a positive integer, got {sps!r}")

  return WorldParams(
    stars=[_parse_body(s, f"stars[{i}]", root=True) for i, s in enumerate(stars)],
    planets=[_parse_body(p, f"planets[{i}]", root=False) for i, p in enumerate(planets)],
    name=data.get("name") or default_name,
    description=data.get("description") or "",
    seconds_per_second=sps,
  )


def load_world_params(path: str) -> WorldParams:
  """Load and validate a world JSON file."""
  data = _read_json(path)
  params = parse_world_params(data, default_name=os.path.splitext(os.path.basename(path))[0])
  logger.info("loaded world %r from %s (%d bodies)", params.name, path, params.count())
  return params


def list_templates() -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for bundled world files."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(TEMPLATES_DIR):
    return items
  for fn in sorted(os.listdir(TEMPLATES_DIR)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      display = _read_json(os.path.join(TEMPLATES_DIR, fn)).get("name") or os.path.splitext(fn)[0]
    except ConfigurationError:
      logger.warning("skipping unreadable template %s", fn)
      continue
    items.append((fn, display))
  return items


def template_path(file_name: str = DEFAULT_TEMPLATE) -> str:
  """Absolute path of a bundled world file."""
  return os.path.join(TEMPLATES_DIR, file_name)

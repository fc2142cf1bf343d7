#!/usr/bin/env python3
"""
Exception types raised by the orbital simulator.

- ConfigurationError: bad body parameters, unknown parent ids or an invalid world
  file. Raised while the world is being built, before any stepping happens.
- NumericalDegeneracy: two positions too close for a direction or an orbital
  speed to be defined.
"""


class OrbitalError(Exception):
    """Base class for all simulator errors."""


class ConfigurationError(OrbitalError, ValueError):
    """Malformed or inconsistent world/body configuration."""


class NumericalDegeneracy(OrbitalError, ArithmeticError):
    """Zero or near-zero separation where a direction or speed is required."""

    def __init__(self, message: str, separation: float = 0.0):
        super().__init__(message)
        self.separation = separation

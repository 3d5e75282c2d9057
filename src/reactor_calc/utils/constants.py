"""Physical constants used across ReactorCalc."""

from __future__ import annotations

# Universal gas constant (J/(mol*K))
R_GAS: float = 8.314

# Mass-basis normalization of the lumped heat balance (kg/m^3)
RHO_REF: float = 1000.0

# Residence measures are normalized from minutes to hours in the heat balance
MINUTES_PER_HOUR: float = 60.0

# Number of equal intervals sampled along a packed bed
PROFILE_INTERVALS: int = 10

__all__ = ["R_GAS", "RHO_REF", "MINUTES_PER_HOUR", "PROFILE_INTERVALS"]

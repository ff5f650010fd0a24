"""Configuration package for huntsim.

Constants are grouped by concern (agent decision cycle, evolution) and the
dataclass configs in ``simulation_config`` bundle them into per-run settings.
"""

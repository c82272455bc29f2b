"""Bear planner core: occupancy, territory, coverage, proximity, naming."""

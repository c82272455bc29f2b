"""Persistence for planner configurations."""

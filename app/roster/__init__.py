"""Roster core: rank hierarchy, process catalogue, rest days, ranking and history."""

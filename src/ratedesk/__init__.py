"""Seeksy ad rate desk: scenario-based CPM pricing for sellable ad inventory."""

"""Household rota service: duty scheduling for a small shared household."""

"""Tracker services: entry store, aggregates, leaderboard and remote sync."""

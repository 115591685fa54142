"""Workout logger API: webhook that writes workout sessions to Notion."""

"""
FoxESS telemetry bot package.

Answers Telegram menu actions with real-time, energy, status and daily
history reports fetched from the FoxESS Cloud Open API with signed requests.

CHANGELOG:
- 2026-10-19: Initial creation (STORY-001)

TODO:
- None
"""

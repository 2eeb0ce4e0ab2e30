"""API module for CBMS Events.

API layer:
- Validates inputs, serves controller snapshots and analytics
- Returns payloads for UI
- Forbidden: sync state mutation outside the controller's own triggers
"""

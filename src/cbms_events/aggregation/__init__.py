"""Aggregation module for dashboard analytics.

- Consumes read-only participant snapshots, produces AnalyticsSummary
- Forbidden: store access, sync state mutation, collaborator calls
"""

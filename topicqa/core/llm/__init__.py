"""Inference integration layer.

Kept small on purpose:
- One long-lived client, created at startup and closed at shutdown.
- No prompt/output logging.
- Configurable via environment variables.
"""

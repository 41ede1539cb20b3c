"""Audit trail (read side).

Audit log entries are written by the services that perform mutations; this
module queries them and renders the activity log with its detail overlay.
"""

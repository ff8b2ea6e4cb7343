"""Middleware for the control panel."""

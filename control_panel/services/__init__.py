"""Service layer for the control panel."""

"""Taskflow: role-based access control and configurable task workflow."""

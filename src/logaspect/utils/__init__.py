"""Shared utilities for logaspect."""

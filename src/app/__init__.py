"""Harness process entry point and in-process publishers."""

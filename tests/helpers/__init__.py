"""Test helpers for fsmerger."""

"""Allure reporting and artifact capture."""

from .capture import ArtifactCapture, generate_test_summary

__all__ = ["ArtifactCapture", "generate_test_summary"]

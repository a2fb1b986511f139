"""Crawler applications."""

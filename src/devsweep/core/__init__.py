"""Scan, detect, resolve and clean pipeline."""

"""Artifact deploy module: scan, normalise, upload and register a build run."""

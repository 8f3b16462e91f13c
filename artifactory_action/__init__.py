"""Publish a directory of build outputs to Artifactory as a build run."""

__version__ = "0.1.0"

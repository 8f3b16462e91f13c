from .artifactory import HttpArtifactory

__all__ = ["HttpArtifactory"]

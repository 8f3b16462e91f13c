from .artifacts import DeployableArtifactsSigner, SignatureArtifact, is_signature_file
from .gpg import ArtifactSigner, GpgSigner

__all__ = [
    "ArtifactSigner",
    "DeployableArtifactsSigner",
    "GpgSigner",
    "SignatureArtifact",
    "is_signature_file",
]

from .categorizer import batch_by_category, category_of
from .deployer import Deployer
from .manifest import BuildModulesGenerator
from .normalizer import PathNormalizer, canonical_path
from .uploader import ArtifactUploader

__all__ = [
    "ArtifactUploader",
    "BuildModulesGenerator",
    "Deployer",
    "PathNormalizer",
    "batch_by_category",
    "canonical_path",
    "category_of",
]

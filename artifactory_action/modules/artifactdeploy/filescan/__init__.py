from .scanner import DirectoryScanner, is_checksum_file, is_metadata_file

__all__ = ["DirectoryScanner", "is_checksum_file", "is_metadata_file"]

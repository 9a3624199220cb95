"""Upload services module."""
from .file_service import FileValidator, AsyncFileReader
from .part_service import PartFileWriter, part_file_name, PART_PREFIX

__all__ = [
    'FileValidator',
    'AsyncFileReader',
    'PartFileWriter',
    'part_file_name',
    'PART_PREFIX',
]

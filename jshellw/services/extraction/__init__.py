"""Archive extraction and classpath composition services."""

from .classpath import ClasspathComposer
from .extractor import ArchiveExtractor

__all__ = ["ArchiveExtractor", "ClasspathComposer"]

"""Document source adapters."""

from .yaml_source import IncludeResolver, YamlDocumentSource, flatten_documents

__all__ = ["IncludeResolver", "YamlDocumentSource", "flatten_documents"]

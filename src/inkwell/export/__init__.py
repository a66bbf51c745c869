"""Export layer — static output generation.

Writes every post to HTML through the content cache, plus a post
listing and sitemap.
"""

from inkwell.export.static import ExportedFile, ExportResult, StaticExporter

__all__ = ["ExportResult", "ExportedFile", "StaticExporter"]

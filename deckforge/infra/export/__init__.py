"""Export artifacts: slide archives and debug logs."""

from .archive import SlideArchive, build_slide_archive
from .log_export import log_export_filename, render_log_export

__all__ = ["SlideArchive", "build_slide_archive", "log_export_filename", "render_log_export"]

"""
Public API

Modules:
    scanner: PIIScanner, the document scan entry point
    convenience: One-call helpers for scripts and the REPL
"""

from pii_resolver.api.convenience import resolve_file, resolve_results, scan_directory
from pii_resolver.api.scanner import PIIScanner, build_extraction_results

__all__ = ["PIIScanner", "build_extraction_results", "scan_directory", "resolve_results", "resolve_file"]

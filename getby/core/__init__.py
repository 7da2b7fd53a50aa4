"""
Core package for the selector compiler.
Lightweight package init to avoid import cycles.

Consumers should import submodules directly, e.g.:
  from getby.core.query_loader import load_query_files, compile_query_file
"""

__all__: list[str] = []

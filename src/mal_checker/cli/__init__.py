"""
MAL Checker Command-Line Interface
==================================

- **malcheck**: check a MAL source file and write a log report

The tool is a Click-based CLI application; see malcheck.py.
"""

__all__ = ["malcheck"]

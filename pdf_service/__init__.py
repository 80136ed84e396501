"""
PDF Service - Resume export over HTTP.

Prints the HTML resume renderer's output to PDF with Playwright/Chromium
and serves DOCX exports. Kept separate from the library so the browser
dependency only lives where PDFs are produced.
"""

__version__ = "0.1.0"

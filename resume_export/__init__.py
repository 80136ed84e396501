"""
Resume export: turns a resume data model into print-ready HTML/PDF and DOCX.

Packages:
- resume_export.resume: data model, shared render model, HTML and DOCX renderers
- resume_export.api: client for the PDF service
- resume_export.common: config, logging and error handling
"""

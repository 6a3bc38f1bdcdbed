"""
HireMe - Structured resume editor with AI-assisted drafting and job matching

Users fill structured resume fields, preview them in one of three visual
templates, and optionally ask a hosted language model to draft a summary,
rewrite a bullet, or score the resume against a job description.

Architecture:
- Editing Context: Resume data model, persistent store, section editors
- Templating Context: HTML template system (classic, modern, minimal)
- Analysis Context: Prompt building and hosted model calls with fallbacks
- Rendering Context: Standalone page export for browser print/PDF
"""

__version__ = "0.1.0"

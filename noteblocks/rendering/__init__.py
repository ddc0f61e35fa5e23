"""Rendering support for note content, transport-agnostic.

Contains:
- renderer_iface: the attachment lookup Protocol
- classifier: attachment -> render variant (url refinement)
- attachments: per-variant HTML strategies and the missing placeholder
- renderer: pure HTML renderer for segments and structured blocks (fragment + page)
"""

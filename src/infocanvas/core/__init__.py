"""
Core modules for infocanvas.

This package contains the session logic for:
- Configuration management
- Reference images and presets
- Canvas geometry, zoom and region selection
- Request composition and model clients
- Generation orchestration, history and export
"""

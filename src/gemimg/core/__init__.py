"""
Core modules for gemimg.

This package contains the core logic for:
- Configuration management
- Request body construction and model resolution
- HTTP transport and response extraction
- Model discovery
- Generate, edit and reference composition
"""

"""Domain layer: status codec, checklist scanning, and transition rules.

This layer depends only on the standard library.
It must never import from services, infrastructure, commands, or config.
"""

"""Infrastructure layer: file system access, vault, watcher, and templates.

This layer stands in for the host application: it reads note bodies,
renames files, and reports note lifecycle events.
"""

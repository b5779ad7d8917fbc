"""
Core Package.

Contains the traversal engine:
- Tagged node representation and the tag classifier
- Ancestor paths
- Structural traversers and the hook protocol (walker builder)
- Errors and structural diagnostics
"""

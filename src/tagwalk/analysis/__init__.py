"""
Static Analysis Package.

Collaborators built on the walker's public API.

Modules:
    - ``scope``: A stack of lexical frames mapping names to binder nodes.
    - ``identifiers``: Scope-aware walking classifying identifiers as free or bound.
"""

from tagwalk.analysis.identifiers import IdentifierHooks, free_names, walk_identifiers
from tagwalk.analysis.scope import Scope

__all__ = ["IdentifierHooks", "Scope", "free_names", "walk_identifiers"]

"""
Cell Services

Concrete cell implementations and their constructors.
"""

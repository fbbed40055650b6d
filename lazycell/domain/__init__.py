"""
Lazy Value Domain

Interfaces and value objects shared by all cell implementations.
"""

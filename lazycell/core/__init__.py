"""
Core Module

Configuration, logging, telemetry and load contexts.
"""

"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Named constants and rendering defaults
- exceptions: Custom exception hierarchy
- geometry: Bearing, destination and local-projection helpers
"""

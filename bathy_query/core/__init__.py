"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Service endpoint, projection and scheduling constants
- exceptions: Custom exception hierarchy
"""

"""Core utilities and shared infrastructure.

- config: Configuration loading and validation
- constants: Status colours, messages, thresholds, job defaults
- exceptions: Custom exception hierarchy
"""

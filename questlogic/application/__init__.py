"""
Application Layer

Use cases orchestrating the scoring engine and the prediction event
repository, plus the DTOs they exchange with the presentation layer.
"""

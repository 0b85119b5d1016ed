"""
Presentation Layer

FastAPI routers translating HTTP requests into use case calls.
"""

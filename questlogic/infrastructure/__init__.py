"""
Infrastructure Layer

MongoDB persistence and health probing behind the domain ports.
"""

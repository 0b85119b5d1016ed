"""
Quest Logic Oracle

Behavioral action-probability scoring with a verifiable prediction event log.
"""

__version__ = "1.0.0"

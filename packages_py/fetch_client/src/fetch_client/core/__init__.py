"""
Core HTTP client and request building.
"""

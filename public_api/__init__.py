"""
Public API gateway over the listing and user services.
"""

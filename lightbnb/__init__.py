"""
LightBnB data-access layer.
Parameterized queries for users, properties and reservations over an injected store handle.
"""

__version__ = "1.0.0"

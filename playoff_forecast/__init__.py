"""
Fantasy Playoff Forecast

Playoff, semifinal, finals and championship odds for fantasy leagues.
"""

__version__ = "1.0.0"

"""
Digital Skills E-Portfolio core.

Tracks trainee doctors' supervised procedures and computes curriculum
progress from verified cases.
"""

from eportfolio.portfolio_service import PortfolioService, create_service

__all__ = ["PortfolioService", "create_service"]

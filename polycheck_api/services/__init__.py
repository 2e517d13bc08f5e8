"""Service layer package"""

from .grading_service import GradingService, get_grading_service

__all__ = ["GradingService", "get_grading_service"]

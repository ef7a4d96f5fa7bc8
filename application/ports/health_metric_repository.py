"""
Health Metric Repository Interface (Port).

Read access to synced health metrics. Used by the HealthTrendService for
trend and weekly summary calculations.
"""
from datetime import datetime
from typing import List, Optional, Protocol, Sequence

from domain.models import HealthMetric, MetricType


class HealthMetricRepository(Protocol):
    """
    Abstract interface for health metric data access.
    """

    def list_for_user(
        self,
        user_id: str,
        *,
        metric_types: Optional[Sequence[MetricType]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[HealthMetric]:
        """
        Get a user's health metrics.

        Args:
            user_id: User ID
            metric_types: Restrict to these metric types, or None for all
            start: Only records with recorded_at >= start
            end: Only records with recorded_at < end

        Returns:
            Records ordered by recorded_at ascending
        """
        ...

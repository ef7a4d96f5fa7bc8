"""
Supabase Health Metric Repository Implementation.

Reads the health_metrics table populated by the health-platform sync.
"""
from datetime import datetime
from typing import List, Optional, Sequence
import logging

from supabase import Client

from domain.converters import db_row_to_health_metric
from domain.models import HealthMetric, MetricType

logger = logging.getLogger(__name__)


class SupabaseHealthMetricRepository:
    """
    Supabase implementation of HealthMetricRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def list_for_user(
        self,
        user_id: str,
        *,
        metric_types: Optional[Sequence[MetricType]] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[HealthMetric]:
        try:
            query = self._client.table("health_metrics") \
                .select("id, user_id, metric_type, value, unit, date") \
                .eq("user_id", user_id)
            if metric_types:
                query = query.in_("metric_type", [t.value for t in metric_types])
            if start is not None:
                query = query.gte("date", start.isoformat())
            if end is not None:
                query = query.lt("date", end.isoformat())
            result = query.order("date").execute()
        except Exception as e:
            logger.exception(f"Error fetching health metrics for user {user_id}: {e}")
            return []

        metrics = []
        for row in result.data or []:
            try:
                metrics.append(db_row_to_health_metric(row))
            except ValueError as e:
                logger.warning(f"Skipping health metric {row.get('id')}: {e}")
        return metrics

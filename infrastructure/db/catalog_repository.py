"""
Supabase implementation of ExerciseCatalogRepository.

Catalog entries are reference data shared by all users, so fetched entries
are cached in memory for the lifetime of the repository.
"""
import logging
from typing import Dict, Iterable, List

from supabase import Client

from domain.converters import db_row_to_catalog_entry
from domain.models import ExerciseCatalogEntry

logger = logging.getLogger(__name__)


class SupabaseExerciseCatalogRepository:
    """
    Supabase implementation of ExerciseCatalogRepository protocol.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected, not global)
        """
        self._client = client
        self._cache: Dict[str, ExerciseCatalogEntry] = {}

    def get_many(self, exercise_ids: Iterable[str]) -> List[ExerciseCatalogEntry]:
        ids = list(dict.fromkeys(exercise_ids))
        missing = [i for i in ids if i not in self._cache]

        if missing:
            try:
                result = self._client.table("exercise_catalog") \
                    .select("*") \
                    .in_("id", missing) \
                    .execute()
                for row in result.data or []:
                    entry = db_row_to_catalog_entry(row)
                    self._cache[entry.id] = entry
            except Exception as e:
                logger.exception(f"Error fetching {len(missing)} catalog entries: {e}")

        return [self._cache[i] for i in ids if i in self._cache]

# recipebook/app/infra/db/base.py
"""
Abstract repository for generation audit storage.
Keeps the orchestrator independent of the Supabase client.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from recipebook.app.domain.models import GenerationErrorRecord, GenerationRecord


class GenerationRepository(ABC):
    """
    Write paths for the `generation` and `generation_errors` tables.

    Implementations:
    - SupabaseGenerationRepository
    """

    @abstractmethod
    def create_generation(self, record: GenerationRecord) -> str:
        """
        Insert a generation row.

        Returns:
            The server-generated id of the inserted row

        Raises:
            GenerationPersistenceError: If the insert failed or returned no row
        """
        pass

    @abstractmethod
    def log_generation_error(self, record: GenerationErrorRecord) -> None:
        """
        Insert a generation_errors row.
        """
        pass

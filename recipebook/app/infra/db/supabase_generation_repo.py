from __future__ import annotations

import logging

from postgrest.exceptions import APIError
from supabase import Client

from recipebook.app.domain.errors import GenerationPersistenceError
from recipebook.app.domain.models import GenerationErrorRecord, GenerationRecord
from recipebook.app.infra.db.base import GenerationRepository

logger = logging.getLogger(__name__)

CREATE_GENERATION = "create generation record"
LOG_GENERATION_ERROR = "log generation error"


def _api_error_message(error: APIError) -> str:
    return getattr(error, "message", None) or str(error) or "Unknown error"


class SupabaseGenerationRepository(GenerationRepository):
    GENERATION_TABLE = "generation"
    ERRORS_TABLE = "generation_errors"

    def __init__(self, client: Client):
        self._client = client

    def create_generation(self, record: GenerationRecord) -> str:
        try:
            result = self._client.table(self.GENERATION_TABLE).insert(record.to_row()).execute()
        except APIError as error:
            raise GenerationPersistenceError(CREATE_GENERATION, _api_error_message(error)) from error
        except (ConnectionError, TimeoutError) as error:
            logger.error("Network error inserting generation: %s", error)
            raise GenerationPersistenceError(CREATE_GENERATION, str(error)) from error

        rows = result.data or []
        if not rows or not rows[0].get("id"):
            raise GenerationPersistenceError(CREATE_GENERATION, "no row returned")

        generation_id = str(rows[0]["id"])
        logger.info("Created generation record: id=%s, user=%s", generation_id, record.user_id)
        return generation_id

    def log_generation_error(self, record: GenerationErrorRecord) -> None:
        try:
            self._client.table(self.ERRORS_TABLE).insert(record.to_row()).execute()
        except APIError as error:
            raise GenerationPersistenceError(LOG_GENERATION_ERROR, _api_error_message(error)) from error

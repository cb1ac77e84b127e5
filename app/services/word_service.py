"""
Words API — Word Service
==========================

What:  The two operations on the words collection: list and add.
Why:   Keeps SQL and storage error translation out of the route handlers.
How:   Each operation is one statement on the injected session.
Who:   Called by route handlers in app.routes.words.

Design Decision:
    WordService is stateless: it receives the db session for each call.
    The pool behind the session is the single process-wide engine from
    app.database; this class never touches it directly.

Error Handling:
    Writes commit inside the operation, before the route returns.
    Any SQLAlchemyError is logged and re-raised as StorageError. So is
    OSError: asyncpg reports a refused or unresolvable host that way, and
    SQLAlchemy does not wrap it. There is no retry and no distinction
    between causes.
"""

import logging
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import StorageError
from app.models.word import Word
from app.schemas.word import WordCreate, WordCreatedResponse, WordResponse

logger = logging.getLogger(__name__)


class WordService:
    """Business logic for the words collection."""

    async def list_words(self, db: AsyncSession) -> List[WordResponse]:
        """
        Return every row of the words table.

        Query:
            SELECT id, chinese, pinyin, english FROM words
            No ORDER BY: callers must not rely on row order.

        Returns:
            List of WordResponse, empty when the table has no rows.

        Raises:
            StorageError: Connection or query failure
        """
        try:
            result = await db.execute(select(Word))
            words = result.scalars().all()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error listing words: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not retrieve words.",
                context={"operation": "list_words", "error_type": type(e).__name__},
            ) from e

        return [WordResponse.model_validate(word) for word in words]

    async def add_word(self, db: AsyncSession, payload: WordCreate) -> WordCreatedResponse:
        """
        Insert one word.

        Query:
            INSERT INTO words (chinese, pinyin, english)
            VALUES (:chinese, :pinyin, :english) RETURNING id

        The insert is committed here, so a 201 is only ever returned for a
        durable row. Values are bound parameters, never interpolated. A field missing from
        the payload is bound as NULL and rejected by the NOT NULL constraint.
        Duplicate triples are inserted as separate rows.

        Raises:
            StorageError: Connection failure or constraint violation
        """
        statement = (
            insert(Word)
            .values(
                chinese=payload.chinese,
                pinyin=payload.pinyin,
                english=payload.english,
            )
            .returning(Word.id)
        )
        try:
            result = await db.execute(statement)
            word_id = result.scalar_one()
            # Committed before the 201 is built; nothing is left for after the response
            await db.commit()
        except (SQLAlchemyError, OSError) as e:
            logger.error("Database error adding word: %s", str(e), exc_info=True)
            raise StorageError(
                message="Could not add the word.",
                context={"operation": "add_word", "error_type": type(e).__name__},
            ) from e

        logger.debug("Inserted word id=%s", word_id)
        return WordCreatedResponse()


# ── Singleton Instance ────────────────────────────────────────────────────
word_service = WordService()

"""
Words API — Word Service Unit Tests
=====================================

Uses mock DB sessions (no real DB).

What we test:
    ✅ list_words maps rows to WordResponse, empty table → []
    ✅ add_word binds all three fields and commits before returning
    ✅ a failed commit is a StorageError, never a success body
    ✅ storage failures surface as StorageError with the cause chained
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import StorageError
from app.schemas.word import WordCreate
from app.services.word_service import WordService


def make_row(word_id, chinese, pinyin, english):
    row = MagicMock()
    row.id = word_id
    row.chinese = chinese
    row.pinyin = pinyin
    row.english = english
    return row


class TestListWords:

    def setup_method(self):
        self.service = WordService()

    @pytest.mark.asyncio
    async def test_list_words_empty(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_words(mock_db_session)

        assert result == []
        mock_db_session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_list_words_with_rows(self, mock_db_session):
        rows = [
            make_row(1, "你好", "nǐ hǎo", "hello"),
            make_row(2, "谢谢", "xièxie", "thank you"),
        ]
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = mock_result

        result = await self.service.list_words(mock_db_session)

        assert [w.id for w in result] == [1, 2]
        assert result[1].english == "thank you"
        assert result[0].model_dump() == {
            "id": 1, "chinese": "你好", "pinyin": "nǐ hǎo", "english": "hello",
        }

    @pytest.mark.asyncio
    async def test_list_words_has_no_order_by(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalars.return_value.all.return_value = []
        mock_db_session.execute.return_value = mock_result

        await self.service.list_words(mock_db_session)

        statement = mock_db_session.execute.await_args.args[0]
        assert "ORDER BY" not in str(statement).upper()

    @pytest.mark.asyncio
    async def test_list_words_connection_error(self, mock_db_session):
        mock_db_session.execute.side_effect = OperationalError(
            "SELECT", {}, Exception("connection refused")
        )

        with pytest.raises(StorageError) as exc_info:
            await self.service.list_words(mock_db_session)

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert exc_info.value.context["operation"] == "list_words"

    @pytest.mark.asyncio
    async def test_list_words_refused_socket(self, mock_db_session):
        mock_db_session.execute.side_effect = ConnectionRefusedError(111, "Connect call failed")

        with pytest.raises(StorageError):
            await self.service.list_words(mock_db_session)


class TestAddWord:

    def setup_method(self):
        self.service = WordService()

    @pytest.mark.asyncio
    async def test_add_word_success(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one.return_value = 7
        mock_db_session.execute.return_value = mock_result

        result = await self.service.add_word(
            mock_db_session,
            WordCreate(chinese="你好", pinyin="nǐ hǎo", english="hello"),
        )

        assert result.model_dump() == {"status": "success", "message": "Word added."}
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_add_word_binds_three_parameters(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock()

        await self.service.add_word(
            mock_db_session,
            WordCreate(chinese="猫", pinyin="māo", english="cat"),
        )

        statement = mock_db_session.execute.await_args.args[0]
        params = statement.compile().params
        assert params == {"chinese": "猫", "pinyin": "māo", "english": "cat"}

    @pytest.mark.asyncio
    async def test_add_word_missing_field_binds_null(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock()

        await self.service.add_word(
            mock_db_session,
            WordCreate(chinese="猫", english="cat"),
        )

        statement = mock_db_session.execute.await_args.args[0]
        assert statement.compile().params["pinyin"] is None

    @pytest.mark.asyncio
    async def test_add_word_constraint_violation(self, mock_db_session):
        mock_db_session.execute.side_effect = IntegrityError(
            "INSERT", {}, Exception("NOT NULL constraint failed: words.pinyin")
        )

        with pytest.raises(StorageError) as exc_info:
            await self.service.add_word(mock_db_session, WordCreate(chinese="猫", english="cat"))

        assert exc_info.value.context == {"operation": "add_word", "error_type": "IntegrityError"}
        # Driver text stays out of the user-facing message
        assert "NOT NULL" not in exc_info.value.message
        mock_db_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_add_word_commit_failure(self, mock_db_session):
        mock_db_session.execute.return_value = MagicMock()
        mock_db_session.commit.side_effect = OperationalError(
            "COMMIT", {}, Exception("server closed the connection unexpectedly")
        )

        with pytest.raises(StorageError) as exc_info:
            await self.service.add_word(
                mock_db_session,
                WordCreate(chinese="猫", pinyin="māo", english="cat"),
            )

        assert isinstance(exc_info.value.__cause__, OperationalError)
        assert exc_info.value.context["operation"] == "add_word"

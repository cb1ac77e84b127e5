"""
Words API — Word SQLAlchemy Model
===================================

What:  ORM model representing the `words` table.
Why:   Maps rows to Python objects and carries the column constraints that are
       the only input validation this service has.
Who:   Used by WordService and by create_schema().

Table Design:
    - id: auto-incrementing integer primary key, assigned by the database
    - chinese / pinyin / english: VARCHAR(255) NOT NULL
    - no other indexes, no uniqueness on the text columns (duplicates allowed)
    Rows are never updated or deleted.
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base

TEXT_MAX_LENGTH = 255


class Word(Base):
    """A vocabulary entry: source-language text, its transcription, its translation."""

    __tablename__ = "words"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    # Source-language text (e.g. 你好)
    chinese: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    # Phonetic transcription (e.g. nǐ hǎo)
    pinyin: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    # Target-language text (e.g. hello)
    english: Mapped[str] = mapped_column(String(TEXT_MAX_LENGTH), nullable=False)

    def __repr__(self) -> str:
        return f"<Word(id={self.id}, chinese='{self.chinese}', english='{self.english}')>"

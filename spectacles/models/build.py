"""builds table."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from spectacles.core.database import Base


class Build(Base):
    __tablename__ = "builds"

    build_id: Mapped[str] = mapped_column(Text, primary_key=True)
    build_number: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

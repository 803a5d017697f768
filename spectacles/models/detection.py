"""detections table — one row per build sighting on a branch."""

from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, ForeignKey, Index, Text, desc, func
from sqlalchemy.orm import Mapped, mapped_column

from spectacles.core.database import Base
from spectacles.timeline.models import Branch

discord_branch_enum = Enum(
    *(branch.value for branch in Branch),
    name="discord_branch",
)


class Detection(Base):
    __tablename__ = "detections"

    # Insertion order; breaks ties between identical detected_at values.
    id: Mapped[int] = mapped_column(BigInteger, primary_key=True, autoincrement=True)
    build_id: Mapped[str] = mapped_column(
        Text,
        ForeignKey("builds.build_id", ondelete="CASCADE"),
        nullable=False,
    )
    branch: Mapped[str] = mapped_column(discord_branch_enum, nullable=False)
    detected_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_detections_branch_detected", "branch", desc("detected_at")),
        Index("idx_detections_detected", desc("detected_at")),
        Index("idx_detections_build", "build_id"),
    )

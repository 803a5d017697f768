"""assets and build_assets tables."""

from typing import Optional

from sqlalchemy import Boolean, Enum, ForeignKey, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from spectacles.core.database import Base

surface_script_type_enum = Enum(
    "chunkloader", "classes", "vendor", "entrypoint",
    name="surface_script_type",
)


class Asset(Base):
    __tablename__ = "assets"

    name: Mapped[str] = mapped_column(Text, primary_key=True)
    # Whether the asset is directly referenced by the app's HTML.
    surface: Mapped[bool] = mapped_column(
        Boolean, nullable=False, server_default=text("false")
    )
    surface_script_type: Mapped[Optional[str]] = mapped_column(surface_script_type_enum)
    script_chunk_id: Mapped[Optional[int]] = mapped_column(Integer)


class BuildAsset(Base):
    __tablename__ = "build_assets"

    build_id: Mapped[str] = mapped_column(
        Text, ForeignKey("builds.build_id", ondelete="CASCADE"), primary_key=True
    )
    asset_name: Mapped[str] = mapped_column(
        Text, ForeignKey("assets.name", ondelete="CASCADE"), primary_key=True
    )

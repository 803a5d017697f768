"""AssetDAO — assets / build_assets operations."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.dao.base import BaseDAO
from spectacles.models.asset import Asset, BuildAsset


class AssetDAO(BaseDAO[Asset]):
    model = Asset

    async def list_for_build(
        self,
        session: AsyncSession,
        build_id: str,
        surface_only: bool = False,
    ) -> list[Asset]:
        """Assets shipped with a build, by name (build page)."""
        stmt = (
            select(Asset)
            .join(BuildAsset, BuildAsset.asset_name == Asset.name)
            .where(BuildAsset.build_id == build_id)
            .order_by(Asset.name)
        )
        if surface_only:
            stmt = stmt.where(Asset.surface.is_(True))
        result = await session.execute(stmt)
        return list(result.scalars().all())

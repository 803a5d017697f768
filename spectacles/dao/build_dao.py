"""BuildDAO — builds table operations."""

from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.dao.base import BaseDAO
from spectacles.models.build import Build
from spectacles.timeline import models as timeline


class BuildDAO(BaseDAO[Build]):
    model = Build

    async def get_by_key(
        self, session: AsyncSession, key: timeline.BuildKey
    ) -> timeline.Build | None:
        """Fetch a build by number or id, whichever *key* carries (build page)."""
        if key.number is not None:
            row = await self.get_by_field(session, build_number=key.number)
        else:
            row = await self.get_by_id(session, key.id)
        if row is None:
            return None
        return timeline.Build(id=row.build_id, number=row.build_number)

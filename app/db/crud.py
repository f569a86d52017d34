# app/db/crud.py
# -----------------------------------------------------------------------------
# Read helpers for groups and their members
# -----------------------------------------------------------------------------
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.models import Group, GroupMember, User
from typing import Sequence


async def get_group(db: AsyncSession, group_id: int) -> Group | None:
    res = await db.execute(select(Group).where(Group.id == group_id))
    return res.scalar_one_or_none()


async def get_group_members(
    db: AsyncSession, group_id: int
) -> Sequence[tuple[GroupMember, User]]:
    """Members with their user rows, in join order."""
    stmt = (
        select(GroupMember, User)
        .join(User, User.id == GroupMember.user_id)
        .where(GroupMember.group_id == group_id)
        .order_by(GroupMember.id)
    )
    res = await db.execute(stmt)
    return res.tuples().all()

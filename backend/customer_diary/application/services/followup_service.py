"""Application service for diary follow-ups."""

from customer_diary.application.interfaces import DiaryRepository, FollowupRepository
from customer_diary.application.schemas import FollowupCreate, FollowupUpdate
from customer_diary.domain.entities import Followup, StaffUser
from customer_diary.domain.exceptions import EntityNotFoundError


class FollowupService:

    def __init__(
        self,
        diary_repository: DiaryRepository,
        followup_repository: FollowupRepository,
    ):
        self._diaries = diary_repository
        self._followups = followup_repository

    async def add_followup(
        self, diary_id: str, data: FollowupCreate, actor: StaffUser
    ) -> Followup:
        if await self._diaries.get_by_id(diary_id) is None:
            raise EntityNotFoundError("Diary", diary_id)
        followup = Followup(
            diary_id=diary_id,
            entry_type=data.entry_type,
            message=data.message,
            staff_code=data.staff_code or actor.staff_code,
        )
        return await self._followups.create(followup)

    async def update_followup(
        self, diary_id: str, followup_id: str, data: FollowupUpdate
    ) -> Followup:
        followup = await self._get_for_diary(diary_id, followup_id)
        if data.entry_type is not None:
            followup.entry_type = data.entry_type
        if data.message is not None:
            followup.message = data.message
        return await self._followups.update(followup)

    async def delete_followup(self, diary_id: str, followup_id: str) -> None:
        await self._get_for_diary(diary_id, followup_id)
        await self._followups.delete(followup_id)

    async def _get_for_diary(self, diary_id: str, followup_id: str) -> Followup:
        followup = await self._followups.get_by_id(followup_id)
        if followup is None or followup.diary_id != diary_id:
            raise EntityNotFoundError("Followup", followup_id)
        return followup

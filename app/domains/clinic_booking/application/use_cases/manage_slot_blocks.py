"""
Slot Block Use Cases

Administrator closures of single slots, whole days, or one doctor's day.
Blocking never touches existing appointments; it only removes slots from
future availability.
"""

import logging
from datetime import date

from app.core.domain import EntityNotFoundException, ValidationException
from app.domains.clinic_booking.application.ports import ISlotBlockRepository
from app.domains.clinic_booking.domain.services.slot_availability import SlotAvailabilityIndex
from app.domains.clinic_booking.domain.value_objects import SlotBlock, SlotKey, TimeLabel

logger = logging.getLogger(__name__)


class BlockSlotUseCase:
    def __init__(self, slot_block_repository: ISlotBlockRepository):
        self.block_repo = slot_block_repository

    async def execute(self, key: SlotKey, reason: str | None = None) -> SlotBlock:
        block = await self.block_repo.add(SlotBlock(key=key, reason=reason))
        logger.info(f"Slot blocked: {key}")
        return block


class UnblockSlotUseCase:
    def __init__(self, slot_block_repository: ISlotBlockRepository):
        self.block_repo = slot_block_repository

    async def execute(self, key: SlotKey) -> None:
        """
        Reopen a slot.

        Raises:
            EntityNotFoundException: If the slot was not blocked
        """
        if not await self.block_repo.remove(key):
            raise EntityNotFoundException(entity_type="SlotBlock", entity_id=str(key))
        logger.info(f"Slot unblocked: {key}")


class ListSlotBlocksUseCase:
    def __init__(self, slot_block_repository: ISlotBlockRepository):
        self.block_repo = slot_block_repository

    async def execute(self, block_date: date) -> list[SlotBlock]:
        return await self.block_repo.find_by_date(block_date)


class BlockDayUseCase:
    """
    Close many slots of one date in a single call.

    Without ``doctor_name`` every doctor's slots are closed; without
    ``times`` every operating time is. Closed weekdays have nothing to block.

    Example:
        ```python
        # Clinic holiday
        await use_case.execute(date(2025, 12, 25), reason="Holiday")
        # One doctor's afternoon
        await use_case.execute(day, doctor_name="Dr. Mike Chen", times=["1:00 PM", "1:30 PM"])
        ```
    """

    def __init__(self, slot_block_repository: ISlotBlockRepository, availability_index: SlotAvailabilityIndex):
        self.block_repo = slot_block_repository
        self.index = availability_index

    async def execute(
        self,
        block_date: date,
        doctor_name: str | None = None,
        times: list[str] | None = None,
        reason: str | None = None,
    ) -> list[SlotBlock]:
        """
        Block the matching template slots of a date.

        Returns:
            The stored blocks, in slot order

        Raises:
            ValidationException: Unknown doctor or a time outside the operating template
            MalformedTimeLabelException: A time is not a 12-hour label
        """
        template = self.index.template
        doctor = doctor_name.strip() if doctor_name else None
        if doctor is not None and doctor not in template.doctors:
            raise ValidationException(f"Unknown doctor: {doctor}", field="doctorName")

        labels = None
        if times:
            labels = {str(TimeLabel.parse(t)) for t in times}
            unknown = sorted(labels - set(template.times))
            if unknown:
                raise ValidationException(
                    f"Not an operating time: {', '.join(unknown)}",
                    field="times",
                    details={"allowed": list(template.times)},
                )

        blocks = [
            SlotBlock(key=SlotKey(pair_doctor, block_date, label), reason=reason)
            for _, pair_doctor, label in template.pairs(block_date)
            if (doctor is None or pair_doctor == doctor) and (labels is None or label in labels)
        ]
        if not blocks:
            logger.info(f"Nothing to block on {block_date} (clinic closed)")
            return []

        saved = await self.block_repo.add_many(blocks)
        logger.info(f"Blocked {len(saved)} slots on {block_date}" + (f" for {doctor}" if doctor else ""))
        return saved


class UnblockDayUseCase:
    def __init__(self, slot_block_repository: ISlotBlockRepository):
        self.block_repo = slot_block_repository

    async def execute(self, block_date: date, doctor_name: str | None = None) -> int:
        """Reopen every blocked slot of a date (optionally one doctor's); returns the count."""
        doctor = doctor_name.strip() if doctor_name else None
        removed = await self.block_repo.remove_by_date(block_date, doctor)
        logger.info(f"Unblocked {removed} slots on {block_date}" + (f" for {doctor}" if doctor else ""))
        return removed

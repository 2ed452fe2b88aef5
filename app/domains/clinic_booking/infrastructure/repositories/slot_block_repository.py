"""
Slot Block Repository Implementation
"""

from datetime import date

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.clinic_booking.application.ports.slot_block_repository import ISlotBlockRepository
from app.domains.clinic_booking.domain.value_objects import SlotBlock, SlotKey
from app.domains.clinic_booking.infrastructure.persistence.sqlalchemy.models import SlotBlockModel


class SQLAlchemySlotBlockRepository(ISlotBlockRepository):
    """SQLAlchemy implementation of slot block repository."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_date(self, block_date: date) -> list[SlotBlock]:
        result = await self.session.execute(
            select(SlotBlockModel).where(SlotBlockModel.block_date == block_date).order_by(SlotBlockModel.id)
        )
        return [self._to_value(m) for m in result.scalars().all()]

    async def find_by_key(self, key: SlotKey) -> SlotBlock | None:
        model = await self._find_model(key)
        return self._to_value(model) if model else None

    async def add(self, block: SlotBlock) -> SlotBlock:
        model = await self._find_model(block.key)
        if model is None:
            model = SlotBlockModel(
                doctor_name=block.key.doctor_name,
                block_date=block.key.appointment_date,
                block_time=block.key.appointment_time,
                reason=block.reason,
            )
            self.session.add(model)
        else:
            model.reason = block.reason  # type: ignore[assignment]

        await self.session.commit()
        await self.session.refresh(model)
        return self._to_value(model)

    async def remove(self, key: SlotKey) -> bool:
        model = await self._find_model(key)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.commit()
        return True

    async def add_many(self, blocks: list[SlotBlock]) -> list[SlotBlock]:
        models = []
        for block in blocks:
            model = await self._find_model(block.key)
            if model is None:
                model = SlotBlockModel(
                    doctor_name=block.key.doctor_name,
                    block_date=block.key.appointment_date,
                    block_time=block.key.appointment_time,
                    reason=block.reason,
                )
                self.session.add(model)
            else:
                model.reason = block.reason  # type: ignore[assignment]
            models.append(model)

        await self.session.commit()
        for model in models:
            await self.session.refresh(model)
        return [self._to_value(m) for m in models]

    async def remove_by_date(self, block_date: date, doctor_name: str | None = None) -> int:
        stmt = delete(SlotBlockModel).where(SlotBlockModel.block_date == block_date)
        if doctor_name is not None:
            stmt = stmt.where(SlotBlockModel.doctor_name == doctor_name)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount or 0

    async def _find_model(self, key: SlotKey) -> SlotBlockModel | None:
        result = await self.session.execute(
            select(SlotBlockModel).where(
                SlotBlockModel.doctor_name == key.doctor_name,
                SlotBlockModel.block_date == key.appointment_date,
                SlotBlockModel.block_time == key.appointment_time,
            )
        )
        return result.scalar_one_or_none()

    @staticmethod
    def _to_value(model: SlotBlockModel) -> SlotBlock:
        return SlotBlock(
            key=SlotKey(model.doctor_name, model.block_date, model.block_time),  # type: ignore[arg-type]
            reason=model.reason,  # type: ignore[arg-type]
        )

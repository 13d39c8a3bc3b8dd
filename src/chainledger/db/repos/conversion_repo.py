from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from chainledger.db.models.conversion import ConversionRecord
from chainledger.domain.enums import ImportStatus


def generate_import_id(chain: str, address: str, month: str | None = None) -> str:
    """`{chain}_{address[:10]}_{YYYY-MM}`, lowercased. Month defaults to the current UTC month."""
    month = month or datetime.now(timezone.utc).strftime("%Y-%m")
    return f"{chain.lower()}_{address[:10].lower()}_{month[:7]}"


class ConversionRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_by_id(self, record_id: str) -> Optional[ConversionRecord]:
        return await self._session.get(ConversionRecord, record_id)

    async def save(
        self,
        record_id: str,
        chain: str,
        address: str,
        native_symbol: str,
        input_files: list[str],
        output_file: Optional[str],
        row_count: int,
        date_from: str,
        date_to: str,
    ) -> ConversionRecord:
        """Insert a record, or replace the one with the same id (status resets to pending)."""
        record = await self.get_by_id(record_id)
        if record is None:
            record = ConversionRecord(id=record_id)
            self._session.add(record)
        record.chain = chain
        record.address = address
        record.native_symbol = native_symbol
        record.input_files = list(input_files)
        record.output_file = output_file
        record.row_count = row_count
        record.date_from = date_from
        record.date_to = date_to
        record.status = ImportStatus.PENDING.value
        await self._session.flush()
        await self._session.refresh(record)
        return record

    async def list_all(self, limit: int = 50, offset: int = 0) -> tuple[list[ConversionRecord], int]:
        """Newest first. Returns (records, total_count)."""
        count_result = await self._session.execute(select(func.count(ConversionRecord.id)))
        total = count_result.scalar() or 0

        result = await self._session.execute(
            select(ConversionRecord)
            .order_by(ConversionRecord.created_at.desc(), ConversionRecord.id)
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all()), total

    async def mark_imported(self, record_id: str) -> bool:
        record = await self.get_by_id(record_id)
        if record is None:
            return False
        record.status = ImportStatus.IMPORTED.value
        await self._session.flush()
        return True

from typing import Optional

from sqlalchemy import JSON, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from chainledger.db.session import Base, TimestampMixin
from chainledger.domain.enums import ImportStatus


class ConversionRecord(TimestampMixin, Base):
    """One conversion run, keyed by chain, address prefix and month."""
    __tablename__ = "conversions"

    id: Mapped[str] = mapped_column(String(100), primary_key=True)
    chain: Mapped[str] = mapped_column(String(50))
    address: Mapped[str] = mapped_column(String(42), index=True)
    native_symbol: Mapped[str] = mapped_column(String(20))
    input_files: Mapped[list[str]] = mapped_column(JSON, default=list)
    output_file: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    row_count: Mapped[int] = mapped_column(Integer, default=0)
    date_from: Mapped[str] = mapped_column(String(10), default="")
    date_to: Mapped[str] = mapped_column(String(10), default="")
    status: Mapped[str] = mapped_column(String(20), default=ImportStatus.PENDING.value)
    # status: pending -> imported

    @property
    def imported_to_cointracking(self) -> bool:
        return self.status == ImportStatus.IMPORTED.value

from typing import Optional

from sqlalchemy import BigInteger, Boolean, Enum, String
from sqlalchemy.orm import Mapped, mapped_column

from runtracker.core.database import Base
from runtracker.domain.machine import TARGET_TIME_MS, MachineStatus


class Machine(Base):
    __tablename__ = "machines"

    # Identity
    id: Mapped[str] = mapped_column(String(50), primary_key=True)
    display_id: Mapped[str] = mapped_column(String(50), nullable=False)

    # Run state
    status: Mapped[MachineStatus] = mapped_column(
        Enum(MachineStatus, name="machine_status_enum"),
        nullable=False,
        default=MachineStatus.PAUSED,
    )
    start_time: Mapped[Optional[int]] = mapped_column(BigInteger, nullable=True)
    accumulated_time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    target_time: Mapped[int] = mapped_column(BigInteger, nullable=False, default=TARGET_TIME_MS)

    # Outage recovery
    was_running_before_outage: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"<Machine id={self.id} status={self.status} accumulated={self.accumulated_time}>"

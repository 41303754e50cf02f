# -*- coding: utf-8 -*-
"""
app/modules/payments/models/student_ledger_models.py

Modelo ORM para student_master_table: un registro por alumno (email)
con cuatro slots de pago (monto, fecha, id de Razorpay) y agregados.

Solo el repositorio del ledger accede a las columnas payment_{n}_*;
el resto del código trabaja con LedgerRecord.slots.

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    BigInteger,
    CheckConstraint,
    Date,
    DateTime,
    Identity,
    Index,
    Integer,
    Numeric,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base


class StudentLedger(Base):
    """Registro maestro del alumno."""

    __tablename__ = "student_master_table"

    id: Mapped[int] = mapped_column(BigInteger, Identity(always=False), primary_key=True)

    email: Mapped[str] = mapped_column(Text, nullable=False)
    student_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    mobile: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    current_course_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    referred_by: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Slot 1
    payment_1_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    payment_1_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    payment_1_gateway_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Slot 2
    payment_2_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    payment_2_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    payment_2_gateway_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Slot 3
    payment_3_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    payment_3_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    payment_3_gateway_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Slot 4
    payment_4_amount: Mapped[Optional[Decimal]] = mapped_column(Numeric(12, 2), nullable=True)
    payment_4_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    payment_4_gateway_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    total_amount_paid: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        server_default="0",
    )
    total_payments_count: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        server_default="0",
    )

    enrollment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    last_payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    __table_args__ = (
        UniqueConstraint("email"),
        CheckConstraint(
            "total_payments_count BETWEEN 0 AND 4",
            name="total_payments_count_range",
        ),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<StudentLedger id={self.id} email={self.email} "
            f"payments={self.total_payments_count} total={self.total_amount_paid}>"
        )


# Unicidad sin distinguir mayúsculas (filas históricas con emails mixtos)
Index(
    "ux_student_master_table_lower_email",
    func.lower(StudentLedger.email),
    unique=True,
)


__all__ = ["StudentLedger"]

# Fin del archivo app/modules/payments/models/student_ledger_models.py

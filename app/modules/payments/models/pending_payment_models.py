# -*- coding: utf-8 -*-
"""
app/modules/payments/models/pending_payment_models.py

Modelo ORM para la tabla payments (registro creado antes de redirigir
al alumno a Razorpay y actualizado por el webhook).

Autor: CourseLedger
Fecha: 2026-10-12
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    CheckConstraint,
    Date,
    DateTime,
    Index,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.shared.database.base import Base


class PendingPayment(Base):
    """Intento de pago de un curso."""

    __tablename__ = "payments"

    # reference_id que viaja en notes.reference_id del pago
    id: Mapped[str] = mapped_column(Text, primary_key=True)

    email: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    mobile: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    course: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    amount: Mapped[Decimal] = mapped_column(
        Numeric(12, 2),
        nullable=False,
        doc="Monto en unidades mayores de la moneda.",
    )
    currency: Mapped[str] = mapped_column(String(3), nullable=False, server_default="INR")

    payment_status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        server_default="pending",
    )

    razorpay_payment_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    razorpay_order_id: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_method: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    failure_reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    payment_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    referred_by_email: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

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
        CheckConstraint(
            "payment_status IN ('pending', 'success', 'failed')",
            name="payment_status_valid",
        ),
        Index("ix_payments_email_status", "email", "payment_status"),
    )

    def __repr__(self) -> str:  # pragma: no cover
        return (
            f"<PendingPayment id={self.id} email={self.email} "
            f"status={self.payment_status} amount={self.amount} {self.currency}>"
        )


__all__ = ["PendingPayment"]

# Fin del archivo app/modules/payments/models/pending_payment_models.py

# -*- coding: utf-8 -*-
"""
app/modules/payments/__init__.py

Módulo de pagos y ledger de alumnos.

Este módulo gestiona:
- Recepción y verificación de webhooks de Razorpay
- Conciliación de pagos contra el registro maestro (4 slots por alumno)
- Reparación administrativa del registro a partir de la tabla payments

Estructura:
- enums: Estados de pago, monedas y resultados de conciliación
- models: Modelos ORM (PendingPayment, StudentLedger)
- schemas: Eventos, registros del ledger y reportes
- ledger: Reglas puras (slots, significancia, duplicados)
- services: Motor de conciliación, reparación, store y notificaciones
- repositories: Implementación SQLAlchemy del store
- facades: Webhooks (verificación, normalización, orquestación)
- routes: Endpoints FastAPI

Los submódulos se importan explícitamente para evitar ciclos:

    from app.modules.payments.services import ReconciliationService

Autor: CourseLedger
Fecha: 2026-10-12
"""

__all__: list[str] = []

# Fin del archivo app/modules/payments/__init__.py

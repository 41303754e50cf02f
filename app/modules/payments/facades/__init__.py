# -*- coding: utf-8 -*-
"""
app/modules/payments/facades/__init__.py

Punto de entrada del paquete de fachadas del módulo Payments.

Diseño:
- Este __init__ NO realiza imports automáticos de submódulos para
  evitar dependencias circulares. Cada facade se importa explícitamente:

      from app.modules.payments.facades.webhooks import handle_webhook
      from app.modules.payments.facades.webhooks.normalize import build_payment_event

Autor: CourseLedger
Fecha: 2026-10-12
"""

__all__: list[str] = []

# Fin del archivo app/modules/payments/facades/__init__.py

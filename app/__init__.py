# -*- coding: utf-8 -*-
"""
app/__init__.py

Paquete principal 'app' del backend del ledger de alumnos.

Autor: CourseLedger
Fecha: 2026-10-12
"""

# Fin del archivo app/__init__.py

# app/shared/__init__.py
"""
Capa compartida del backend: configuración, base de datos y
autenticación de servicio interno.

No inicializa settings en import-time para evitar efectos colaterales
durante la recolección de tests.
"""

from app.shared.config.config_loader import get_settings

__all__ = ["get_settings"]
# fin del archivo

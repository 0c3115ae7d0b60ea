"""
Servicios de aplicacion.

Contiene la orquestacion periodica de los casos de uso de sincronizacion.
"""
from bhop_records.application.services.sync_scheduler import SyncScheduler

__all__ = ["SyncScheduler"]

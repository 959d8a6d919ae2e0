from .dashboard import DashboardView, Liveness
from .health import HealthStatus, ServiceHealth
from .system import CpuLoad, DiskVolume, MemoryUsage, OsIdentity, SystemSnapshot

__all__ = [
    "CpuLoad",
    "DashboardView",
    "DiskVolume",
    "HealthStatus",
    "Liveness",
    "MemoryUsage",
    "OsIdentity",
    "ServiceHealth",
    "SystemSnapshot",
]

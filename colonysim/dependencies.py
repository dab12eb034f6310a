import threading
import uuid

from colonysim.services.colony_manager import ColonyManager


class EmpireRegistry:
    """In-memory map of empire id → that empire's ColonyManager."""

    def __init__(self) -> None:
        self._managers: dict[uuid.UUID, ColonyManager] = {}
        self._lock = threading.Lock()

    def get(self, empire_id: uuid.UUID) -> ColonyManager | None:
        return self._managers.get(empire_id)

    def get_or_create(self, empire_id: uuid.UUID) -> ColonyManager:
        with self._lock:
            manager = self._managers.get(empire_id)
            if manager is None:
                manager = ColonyManager(empire_id)
                self._managers[empire_id] = manager
            return manager


_registry = EmpireRegistry()


def get_registry() -> EmpireRegistry:
    return _registry

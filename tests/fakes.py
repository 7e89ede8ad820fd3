"""In-memory stand-ins for the home automation host."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from indoorair.accessory.hap import (
    Characteristic,
    GetHandler,
    HostAccessory,
    HostAPI,
    HostService,
    ServiceType,
)

SAMPLE_PAYLOAD = {
    "eco2": 1500,
    "tvoc": 300,
    "humidity": 45.2,
    "temperature": 21.5,
    "pressure": 1013,
    "gas_kohms": 50,
    "aqi": 4,
}


class FakeService(HostService):
    """In-memory service recording handlers and pushed values."""

    def __init__(self, service_type: ServiceType, display_name: str):
        super().__init__(service_type, display_name)
        self.handlers: Dict[Characteristic, GetHandler] = {}
        self.values: Dict[Characteristic, Any] = {}
        self.updates: List[tuple] = []

    def on_get(self, characteristic, handler):
        self.handlers[characteristic] = handler
        return self

    def set_characteristic(self, characteristic, value):
        self.values[characteristic] = value
        return self

    def update_characteristic(self, characteristic, value):
        self.values[characteristic] = value
        self.updates.append((characteristic, value))
        return self

    def get(self, characteristic: Characteristic) -> Any:
        return self.handlers[characteristic]()


class FakeAccessory(HostAccessory):
    def __init__(self, display_name: str, uuid: str):
        super().__init__(display_name, uuid)
        self.services: Dict[ServiceType, FakeService] = {}

    def get_service(self, service_type):
        return self.services.get(service_type)

    def add_service(self, service_type, display_name=None):
        service = FakeService(service_type, display_name or self.display_name)
        self.services[service_type] = service
        return service


class FakeHost(HostAPI):
    def __init__(self, cached: Optional[List[FakeAccessory]] = None):
        self.cached = cached or []
        self.created_services: List[FakeService] = []
        self.registered: List[HostAccessory] = []

    def create_service(self, service_type, display_name):
        service = FakeService(service_type, display_name)
        self.created_services.append(service)
        return service

    def create_accessory(self, display_name, uuid):
        return FakeAccessory(display_name, uuid)

    def register_accessories(self, accessories):
        self.registered.extend(accessories)

    def cached_accessories(self):
        return list(self.cached)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

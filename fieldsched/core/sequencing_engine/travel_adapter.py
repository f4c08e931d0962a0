"""
Adapter de tiempos de viaje para el secuenciador.
Implementación por defecto: Haversine + velocidad media constante (sin grafo de calles).
"""

import math
from typing import Protocol

from fieldsched.domain.constraints import SequencingOptions
from fieldsched.domain.models import Resource, Task

EARTH_RADIUS_KM = 6371.0


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance in km. NaN in, NaN out."""
    lat1_r = math.radians(lat1)
    lat2_r = math.radians(lat2)
    dlat = math.radians(lat2 - lat1)
    dlng = math.radians(lng2 - lng1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(lat1_r) * math.cos(lat2_r) * math.sin(dlng / 2) ** 2
    )
    # Antípodas: el redondeo puede dejar a > 1. min(nan, 1.0) sigue siendo nan.
    c = 2 * math.asin(min(math.sqrt(a), 1.0))
    return EARTH_RADIUS_KM * c


class TravelAdapter(Protocol):
    """Protocolo para tiempo de viaje (min) entre dos puntos."""

    def tt_min(self, lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        ...


class HaversineTravelAdapter:
    """tt_min = distancia_km / speed_kmh * 60."""

    def __init__(self, speed_kmh: float = 40.0):
        self.speed_kmh = speed_kmh

    def tt_min(self, lat1: float, lng1: float, lat2: float, lng2: float) -> float:
        km = haversine_km(lat1, lng1, lat2, lng2)
        return (km / self.speed_kmh) * 60.0


def home_leg_minutes(
    resource: Resource, first: Task, adapter: TravelAdapter
) -> float:
    """Casa -> primera tarea. Sin tope; 0 si falta alguna de las dos ubicaciones."""
    if not (resource.has_home and first.has_location):
        return 0.0
    return adapter.tt_min(resource.home_lat, resource.home_lng, first.lat, first.lng)


def task_leg_minutes(
    current: Task, nxt: Task, adapter: TravelAdapter, options: SequencingOptions
) -> float:
    """Tarea -> tarea: tope max_travel_minutes, o default_travel_minutes si falta ubicación."""
    if not (current.has_location and nxt.has_location):
        return options.default_travel_minutes
    return min(
        adapter.tt_min(current.lat, current.lng, nxt.lat, nxt.lng),
        options.max_travel_minutes,
    )

"""
Fieldsched visual debug. Folium only. No FastAPI. Debug-only.
"""

import folium
from typing import List

from fieldsched.domain.models import Resource, SequenceResult

_COLORS = [
    "red", "blue", "green", "purple", "orange", "darkred", "lightred",
    "beige", "darkblue", "darkgreen", "cadetblue", "darkpurple", "pink",
]


def visualize_schedule(result: SequenceResult, resources: List[Resource]) -> folium.Map:
    """
    Plot resource homes (house icons), each resource's day as a colored polyline
    home -> task 1 -> task 2 ..., and one marker per located task with its start time.
    Tasks without location are skipped on the map.
    """
    resources_by_id = {r.resource_id: r for r in resources}

    center = (40.42, -3.70)
    for schedule in result.schedules.values():
        located = [e.task for e in schedule.entries if e.task.has_location]
        if located:
            center = (located[0].lat, located[0].lng)
            break

    m = folium.Map(location=center, zoom_start=11)

    for i, (rid, schedule) in enumerate(result.schedules.items()):
        color = _COLORS[i % len(_COLORS)]
        coords = []
        resource = resources_by_id.get(rid)
        if resource is not None and resource.has_home:
            coords.append((resource.home_lat, resource.home_lng))
            folium.Marker(
                (resource.home_lat, resource.home_lng),
                popup=f"Resource {rid}: home",
                icon=folium.Icon(color=color, icon="home", prefix="fa"),
            ).add_to(m)

        for order, entry in enumerate(schedule.entries, start=1):
            task = entry.task
            if not task.has_location:
                continue
            coords.append((task.lat, task.lng))
            label = (
                f"{rid} #{order} task {task.task_id}: "
                f"{entry.start:%H:%M} ({entry.duration_minutes:.0f} min, "
                f"travel {entry.travel_minutes:.0f} min)"
            )
            folium.CircleMarker(
                location=(task.lat, task.lng),
                radius=7,
                color=color,
                fill=True,
                fill_opacity=0.8,
                popup=label,
            ).add_to(m)

        if len(coords) > 1:
            folium.PolyLine(coords, color=color, weight=4, opacity=0.8).add_to(m)

    return m

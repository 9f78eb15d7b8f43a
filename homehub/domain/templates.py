from __future__ import annotations

from dataclasses import dataclass

from .enums import Room, TaskFrequency


@dataclass(frozen=True)
class TaskTemplate:
    title: str
    estimated_minutes: int
    frequency: TaskFrequency


ROOM_TEMPLATES: dict[Room, tuple[TaskTemplate, ...]] = {
    Room.KITCHEN: (
        TaskTemplate("Wash dishes", 15, TaskFrequency.DAILY),
        TaskTemplate("Clean the stovetop", 10, TaskFrequency.DAILY),
        TaskTemplate("Clean the fridge", 20, TaskFrequency.WEEKLY),
        TaskTemplate("Clean the oven", 30, TaskFrequency.MONTHLY),
        TaskTemplate("Empty the dishwasher", 5, TaskFrequency.DAILY),
    ),
    Room.BATHROOM: (
        TaskTemplate("Clean the sink", 5, TaskFrequency.DAILY),
        TaskTemplate("Clean the shower/bathtub", 15, TaskFrequency.WEEKLY),
        TaskTemplate("Clean the toilet", 10, TaskFrequency.WEEKLY),
        TaskTemplate("Clean mirrors and surfaces", 10, TaskFrequency.WEEKLY),
        TaskTemplate("Change towels", 5, TaskFrequency.WEEKLY),
    ),
    Room.BEDROOM: (
        TaskTemplate("Make the bed", 5, TaskFrequency.DAILY),
        TaskTemplate("Organize clothes", 15, TaskFrequency.WEEKLY),
        TaskTemplate("Dust", 10, TaskFrequency.WEEKLY),
        TaskTemplate("Change bed sheets", 15, TaskFrequency.WEEKLY),
    ),
    Room.LIVING: (
        TaskTemplate("Dust", 15, TaskFrequency.WEEKLY),
        TaskTemplate("Vacuum", 20, TaskFrequency.WEEKLY),
        TaskTemplate("Organize pillows and blankets", 5, TaskFrequency.DAILY),
        TaskTemplate("Clean windows", 30, TaskFrequency.MONTHLY),
    ),
    Room.OTHER: (
        TaskTemplate("Do laundry", 30, TaskFrequency.WEEKLY),
        TaskTemplate("Iron", 45, TaskFrequency.WEEKLY),
        TaskTemplate("Take out trash", 5, TaskFrequency.WEEKLY),
        TaskTemplate("Check bills", 10, TaskFrequency.MONTHLY),
    ),
}

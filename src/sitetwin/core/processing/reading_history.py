"""
Fixed-capacity ring buffer of (timestamp, value) readings, one per live sensor,
backing the sensor charts.
"""
from typing import Dict, Iterable, List, Tuple

from sitetwin.core.models.sensor_enum import SensorId


class ReadingBuffer:
    """
    Circular buffer of (time, value) tuples.
    - O(1) append, overwrites oldest when full
    - get_all() returns entries oldest first
    """

    __slots__ = ('capacity', 'buffer', 'write_index', 'count')

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.buffer: List[Tuple[float, float]] = [(0.0, 0.0)] * capacity
        self.write_index = 0
        self.count = 0

    def append(self, time: float, value: float) -> None:
        self.buffer[self.write_index] = (time, value)
        self.write_index = (self.write_index + 1) % self.capacity
        if self.count < self.capacity:
            self.count += 1

    def get_all(self) -> List[Tuple[float, float]]:
        start = (self.write_index - self.count) % self.capacity
        return [self.buffer[(start + i) % self.capacity] for i in range(self.count)]

    def is_full(self) -> bool:
        return self.count == self.capacity

    def size(self) -> int:
        return self.count

    def clear(self) -> None:
        self.write_index = 0
        self.count = 0


class ReadingHistory:
    """Chart history for every live sensor."""

    def __init__(self, sensor_ids: Iterable[SensorId], capacity: int = 30):
        self.capacity = capacity
        self.buffers: Dict[SensorId, ReadingBuffer] = {
            sensor_id: ReadingBuffer(capacity) for sensor_id in sensor_ids
        }

    def append(self, sensor_id: SensorId, time: float, value: float) -> None:
        self.buffers[sensor_id].append(time, value)

    def get(self, sensor_id: SensorId) -> List[Tuple[float, float]]:
        return self.buffers[sensor_id].get_all()

    def clear_all(self) -> None:
        for buffer in self.buffers.values():
            buffer.clear()

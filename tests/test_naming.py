"""
Tests for derivative name allocation.
"""
import re
import threading

from shrink_shared.naming import IdentityAllocator


class FixedClock:
    """Clock that returns scripted readings, repeating the last one."""

    def __init__(self, *readings):
        self.readings = list(readings)

    def __call__(self):
        if len(self.readings) > 1:
            return self.readings.pop(0)
        return self.readings[0]


class TestIdentityAllocator:

    def test_format(self):
        allocator = IdentityAllocator(clock=FixedClock(1700000000123456789))
        assert allocator.allocate('.jpg') == '1700000000123456789.jpg'

    def test_extension_verbatim(self):
        allocator = IdentityAllocator(clock=FixedClock(5))
        assert allocator.allocate('.JPEG') == '5.JPEG'

    def test_real_clock_names(self):
        allocator = IdentityAllocator()
        first = allocator.allocate('.png')
        second = allocator.allocate('.png')
        assert re.fullmatch(r'\d+\.png', first)
        assert first != second

    def test_repeated_clock_reading_does_not_collide(self):
        """Two calls in the same nanosecond still get distinct names."""
        allocator = IdentityAllocator(clock=FixedClock(1000))
        assert allocator.allocate('.jpg') == '1000.jpg'
        assert allocator.allocate('.jpg') == '1001.jpg'

    def test_clock_going_backwards(self):
        allocator = IdentityAllocator(clock=FixedClock(1000, 900, 2000))
        names = [allocator.allocate('.gif') for _ in range(3)]
        assert names == ['1000.gif', '1001.gif', '2000.gif']

    def test_concurrent_allocation_unique(self):
        allocator = IdentityAllocator(clock=FixedClock(42))
        names = []
        lock = threading.Lock()

        def worker():
            for _ in range(200):
                name = allocator.allocate('.webp')
                with lock:
                    names.append(name)

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(names) == 1600
        assert len(set(names)) == 1600

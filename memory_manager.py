from collections import namedtuple

from errors import FrameStateError, InvalidInput


MemoryMapRow = namedtuple(
    'MemoryMapRow',
    ['frame_number', 'starting_address', 'job_id', 'page_number', 'busy'],
)


class PhysicalMemory:
    def __init__(self, num_frames=4, page_size=100):
        if num_frames <= 0:
            raise InvalidInput(f"Frame count must be positive, got {num_frames}")
        if page_size <= 0:
            raise InvalidInput(f"Page size must be positive, got {page_size}")
        self.num_frames = num_frames
        self.page_size = page_size
        # Each frame stores (job_id, page_number) or None if free
        self.frames = [None] * num_frames

    def starting_address(self, frame_num):
        return frame_num * self.page_size

    def frame_is_free(self, frame_num):
        return self.frames[frame_num] is None

    def find_free_frame(self):
        for i, frame in enumerate(self.frames):
            if frame is None:
                return i
        return None

    def occupy(self, frame_num, job_id, page_number):
        if self.frames[frame_num] is not None:
            raise FrameStateError(f"Frame {frame_num} is busy")
        self.frames[frame_num] = (job_id, page_number)

    def vacate(self, frame_num):
        occupant = self.frames[frame_num]
        if occupant is None:
            raise FrameStateError(f"Frame {frame_num} is already free")
        self.frames[frame_num] = None
        return occupant

    def get_frame_info(self, frame_num):
        return self.frames[frame_num]

    def occupied_frames(self):
        return [i for i, frame in enumerate(self.frames) if frame is not None]

    def reset(self):
        self.frames = [None] * self.num_frames

    def snapshot(self):
        rows = []
        for i, frame in enumerate(self.frames):
            job_id, page_number = frame if frame is not None else (None, None)
            rows.append(MemoryMapRow(i, self.starting_address(i), job_id,
                                     page_number, frame is not None))
        return rows


class Statistics:
    def __init__(self):
        self.num_accesses = 0
        self.page_faults = 0
        self.page_hits = 0
        self.evictions = 0

    def record_hit(self):
        self.num_accesses += 1
        self.page_hits += 1

    def record_page_fault(self, evicted=False):
        self.num_accesses += 1
        self.page_faults += 1
        if evicted:
            self.evictions += 1

    @property
    def fail_ratio(self):
        if self.num_accesses == 0:
            return 0.0
        return self.page_faults / self.num_accesses

    @property
    def success_ratio(self):
        if self.num_accesses == 0:
            return 0.0
        return 1 - self.fail_ratio


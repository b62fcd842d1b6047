from collections import namedtuple

from errors import InvalidInput, UnknownPage


PageMapRow = namedtuple(
    'PageMapRow',
    ['job_id', 'page_number', 'size', 'page_frame_id', 'resident',
     'last_access_time', 'reference'],
)


class PageTableEntry:
    def __init__(self, page_number, size):
        self.page_number = page_number
        self.size = size
        self.page_frame_id = None  # None means not in memory
        self.resident = False
        self.last_access_time = 0  # For LRU (logical clock)
        self.reference = 0  # For LRU (8-bit aging mask)

    def is_valid(self):
        return self.resident

    def load(self, frame_num):
        self.page_frame_id = frame_num
        self.resident = True

    def clear(self):
        self.page_frame_id = None
        self.resident = False
        self.last_access_time = 0
        self.reference = 0


class PageTable:
    def __init__(self, job_id, pages):
        self.job_id = job_id
        self.entries = [PageTableEntry(page.number, page.size) for page in pages]

    def __len__(self):
        return len(self.entries)

    def get_entry(self, page_number):
        if not 0 <= page_number < len(self.entries):
            raise UnknownPage(self.job_id, page_number)
        return self.entries[page_number]

    def resident_entries(self):
        return [entry for entry in self.entries if entry.resident]

    def reset(self):
        for entry in self.entries:
            entry.clear()

    def snapshot(self):
        return [
            PageMapRow(self.job_id, entry.page_number, entry.size,
                       entry.page_frame_id, entry.resident,
                       entry.last_access_time, entry.reference)
            for entry in self.entries
        ]


class JobTable:
    """
    Page Map Tables of every registered job.

    Entries are addressed by the composite key (job_id, page_number).
    """

    def __init__(self):
        self.jobs = {}  # job_id -> Job
        self.page_tables = {}  # job_id -> PageTable

    def add(self, job, page_table):
        if job.id in self.jobs:
            raise InvalidInput(f"Duplicate job id: {job.id}")
        self.jobs[job.id] = job
        self.page_tables[job.id] = page_table

    def get_job(self, job_id):
        if job_id not in self.jobs:
            raise UnknownPage(job_id, None)
        return self.jobs[job_id]

    def get_entry(self, job_id, page_number):
        if job_id not in self.page_tables:
            raise UnknownPage(job_id, page_number)
        return self.page_tables[job_id].get_entry(page_number)

    def all_pages(self):
        return [
            (job_id, entry.page_number)
            for job_id, page_table in self.page_tables.items()
            for entry in page_table.entries
        ]

    def total_pages(self):
        return sum(len(page_table) for page_table in self.page_tables.values())

    def resident_entries(self):
        return [
            entry
            for page_table in self.page_tables.values()
            for entry in page_table.resident_entries()
        ]

    def reset(self):
        for page_table in self.page_tables.values():
            page_table.reset()

    def snapshot(self):
        rows = []
        for page_table in self.page_tables.values():
            rows.extend(page_table.snapshot())
        return rows

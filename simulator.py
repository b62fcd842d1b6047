import argparse
import random
from collections import namedtuple

from errors import InvalidInput, PagingError
from memory_manager import PhysicalMemory, Statistics
from page_table import JobTable
from paging import Job, internal_fragmentation, split
from replacement import POLICIES, make_policy


DEFAULT_PAGE_SIZE = 100
DEFAULT_NUM_FRAMES = 4
DEFAULT_NUM_ACCESSES = 20
DEFAULT_ALGORITHMS = ('FIFO', 'LRU')

HIT = 'HIT'
FAULT = 'FAULT'

AccessRecord = namedtuple(
    'AccessRecord',
    ['access_index', 'job_id', 'page_number', 'outcome', 'evicted', 'frame'],
)
Snapshot = namedtuple('Snapshot', ['page_map', 'memory_map'])
SimulationResult = namedtuple(
    'SimulationResult', ['algorithm', 'stats', 'records', 'snapshot'],
)


def build_job_table(jobs, page_size):
    if page_size <= 0:
        raise InvalidInput(f"Page size must be positive, got {page_size}")
    if not jobs:
        raise InvalidInput("At least one job is required")

    job_table = JobTable()
    for job in jobs:
        job = Job(*job)
        pages, page_table = split(job, page_size)
        job_table.add(job, page_table)
    return job_table


class MemorySession:
    """
    Page Map Tables, Memory Map Table and replacement state of one run.

    access() is the only operation that changes residency: it resolves a
    hit or a fault, loading into the lowest free frame first and asking the
    policy for a victim only when memory is full.
    """

    def __init__(self, jobs, page_size=DEFAULT_PAGE_SIZE,
                 num_frames=DEFAULT_NUM_FRAMES, policy='FIFO'):
        self.page_size = page_size
        self.job_table = build_job_table(jobs, page_size)
        self.memory = PhysicalMemory(num_frames=num_frames, page_size=page_size)
        if isinstance(policy, str):
            policy = make_policy(policy)
        self.policy = policy
        self.current_time = 0
        self.stats = Statistics()

    def reset(self):
        self.job_table.reset()
        self.memory.reset()
        self.policy.reset()
        self.current_time = 0
        self.stats = Statistics()

    def access(self, job_id, page_number):
        entry = self.job_table.get_entry(job_id, page_number)

        self.current_time += 1
        self.policy.before_access(self)

        if entry.is_valid():
            self.stats.record_hit()
            self.policy.on_page_hit(self, entry.page_frame_id, entry)
            return AccessRecord(self.current_time, job_id, page_number, HIT,
                                None, entry.page_frame_id)

        frame_num, evicted = self.handle_page_fault(job_id, page_number, entry)
        return AccessRecord(self.current_time, job_id, page_number, FAULT,
                            evicted, frame_num)

    def handle_page_fault(self, job_id, page_number, entry):
        evicted = None
        frame_num = self.memory.find_free_frame()

        if frame_num is None:
            frame_num = self.policy.select_victim(self)
            evicted = self.evict_page(frame_num)

        self.stats.record_page_fault(evicted=evicted is not None)
        self.memory.occupy(frame_num, job_id, page_number)
        entry.load(frame_num)
        self.policy.on_page_loaded(self, frame_num, entry)
        return frame_num, evicted

    def evict_page(self, frame_num):
        job_id, page_number = self.memory.vacate(frame_num)
        self.job_table.get_entry(job_id, page_number).clear()
        return job_id, page_number

    def translate(self, job_id, address):
        job = self.job_table.get_job(job_id)
        if not 0 <= address < job.size:
            raise InvalidInput(
                f"Address {address} is outside job {job_id} (size {job.size})"
            )

        page_number, offset = divmod(address, self.page_size)
        record = self.access(job_id, page_number)
        physical_address = self.memory.starting_address(record.frame) + offset
        return page_number, offset, physical_address

    def snapshot(self):
        return Snapshot(self.job_table.snapshot(), self.memory.snapshot())


class VirtualMemorySimulator:

    def __init__(self, jobs, page_size=DEFAULT_PAGE_SIZE,
                 num_frames=DEFAULT_NUM_FRAMES, algorithm='FIFO', verbose=False):
        self.algorithm = algorithm.upper()
        self.session = MemorySession(jobs, page_size, num_frames,
                                     make_policy(algorithm))
        self.verbose = verbose

    def run_simulation(self, trace):
        trace = list(trace)
        if not trace:
            raise InvalidInput("Access trace must contain at least one access")

        if self.verbose:
            print(f"\n{'='*60}")
            print(f"Running {self.algorithm} algorithm on {len(trace)} accesses")
            print(f"{'='*60}")

        self.session.reset()
        records = []
        for job_id, page_number in trace:
            record = self.session.access(job_id, page_number)
            records.append(record)
            if self.verbose:
                self.print_access(record)

        if self.verbose:
            print(f"\nResults:")
            print_stats(self.session.stats)
            print(f"{'='*60}\n")

        return SimulationResult(self.algorithm, self.session.stats, records,
                                self.session.snapshot())

    def print_access(self, record):
        print(f"Access {record.access_index}: J{record.job_id}, "
              f"P{record.page_number} : {record.outcome}")
        if record.outcome == HIT:
            return
        if record.evicted is None:
            print(f"\tLoaded F{record.frame}")
        else:
            old_job_id, old_page_number = record.evicted
            print(f"\tReplacing P{old_page_number} of J{old_job_id} "
                  f"(F{record.frame}) with P{record.page_number} of "
                  f"J{record.job_id} ({self.algorithm})")


def random_trace(job_table, num_accesses, seed=None):
    if num_accesses <= 0:
        raise InvalidInput(f"Access count must be positive, got {num_accesses}")
    rng = random.Random(seed)
    pages = job_table.all_pages()
    return [rng.choice(pages) for _ in range(num_accesses)]


def load_trace(filename):
    trace = []
    with open(filename, 'r') as f:
        for line_num, line in enumerate(f, 1):
            line = line.split('#', 1)[0].strip()
            if not line:
                continue
            parts = line.split()
            if len(parts) != 2:
                raise InvalidInput(
                    f"{filename}:{line_num}: expected 'job_id page_number'"
                )
            try:
                trace.append((int(parts[0]), int(parts[1])))
            except ValueError:
                raise InvalidInput(
                    f"{filename}:{line_num}: job id and page number must be integers"
                ) from None
    return trace


def compare_policies(jobs, page_size, num_frames, trace,
                     algorithms=DEFAULT_ALGORITHMS, verbose=False):
    trace = list(trace)
    results = {}
    for algorithm in algorithms:
        simulator = VirtualMemorySimulator(jobs, page_size, num_frames,
                                           algorithm, verbose=verbose)
        results[simulator.algorithm] = simulator.run_simulation(trace)
    return results


def print_jobs(job_table, page_size, num_frames):
    print("\n--- Dividing Jobs into Pages ---")
    for job_id, page_table in job_table.page_tables.items():
        print(f"\nJob {job_id} divided into {len(page_table)} pages:")
        for entry in page_table.entries:
            print(f" Page {entry.page_number}: {entry.size} K")
        fragmentation = internal_fragmentation(page_table.entries, page_size)
        if fragmentation > 0:
            print(f" Internal Fragmentation in last page: {fragmentation} K")

    print(f"\nTotal pages across all jobs: {job_table.total_pages()}")
    print(f"Available memory frames: {num_frames}")


def print_memory_map(rows):
    print("MMT:")
    print(f"{'Frame':<8} {'Address':<10} {'Job':<6} {'Page':<6} {'Busy':<5}")
    for row in rows:
        job = '-' if row.job_id is None else row.job_id
        page = '-' if row.page_number is None else row.page_number
        print(f"{row.frame_number:<8} {row.starting_address:<10} "
              f"{job:<6} {page:<6} {int(row.busy):<5}")
    print()


def print_page_map(rows, algorithm='LRU'):
    # FIFO keeps no per-page recency, only the admission order of frames
    show_recency = algorithm != 'FIFO'
    job_id = None
    for row in rows:
        if row.job_id != job_id:
            job_id = row.job_id
            print(f"PMT for Job {job_id}:")
            header = f"{'Page':<6} {'Size':<6} {'Frame':<6}"
            if show_recency:
                header += f" {'Recency':<10}"
            print(header)
        frame = '-' if row.page_frame_id is None else row.page_frame_id
        line = f"{row.page_number:<6} {row.size:<6} {frame:<6}"
        if algorithm == 'AGING':
            line += f" {'0b' + format(row.reference, '08b'):<10}"
        elif show_recency:
            line += f" {row.last_access_time:<10}"
        print(line)
    print()


def print_stats(stats):
    print(f"Total Accesses: {stats.num_accesses}")
    print(f"Page Faults: {stats.page_faults}")
    print(f"Page Hits: {stats.page_hits}")
    print(f"Failure Ratio: {stats.fail_ratio:.2f}")
    print(f"Success Ratio: {stats.success_ratio:.2f}")


def print_summary(results):
    print("\n" + "="*70)
    print("SUMMARY OF ALL RESULTS")
    print("="*70)
    print(f"{'Algorithm':<10} {'Accesses':<10} {'Faults':<10} {'Hits':<10} "
          f"{'Fail':<10} {'Success':<10}")
    print("-" * 70)
    for algorithm, result in results.items():
        s = result.stats
        print(f"{algorithm:<10} {s.num_accesses:<10} {s.page_faults:<10} "
              f"{s.page_hits:<10} {s.fail_ratio:<10.2f} {s.success_ratio:<10.2f}")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Simulate demand paging with FIFO and LRU page replacement")
    parser.add_argument('-p', '--page-size', type=int, default=DEFAULT_PAGE_SIZE)
    parser.add_argument('-n', '--frames', type=int, default=DEFAULT_NUM_FRAMES)
    parser.add_argument('-j', '--jobs', type=int, nargs='+', required=True,
                        metavar='SIZE', help="job sizes, ids are assigned from 0")
    parser.add_argument('-a', '--accesses', type=int, default=DEFAULT_NUM_ACCESSES)
    parser.add_argument('-t', '--trace', help="file of 'job_id page_number' lines")
    parser.add_argument('-s', '--seed', type=int)
    parser.add_argument('--algorithms', nargs='+', default=list(DEFAULT_ALGORITHMS),
                        type=str.upper, choices=list(POLICIES))
    parser.add_argument('-v', '--verbose', action='store_true')
    parser.add_argument('--tables', action='store_true',
                        help="print final page and memory map tables")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    try:
        if args.frames <= 0:
            raise InvalidInput(f"Frame count must be positive, got {args.frames}")
        jobs = [Job(i, size) for i, size in enumerate(args.jobs)]
        job_table = build_job_table(jobs, args.page_size)
        if args.trace:
            trace = load_trace(args.trace)
        else:
            trace = random_trace(job_table, args.accesses, args.seed)

        print("Demand Paged Memory Allocation")
        print_jobs(job_table, args.page_size, args.frames)

        results = compare_policies(jobs, args.page_size, args.frames, trace,
                                   args.algorithms, verbose=args.verbose)
        for algorithm, result in results.items():
            print(f"\n--- {algorithm} Page Replacement ---")
            if args.tables:
                print_memory_map(result.snapshot.memory_map)
                print_page_map(result.snapshot.page_map, algorithm)
            print_stats(result.stats)

        print_summary(results)
    except (PagingError, OSError) as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())

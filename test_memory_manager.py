import pytest

from errors import FrameStateError, InvalidInput, PagingError
from memory_manager import PhysicalMemory, Statistics


def test_first_free_frame_scans_in_ascending_order():
    memory = PhysicalMemory(num_frames=3, page_size=100)
    assert memory.find_free_frame() == 0

    memory.occupy(0, 0, 0)
    memory.occupy(2, 0, 1)
    assert memory.find_free_frame() == 1
    assert not memory.frame_is_free(0)
    assert memory.frame_is_free(1)

    memory.occupy(1, 1, 0)
    assert memory.find_free_frame() is None
    assert memory.occupied_frames() == [0, 1, 2]


def test_vacate_returns_occupant():
    memory = PhysicalMemory(num_frames=2, page_size=100)
    memory.occupy(1, 4, 2)
    assert memory.occupied_frames() == [1]
    assert memory.vacate(1) == (4, 2)
    assert memory.frame_is_free(1)
    assert memory.occupied_frames() == []


def test_occupy_busy_frame_and_vacate_free_frame_fail():
    memory = PhysicalMemory(num_frames=1, page_size=100)
    with pytest.raises(FrameStateError):
        memory.vacate(0)
    memory.occupy(0, 0, 0)
    with pytest.raises(FrameStateError):
        memory.occupy(0, 0, 1)


def test_snapshot_rows():
    memory = PhysicalMemory(num_frames=2, page_size=64)
    memory.occupy(1, 3, 5)
    rows = memory.snapshot()
    assert rows[0].frame_number == 0
    assert rows[0].busy is False
    assert rows[0].job_id is None
    assert rows[1].starting_address == 64
    assert (rows[1].job_id, rows[1].page_number, rows[1].busy) == (3, 5, True)


@pytest.mark.parametrize('num_frames,page_size', [(0, 100), (-1, 100), (2, 0)])
def test_rejects_non_positive_configuration(num_frames, page_size):
    with pytest.raises(InvalidInput):
        PhysicalMemory(num_frames=num_frames, page_size=page_size)


def test_statistics_ratios():
    stats = Statistics()
    assert stats.fail_ratio == 0.0
    assert stats.success_ratio == 0.0

    stats.record_page_fault()
    stats.record_page_fault(evicted=True)
    stats.record_hit()
    stats.record_hit()

    assert stats.num_accesses == 4
    assert stats.page_faults == 2
    assert stats.page_hits == 2
    assert stats.evictions == 1
    assert stats.fail_ratio == 0.5
    assert stats.success_ratio == 0.5


def test_frame_state_errors_are_paging_errors():
    memory = PhysicalMemory(num_frames=1, page_size=100)
    memory.occupy(0, 2, 3)
    with pytest.raises(PagingError, match="Frame 0 is busy"):
        memory.occupy(0, 2, 4)
    # The failed occupy left the original occupant in place
    assert memory.get_frame_info(0) == (2, 3)

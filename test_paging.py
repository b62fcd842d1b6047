import math

import pytest

from errors import InvalidInput, UnknownPage
from page_table import JobTable
from paging import Job, internal_fragmentation, split


@pytest.mark.parametrize('size,page_size', [
    (250, 100), (300, 100), (1, 100), (99, 100), (100, 100), (1234, 7), (5, 1),
])
def test_split_page_count_and_sizes(size, page_size):
    pages, page_table = split(Job(3, size), page_size)

    assert len(pages) == math.ceil(size / page_size)
    assert sum(page.size for page in pages) == size
    assert [page.number for page in pages] == list(range(len(pages)))
    assert all(page.job_id == 3 for page in pages)
    assert all(page.size == page_size for page in pages[:-1])
    assert len(page_table) == len(pages)


def test_internal_fragmentation():
    pages, _ = split(Job(0, 250), 100)
    assert [page.size for page in pages] == [100, 100, 50]
    assert internal_fragmentation(pages, 100) == 50

    pages, _ = split(Job(0, 300), 100)
    assert [page.size for page in pages] == [100, 100, 100]
    assert internal_fragmentation(pages, 100) == 0


def test_split_produces_empty_entries():
    _, page_table = split(Job(7, 250), 100)
    for entry in page_table.entries:
        assert entry.page_frame_id is None
        assert entry.resident is False
        assert entry.last_access_time == 0
        assert entry.reference == 0


@pytest.mark.parametrize('size,page_size', [(100, 0), (100, -5), (0, 100), (-1, 100)])
def test_split_rejects_non_positive_sizes(size, page_size):
    with pytest.raises(InvalidInput):
        split(Job(0, size), page_size)


def test_job_table_uses_composite_key():
    job_table = JobTable()
    for job in (Job(0, 150000), Job(1, 300)):
        _, page_table = split(job, 100)
        job_table.add(job, page_table)

    # Job 0 page 1000 and job 1 page 0 must be different entries
    assert job_table.get_entry(0, 1000) is not job_table.get_entry(1, 0)
    assert job_table.get_entry(0, 1000).page_number == 1000
    assert job_table.total_pages() == 1503
    assert (0, 1499) in job_table.all_pages()


def test_job_table_unknown_page():
    job_table = JobTable()
    job = Job(0, 250)
    job_table.add(job, split(job, 100)[1])

    with pytest.raises(UnknownPage):
        job_table.get_entry(0, 3)
    with pytest.raises(UnknownPage):
        job_table.get_entry(0, -1)
    with pytest.raises(UnknownPage):
        job_table.get_entry(1, 0)


def test_job_table_rejects_duplicate_job_id():
    job_table = JobTable()
    job = Job(0, 250)
    job_table.add(job, split(job, 100)[1])
    with pytest.raises(InvalidInput):
        job_table.add(Job(0, 100), split(Job(0, 100), 100)[1])

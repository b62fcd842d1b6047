from collections import namedtuple

from errors import InvalidInput
from page_table import PageTable


Job = namedtuple('Job', ['id', 'size'])
Page = namedtuple('Page', ['job_id', 'number', 'size'])


def split(job, page_size):
    """
    Divide a job into pages of the given page size.

    Returns (pages, page_table). All pages are page_size long except the
    last one, which holds the remainder when the job size is not a
    multiple of the page size.
    """
    if page_size <= 0:
        raise InvalidInput(f"Page size must be positive, got {page_size}")
    if job.size <= 0:
        raise InvalidInput(f"Size of job {job.id} must be positive, got {job.size}")

    full_pages, remainder = divmod(job.size, page_size)
    pages = [Page(job.id, i, page_size) for i in range(full_pages)]
    if remainder != 0:
        pages.append(Page(job.id, full_pages, remainder))

    return pages, PageTable(job.id, pages)


def internal_fragmentation(pages, page_size):
    # Unused space in the last page; an exact fit wastes nothing
    if not pages:
        return 0
    return page_size - pages[-1].size

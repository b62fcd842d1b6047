class PagingError(Exception):
    pass


class InvalidInput(PagingError, ValueError):
    pass


class UnknownPage(PagingError, LookupError):
    def __init__(self, job_id, page_number):
        super().__init__(f"Unknown page: J{job_id} P{page_number}")
        self.job_id = job_id
        self.page_number = page_number


class NoVictimAvailable(PagingError, RuntimeError):
    pass


class FrameStateError(PagingError, RuntimeError):
    pass

from collections import deque

from errors import InvalidInput, NoVictimAvailable


class ReplacementPolicy:
    """
    Chooses which resident page leaves memory when no frame is free.

    The session calls the hooks at fixed points of every access; only
    select_victim has to be implemented by a policy.
    """

    name = 'BASE'

    def __init__(self):
        self.reset()

    def reset(self):
        pass

    def before_access(self, session):
        pass

    def on_page_loaded(self, session, frame_num, entry):
        pass

    def on_page_hit(self, session, frame_num, entry):
        pass

    def select_victim(self, session):
        raise NotImplementedError


class FifoPolicy(ReplacementPolicy):
    name = 'FIFO'

    def reset(self):
        # Frame numbers in the order they were (re)loaded
        self.admission_order = deque()

    def on_page_loaded(self, session, frame_num, entry):
        self.admission_order.append(frame_num)

    def select_victim(self, session):
        if not self.admission_order:
            raise NoVictimAvailable("FIFO queue is empty, no frame to replace")
        return self.admission_order.popleft()


class LruPolicy(ReplacementPolicy):
    name = 'LRU'

    def on_page_loaded(self, session, frame_num, entry):
        entry.last_access_time = session.current_time

    def on_page_hit(self, session, frame_num, entry):
        entry.last_access_time = session.current_time

    def select_victim(self, session):
        candidates = session.memory.occupied_frames()
        if not candidates:
            raise NoVictimAvailable("LRU: no frame found for replacement")

        def last_used(frame_num):
            job_id, page_number = session.memory.get_frame_info(frame_num)
            entry = session.job_table.get_entry(job_id, page_number)
            return (entry.last_access_time, frame_num)

        return min(candidates, key=last_used)


class AgingLruPolicy(ReplacementPolicy):
    """
    LRU approximation with an 8-bit reference mask per page.

    Every access shifts all resident masks right by one; touching a page
    sets its most significant bit. The smallest mask is the least recently
    used page.
    """

    name = 'AGING'
    MSB = 0x80

    def before_access(self, session):
        for entry in session.job_table.resident_entries():
            entry.reference >>= 1

    def on_page_loaded(self, session, frame_num, entry):
        entry.reference = self.MSB

    def on_page_hit(self, session, frame_num, entry):
        entry.reference |= self.MSB

    def select_victim(self, session):
        candidates = session.memory.occupied_frames()
        if not candidates:
            raise NoVictimAvailable("LRU: no frame found for replacement")

        def reference_bits(frame_num):
            job_id, page_number = session.memory.get_frame_info(frame_num)
            entry = session.job_table.get_entry(job_id, page_number)
            return (entry.reference, frame_num)

        return min(candidates, key=reference_bits)


POLICIES = {
    policy.name: policy
    for policy in (FifoPolicy, LruPolicy, AgingLruPolicy)
}


def make_policy(name):
    try:
        return POLICIES[name.upper()]()
    except KeyError:
        raise InvalidInput(
            f"Unknown algorithm: {name} (choose from {', '.join(POLICIES)})"
        ) from None

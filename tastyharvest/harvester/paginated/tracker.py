NUM_IGNORED_ROWS_BEFORE_STOPPING = 20


class ChangeTracker:
    """
    Counts records the host found unchanged since the last run.

    The counter only grows during a run. With an API that lists the newest
    changes first, reaching the threshold means the rest is already synced.
    """

    def __init__(self, threshold: int = NUM_IGNORED_ROWS_BEFORE_STOPPING):
        self.threshold = threshold
        self.unchanged = 0

    def record_outcome(self, changed: bool) -> None:
        if not changed:
            self.unchanged += 1

    def should_stop(self, partial_mode: bool) -> bool:
        return partial_mode and self.unchanged >= self.threshold

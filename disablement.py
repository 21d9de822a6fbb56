# disablement.py
from logic import clamp_to_day


class DisablementPolicy:
    """
    min_date / max_date: optional bounds (inclusive)
    predicate: optional callable(date) -> bool, extra disabled days
    """

    def __init__(self, min_date=None, max_date=None, predicate=None):
        self.min_date = clamp_to_day(min_date) if min_date is not None else None
        self.max_date = clamp_to_day(max_date) if max_date is not None else None
        self.predicate = predicate

    def is_disabled(self, d):
        d = clamp_to_day(d)
        if self.min_date is not None and d < self.min_date:
            return True
        if self.max_date is not None and d > self.max_date:
            return True
        # only asked about days the bounds already allow
        if self.predicate is not None:
            return bool(self.predicate(d))
        return False

    __call__ = is_disabled

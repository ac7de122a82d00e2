"""Runtime orchestration components."""

from .paging import PageExecutor, PagePlan, PagePlanner, PagePolicy
from .reconciler import reconcile, reverse_index, to_epoch_millis

__all__ = [
    "PageExecutor",
    "PagePlanner",
    "PagePolicy",
    "PagePlan",
    "reconcile",
    "reverse_index",
    "to_epoch_millis",
]

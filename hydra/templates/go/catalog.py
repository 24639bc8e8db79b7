"""
Go template catalog. Order is the tie-break order for candidates that score equally.
"""
from hydra.templates.go.context_cancel_strip import ContextCancelStripTemplate
from hydra.templates.go.defer_close_strip import DeferCloseStripTemplate
from hydra.templates.go.err_check_inversion import ErrCheckInversionTemplate
from hydra.templates.go.mutex_unlock_strip import MutexUnlockStripTemplate
from hydra.templates.go.negation_strip import NegationStripTemplate
from hydra.templates.go.off_by_one import OffByOneTemplate

TEMPLATES = (
    MutexUnlockStripTemplate(),
    ErrCheckInversionTemplate(),
    OffByOneTemplate(),
    DeferCloseStripTemplate(),
    NegationStripTemplate(),
    ContextCancelStripTemplate(),
)

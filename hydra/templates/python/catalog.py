"""
Python template catalog. Order is the tie-break order for candidates that score equally.
"""
from hydra.templates.python.boundary_flip import BoundaryFlipTemplate
from hydra.templates.python.error_swallow import ErrorSwallowTemplate
from hydra.templates.python.http_timeout_strip import HttpTimeoutStripTemplate
from hydra.templates.python.lock_strip import LockStripTemplate
from hydra.templates.python.logic_inversion import LogicInversionTemplate
from hydra.templates.python.negation_strip import NegationStripTemplate
from hydra.templates.python.none_deref import NoneDerefTemplate
from hydra.templates.python.off_by_one import OffByOneTemplate
from hydra.templates.python.path_traversal import PathTraversalTemplate

TEMPLATES = (
    OffByOneTemplate(),
    BoundaryFlipTemplate(),
    LogicInversionTemplate(),
    NoneDerefTemplate(),
    NegationStripTemplate(),
    ErrorSwallowTemplate(),
    HttpTimeoutStripTemplate(),
    PathTraversalTemplate(),
    LockStripTemplate(),
)

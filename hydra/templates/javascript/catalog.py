"""
JavaScript / TypeScript template catalog. Order is the tie-break order for
candidates that score equally.
"""
from hydra.templates.javascript.await_strip import AwaitStripTemplate
from hydra.templates.javascript.cors_wildcard import CorsWildcardTemplate
from hydra.templates.javascript.logic_inversion import LogicInversionTemplate
from hydra.templates.javascript.nullish_to_or import NullishToOrTemplate
from hydra.templates.javascript.off_by_one import OffByOneTemplate
from hydra.templates.javascript.strict_equality_loosen import StrictEqualityLoosenTemplate

TEMPLATES = (
    StrictEqualityLoosenTemplate(),
    LogicInversionTemplate(),
    NullishToOrTemplate(),
    AwaitStripTemplate(),
    OffByOneTemplate(),
    CorsWildcardTemplate(),
)

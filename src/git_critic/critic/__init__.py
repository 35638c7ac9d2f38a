"""Static analyzers that can be correlated with blame data."""

from .perlcritic import VERBOSE_FORMAT, PerlCritic, parse_violations

__all__ = ["PerlCritic", "VERBOSE_FORMAT", "parse_violations"]

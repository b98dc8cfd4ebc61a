"""Baby Care Report package.

This package contains the core modules: models, data_loader, aggregator,
averager, reporter.
"""

__all__ = [
    'models',
    'data_loader',
    'aggregator',
    'averager',
    'reporter'
]

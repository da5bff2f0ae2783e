"""svcmodels: versioned service descriptor resolution.

Subpackages:
    api       providers, chain, resolve, document loader
    registry  version manifest store
    config    YAML config + env overrides
"""

__version__ = "0.1.0"

"""LeadHub: multi-tenant lead import and broker assignment backend."""

__version__ = "1.0.0"

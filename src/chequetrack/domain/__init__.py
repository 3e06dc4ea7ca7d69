"""Domain layer for chequetrack application."""

# Services are imported lazily so that entities and errors can be imported
# from the utils and database layers without circular imports.
_SERVICES = {
    "AccountService": "chequetrack.domain.account",
    "InstrumentService": "chequetrack.domain.instrument",
    "ProjectionService": "chequetrack.domain.projection",
    "SummaryService": "chequetrack.domain.summary",
    "StatusTransitionService": "chequetrack.domain.transitions",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

"""Fiscal Budget Tracker.

Tracks budgeted activities across an October-September fiscal year. The
``engine`` subpackage holds the pure scheduling and budget-aggregation
logic; ``storage``, ``sync`` and ``reports`` are the collaborators that
load, persist and present the project collection around it.
"""

__version__ = "1.0.0"

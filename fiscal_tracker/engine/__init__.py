"""Fiscal-calendar scheduling and budget-aggregation engine.

Pure, synchronous computations over a snapshot of the project collection:
no I/O and no state retained between calls. Import the submodules directly
(``fiscal_calendar``, ``day_grid``, ``budget``, ``rescheduler``,
``month_lock``, ``timeline``).
"""

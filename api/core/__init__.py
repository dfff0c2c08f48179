"""
Shared, cross-cutting code for the API.

`core/` should contain small building blocks that every resource uses
(DB wiring, settings, error kinds, the filter/paging/query pipeline). Keep
resource-specific SQL and handlers in the corresponding resource package
(e.g. `offenders/`).
"""

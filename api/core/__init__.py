"""
Shared, cross-cutting code for the API.

`core/` holds small building blocks used by more than one feature
(DB wiring, result envelopes, logging). Feature-specific SQL and business
logic stays in the feature package (e.g. `podcasts/`).
"""

"""
Test suite for the table engine.

Focus areas:
- Cell value ordering
- Table building and structural invariants
- Transformations (select, sort, filter, join)
- Call log consistency
- Replay / rollback determinism
- Renderers, adapters and CLI
"""

"""
shelltable CLI

Commands:
- shelltable show - Load a CSV/JSON table, transform it and print it
- shelltable join - Equi-join two tables
- shelltable history list/replay - Inspect and replay a table's call history
- shelltable version
"""

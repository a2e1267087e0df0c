"""
crudgen - scaffolding generator for CRUD admin-panel modules.

Turns a declarative model description into Go source files for the
model/repository/service/handler layers, plus merge-ready snippets for
hand-maintained files (routes, wiring, migrations, permissions, frontend).
"""

__version__ = "0.1.0"

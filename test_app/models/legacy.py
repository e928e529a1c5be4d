# Left behind by an old refactoring; it no longer imports.
from test_app.models.archive import ArchivedOrder  # noqa: F401

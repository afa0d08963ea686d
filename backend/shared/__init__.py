"""
Shared module for cross-cutting concerns of the Kitchen OS back-office.

STRUCTURE:
- shared.config: Configuration
  - settings.py: Environment config (pydantic-settings)
  - logging.py: Structured logging
  - constants.py: Allergen/status/difficulty enums and their labels, limits

- shared.infrastructure: Database and request plumbing
  - db.py: SQLAlchemy sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and logging filter

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging
  - validators.py: URL and search-term validation
  - validation.py: Flat, human-readable validation error lists

- shared.rate_limit: slowapi limiter for report exports

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import Allergen, RecipeStatus
    from shared.utils.exceptions import NotFoundError, ExportError
"""

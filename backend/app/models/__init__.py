"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - User owns Sites; Site owns Articles, Automations and Sources
    - Child rows are removed by the database (ON DELETE CASCADE)

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.user import User  # noqa: F401
from app.models.site import Site  # noqa: F401
from app.models.article import Article  # noqa: F401
from app.models.automation import Automation  # noqa: F401
from app.models.source import Source  # noqa: F401

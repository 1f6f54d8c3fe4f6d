# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable building blocks:
# - pagination.py: Query processor - filter, sort and paginate records
# - application_store.py: In-memory record store
# - seed.py: Seed data loader (JSON file -> deduplicated records)
# - utils.py: Shared utilities (error base class, ID normalization)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.application_store import ApplicationStore
from lib.pagination import (
    collation_key,
    count_pages,
    filter_records,
    paginate,
    sort_records,
)
from lib.seed import SeedDataError, deduplicate, load_seed_data
from lib.utils import ApplicationError, InvalidIdError, normalize_id

__all__ = [
    # Store
    "ApplicationStore",
    # Query processing
    "paginate",
    "filter_records",
    "sort_records",
    "count_pages",
    "collation_key",
    # Seed data
    "load_seed_data",
    "deduplicate",
    "SeedDataError",
    # Utils
    "ApplicationError",
    "InvalidIdError",
    "normalize_id",
]
